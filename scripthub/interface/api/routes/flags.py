"""Flag routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status

from scripthub.application.usecase.flag import (
    SetFlagRequest,
    SetFlagResponse,
    SetFlagUseCase,
)
from scripthub.domain.error import DomainError
from scripthub.domain.value import Rejection
from scripthub.interface.api.dependencies import get_acting_user_id, parse_script_id
from scripthub.interface.api.errors import to_http_exception

router = APIRouter(prefix="/scripts", tags=["flags"], route_class=DishkaRoute)


async def _set_flag(
    script_id: str,
    user_id: str | None,
    flagged: bool,
    set_flag_use_case: SetFlagUseCase,
) -> SetFlagResponse:
    script_id = parse_script_id(script_id)
    try:
        result = await set_flag_use_case.execute(
            SetFlagRequest(script_id=script_id, user_id=user_id, flagged=flagged)
        )
    except DomainError as e:
        raise to_http_exception(e, "Flag" if flagged else "Unflag")

    if result.reason is Rejection.AUTHENTICATION_REQUIRED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to flag",
        )
    return result


@router.put("/{script_id}/flag", response_model=SetFlagResponse)
async def flag_script(
    script_id: str,
    set_flag_use_case: FromDishka[SetFlagUseCase],
    user_id: str | None = Depends(get_acting_user_id),
) -> SetFlagResponse:
    """Flag a script as abusive.

    Returns 200 with ``accepted`` false when the user already flagged it or
    is its author.
    """
    return await _set_flag(script_id, user_id, True, set_flag_use_case)


@router.delete("/{script_id}/flag", response_model=SetFlagResponse)
async def unflag_script(
    script_id: str,
    set_flag_use_case: FromDishka[SetFlagUseCase],
    user_id: str | None = Depends(get_acting_user_id),
) -> SetFlagResponse:
    """Withdraw the user's flag on a script.

    Returns 200 with ``accepted`` false when there is no flag to withdraw.
    """
    return await _set_flag(script_id, user_id, False, set_flag_use_case)
