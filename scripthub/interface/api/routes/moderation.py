"""Moderation routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status

from scripthub.application.usecase.moderation import (
    GetModerationStatusRequest,
    GetModerationStatusResponse,
    GetModerationStatusUseCase,
    ReconcileCountersRequest,
    ReconcileCountersResponse,
    ReconcileCountersUseCase,
)
from scripthub.domain.error import DomainError
from scripthub.interface.api.dependencies import get_acting_user_id, parse_script_id
from scripthub.interface.api.errors import to_http_exception

router = APIRouter(prefix="/scripts", tags=["moderation"], route_class=DishkaRoute)


@router.get("/{script_id}/moderation", response_model=GetModerationStatusResponse)
async def get_moderation_status(
    script_id: str,
    get_moderation_status_use_case: FromDishka[GetModerationStatusUseCase],
    user_id: str | None = Depends(get_acting_user_id),
) -> GetModerationStatusResponse:
    """Get the voting, flagging and removal state of a script.

    Works for anonymous users; removal details are only shown to moderators.

    Raises:
        HTTPException: 404 if the script does not exist
    """
    script_id = parse_script_id(script_id)
    try:
        return await get_moderation_status_use_case.execute(
            GetModerationStatusRequest(script_id=script_id, user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e, "Moderation status")


@router.post("/{script_id}/reconcile", response_model=ReconcileCountersResponse)
async def reconcile_counters(
    script_id: str,
    reconcile_counters_use_case: FromDishka[ReconcileCountersUseCase],
    user_id: str | None = Depends(get_acting_user_id),
) -> ReconcileCountersResponse:
    """Rebuild a script's rating and vote count from its votes.

    Requires a moderator or admin.

    Raises:
        HTTPException: 401 if anonymous, 403 if not a moderator,
            404 if the script does not exist
    """
    script_id = parse_script_id(script_id)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to reconcile counters",
        )

    try:
        result = await reconcile_counters_use_case.execute(
            ReconcileCountersRequest(script_id=script_id, user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e, "Reconcile")

    if result.changed:
        logfire.info(
            "Counters reconciled on request",
            script_id=script_id,
            user_id=user_id,
        )
    return result
