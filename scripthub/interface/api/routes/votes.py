"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status

from scripthub.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from scripthub.domain.error import DomainError
from scripthub.domain.value import Rejection, VoteDirection
from scripthub.interface.api.dependencies import get_acting_user_id, parse_script_id
from scripthub.interface.api.errors import to_http_exception
from scripthub.util.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


@router.post("/scripts/{script_id}/vote/{direction}", response_model=CastVoteResponse)
async def cast_vote(
    script_id: str,
    direction: VoteDirection,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    user_id: str | None = Depends(get_acting_user_id),
) -> CastVoteResponse:
    """Vote up, vote down or retract a vote on a script.

    Rejected requests (own script, duplicate vote, nothing to retract)
    return 200 with ``accepted`` false and the reason.

    Args:
        script_id: Script UUID
        direction: up, down or unvote
        cast_vote_use_case: Cast vote use case from DI
        user_id: Acting user from the gateway header

    Returns:
        Vote outcome and the script's counters

    Raises:
        HTTPException: 401 if anonymous, 404 if the script does not exist,
            409 on an unresolved concurrent update, 503 if storage is down
    """
    script_id = parse_script_id(script_id)
    logger.debug(f"Vote {direction.value} on {script_id} by {user_id}")

    try:
        result = await cast_vote_use_case.execute(
            CastVoteRequest(script_id=script_id, user_id=user_id, direction=direction)
        )
    except DomainError as e:
        raise to_http_exception(e, "Vote")

    if result.reason is Rejection.AUTHENTICATION_REQUIRED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to vote",
        )
    return result
