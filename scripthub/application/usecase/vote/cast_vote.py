"""Cast vote use case."""

from uuid import UUID

from pydantic import BaseModel

from scripthub.application.usecase.base import BaseUseCase
from scripthub.domain.service import ModerationCoordinator
from scripthub.domain.value import (
    Rejection,
    ScriptId,
    UserId,
    VoteDirection,
    VoteState,
)


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    script_id: str  # UUID string
    user_id: str | None = None  # Acting user, None if anonymous
    direction: VoteDirection


class CastVoteResponse(BaseModel):
    """Cast vote response.

    Counters are None when the request was rejected before the script was
    read (anonymous user).
    """

    script_id: str
    accepted: bool
    reason: Rejection | None = None
    vote_state: VoteState
    rating: int | None = None
    vote_count: int | None = None
    flag_weight: int | None = None


class CastVoteUseCase(BaseUseCase):
    """Use case for voting up, voting down or retracting a vote on a script."""

    def __init__(self, moderation_coordinator: ModerationCoordinator) -> None:
        """Initialize cast vote use case.

        Args:
            moderation_coordinator: Moderation domain service
        """
        self.moderation_coordinator = moderation_coordinator

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            Cast vote response with the script's counters after the request

        Raises:
            NotFoundError: If the script does not exist
            ConcurrencyConflictError: If concurrent requests kept racing
            InconsistentCountersError: If stored counters are corrupt
            StorageUnavailableError: If the database cannot be reached
        """
        script_id = ScriptId(UUID(request.script_id))
        user_id = UserId(UUID(request.user_id)) if request.user_id else None

        result = await self.moderation_coordinator.cast_vote(
            script_id, user_id, request.direction
        )

        counters = result.counters
        return CastVoteResponse(
            script_id=request.script_id,
            accepted=result.accepted,
            reason=result.reason,
            vote_state=result.vote_state,
            rating=counters.rating if counters else None,
            vote_count=counters.vote_count if counters else None,
            flag_weight=counters.flag_weight if counters else None,
        )
