"""Set flag use case."""

from uuid import UUID

from pydantic import BaseModel

from scripthub.application.usecase.base import BaseUseCase
from scripthub.domain.service import ModerationCoordinator
from scripthub.domain.value import Rejection, ScriptId, UserId


class SetFlagRequest(BaseModel):
    """Set flag request."""

    script_id: str  # UUID string
    user_id: str | None = None  # Acting user, None if anonymous
    flagged: bool  # True to flag, False to unflag


class SetFlagResponse(BaseModel):
    """Set flag response."""

    script_id: str
    accepted: bool
    reason: Rejection | None = None
    flagged: bool
    flag_weight: int | None = None
    removable: bool = False


class SetFlagUseCase(BaseUseCase):
    """Use case for flagging or unflagging a script."""

    def __init__(self, moderation_coordinator: ModerationCoordinator) -> None:
        """Initialize set flag use case.

        Args:
            moderation_coordinator: Moderation domain service
        """
        self.moderation_coordinator = moderation_coordinator

    async def execute(self, request: SetFlagRequest) -> SetFlagResponse:
        """Execute set flag flow.

        Args:
            request: Set flag request

        Returns:
            Set flag response with flag weight and removability

        Raises:
            NotFoundError: If the script does not exist
            ConcurrencyConflictError: If concurrent requests kept racing
            InconsistentCountersError: If stored counters are corrupt
            StorageUnavailableError: If the database cannot be reached
        """
        script_id = ScriptId(UUID(request.script_id))
        user_id = UserId(UUID(request.user_id)) if request.user_id else None

        result = await self.moderation_coordinator.set_flag(
            script_id, user_id, request.flagged
        )

        return SetFlagResponse(
            script_id=request.script_id,
            accepted=result.accepted,
            reason=result.reason,
            flagged=result.flagged,
            flag_weight=result.counters.flag_weight if result.counters else None,
            removable=result.removable,
        )
