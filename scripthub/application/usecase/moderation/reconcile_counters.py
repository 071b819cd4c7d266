"""Reconcile counters use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from scripthub.application.usecase.base import BaseUseCase
from scripthub.domain.error import NotAuthorizedError
from scripthub.domain.repository import UserRepository
from scripthub.domain.service import ModerationCoordinator
from scripthub.domain.value import ScriptId, UserId


class ReconcileCountersRequest(BaseModel):
    """Reconcile counters request."""

    script_id: str  # UUID string
    user_id: str  # Acting moderator


class CountersSnapshot(BaseModel):
    """Counters at one point in time."""

    rating: int
    vote_count: int
    flag_weight: int


class ReconcileCountersResponse(BaseModel):
    """Reconcile counters response."""

    script_id: str
    changed: bool
    before: CountersSnapshot
    after: CountersSnapshot


class ReconcileCountersUseCase(BaseUseCase):
    """Use case for rebuilding a script's rating and vote count from its votes.

    Restricted to moderators and admins.
    """

    def __init__(
        self,
        moderation_coordinator: ModerationCoordinator,
        user_repository: UserRepository,
    ) -> None:
        """Initialize reconcile counters use case.

        Args:
            moderation_coordinator: Moderation domain service
            user_repository: User repository, used for the role check
        """
        self.moderation_coordinator = moderation_coordinator
        self.user_repository = user_repository

    async def execute(
        self, request: ReconcileCountersRequest
    ) -> ReconcileCountersResponse:
        """Execute reconcile counters flow.

        Args:
            request: Reconcile counters request

        Returns:
            Counters before and after reconciliation

        Raises:
            NotAuthorizedError: If the acting user is not a moderator
            NotFoundError: If the script does not exist
            StorageUnavailableError: If the database cannot be reached
        """
        script_id = ScriptId(UUID(request.script_id))
        user_id = UserId(UUID(request.user_id))

        user = await self.user_repository.find_by_id(user_id)
        if user is None or not user.role.can_moderate:
            logfire.warn(
                "Reconcile denied",
                script_id=request.script_id,
                user_id=request.user_id,
            )
            raise NotAuthorizedError("reconcile", request.script_id, request.user_id)

        result = await self.moderation_coordinator.reconcile_counters(script_id)

        return ReconcileCountersResponse(
            script_id=request.script_id,
            changed=result.changed,
            before=CountersSnapshot(**result.before.model_dump()),
            after=CountersSnapshot(**result.after.model_dump()),
        )
