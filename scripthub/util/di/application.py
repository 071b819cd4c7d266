"""Application layer DI providers."""

from dishka import Scope, provide

from scripthub.application.usecase.flag import SetFlagUseCase
from scripthub.application.usecase.moderation import (
    GetModerationStatusUseCase,
    ReconcileCountersUseCase,
)
from scripthub.application.usecase.vote import CastVoteUseCase
from scripthub.domain.repository import (
    FlagRepository,
    ScriptRepository,
    UserRepository,
    VoteRepository,
)
from scripthub.domain.service import ModerationCoordinator, RemovalPolicy
from scripthub.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, moderation_coordinator: ModerationCoordinator
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(moderation_coordinator=moderation_coordinator)

    # Flag use cases
    @provide(scope=Scope.REQUEST)
    def get_set_flag_use_case(
        self, moderation_coordinator: ModerationCoordinator
    ) -> SetFlagUseCase:
        """Provide set flag use case."""
        return SetFlagUseCase(moderation_coordinator=moderation_coordinator)

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_get_moderation_status_use_case(
        self,
        script_repository: ScriptRepository,
        vote_repository: VoteRepository,
        flag_repository: FlagRepository,
        user_repository: UserRepository,
        removal_policy: RemovalPolicy,
    ) -> GetModerationStatusUseCase:
        """Provide get moderation status use case."""
        return GetModerationStatusUseCase(
            script_repository=script_repository,
            vote_repository=vote_repository,
            flag_repository=flag_repository,
            user_repository=user_repository,
            removal_policy=removal_policy,
        )

    @provide(scope=Scope.REQUEST)
    def get_reconcile_counters_use_case(
        self,
        moderation_coordinator: ModerationCoordinator,
        user_repository: UserRepository,
    ) -> ReconcileCountersUseCase:
        """Provide reconcile counters use case."""
        return ReconcileCountersUseCase(
            moderation_coordinator=moderation_coordinator,
            user_repository=user_repository,
        )
