"""Domain layer DI providers."""

from dishka import Scope, provide

from scripthub.config import ModerationSettings
from scripthub.domain.repository import (
    FlagRepository,
    ScriptRepository,
    UserRepository,
    VoteRepository,
)
from scripthub.domain.service import (
    FlagWeightBridge,
    ModerationCoordinator,
    RemovalPolicy,
    ThresholdPolicy,
    VotingEngine,
)
from scripthub.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_flag_weight_bridge(self) -> FlagWeightBridge:
        """Provide flag weight rules (stateless)."""
        return FlagWeightBridge()

    @provide(scope=Scope.APP)
    def get_voting_engine(self, flag_weight_bridge: FlagWeightBridge) -> VotingEngine:
        """Provide vote state machine (stateless)."""
        return VotingEngine(flag_weight_bridge=flag_weight_bridge)

    @provide
    def get_removal_policy(
        self, threshold_policy: ThresholdPolicy, user_repository: UserRepository
    ) -> RemovalPolicy:
        """Provide removal policy domain service."""
        return RemovalPolicy(
            threshold_policy=threshold_policy, user_repository=user_repository
        )

    @provide
    def get_moderation_coordinator(
        self,
        script_repository: ScriptRepository,
        vote_repository: VoteRepository,
        flag_repository: FlagRepository,
        voting_engine: VotingEngine,
        flag_weight_bridge: FlagWeightBridge,
        removal_policy: RemovalPolicy,
        moderation_settings: ModerationSettings,
    ) -> ModerationCoordinator:
        """Provide moderation coordinator domain service."""
        return ModerationCoordinator(
            script_repository=script_repository,
            vote_repository=vote_repository,
            flag_repository=flag_repository,
            voting_engine=voting_engine,
            flag_weight_bridge=flag_weight_bridge,
            removal_policy=removal_policy,
            max_attempts=moderation_settings.max_attempts,
        )
