"""Threshold policy infrastructure providers."""

from dishka import Scope, provide

from scripthub.adapter.policy import StaticThresholdPolicy
from scripthub.config import ModerationSettings
from scripthub.domain.service import ThresholdPolicy
from scripthub.util.di.base import ProviderBase


class PolicyProvider(ProviderBase):
    """Threshold policy component base."""

    __mock_component__ = "policy"


class ProdPolicyProvider(PolicyProvider):
    """Production threshold policy provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_threshold_policy(
        self, moderation_settings: ModerationSettings
    ) -> ThresholdPolicy:
        """Provide threshold policy.

        Returns:
            Policy returning the configured removal threshold

        Raises:
            PolicyError: If the configured threshold is not positive
        """
        return StaticThresholdPolicy(
            removal_threshold=moderation_settings.removal_threshold
        )
