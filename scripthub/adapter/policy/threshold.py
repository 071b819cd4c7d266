"""Threshold policy implementations.

The removal threshold formula belongs to the moderation team; this service
only consumes it. Production reads a single configured threshold.
"""

import logfire

from scripthub.adapter.error import PolicyError
from scripthub.domain.model import Script, User
from scripthub.domain.service import ThresholdPolicy


class FixedThresholdPolicy(ThresholdPolicy):
    """Base class for threshold policies returning one value for every script.

    Provides type distinction for dependency injection.
    """

    def __init__(self, removal_threshold: int) -> None:
        if removal_threshold < 1:
            raise PolicyError(
                f"Removal threshold must be positive, got {removal_threshold}"
            )
        self.removal_threshold = removal_threshold

    async def threshold(self, script: Script, author: User | None) -> int:
        return self.removal_threshold


class StaticThresholdPolicy(FixedThresholdPolicy):
    """Threshold taken from MODERATION__REMOVAL_THRESHOLD."""

    async def threshold(self, script: Script, author: User | None) -> int:
        logfire.debug(
            "Static removal threshold",
            script_id=str(script.id),
            author_id=str(script.author_id),
            threshold=self.removal_threshold,
        )
        return self.removal_threshold


class MockThresholdPolicy(FixedThresholdPolicy):
    """Deterministic threshold policy for testing.

    Records every script it was consulted for.
    """

    DEFAULT_THRESHOLD = 2

    def __init__(self, removal_threshold: int = DEFAULT_THRESHOLD) -> None:
        super().__init__(removal_threshold)
        self.consulted: list[tuple[Script, User | None]] = []

    async def threshold(self, script: Script, author: User | None) -> int:
        self.consulted.append((script, author))
        return self.removal_threshold
