"""Removal policy.

A script becomes removable once its flag weight reaches a threshold chosen
per author by an external threshold policy.
"""

from abc import ABC, abstractmethod

import logfire

from scripthub.domain.model import Script, User
from scripthub.domain.repository import UserRepository
from scripthub.domain.value.common import ValueObject

from .base import Service


class ThresholdPolicy(ABC):
    """Interface of the collaborator that owns the removal threshold formula."""

    @abstractmethod
    async def threshold(self, script: Script, author: User | None) -> int:
        """Flag weight at which ``script`` becomes removable.

        Args:
            script: The flagged script
            author: The script's author, None if the account no longer exists

        Returns:
            Threshold flag weight
        """
        pass


class RemovalAssessment(ValueObject):
    """Removability of a script at a given flag weight."""

    flag_weight: int
    threshold: int

    @property
    def removable(self) -> bool:
        return self.flag_weight >= self.threshold


class RemovalPolicy(Service):
    """Domain service comparing flag weight against the author's threshold.

    Never consulted on behalf of the script's author.
    """

    def __init__(
        self, threshold_policy: ThresholdPolicy, user_repository: UserRepository
    ) -> None:
        """Initialize removal policy.

        Args:
            threshold_policy: External threshold collaborator
            user_repository: User repository, used to resolve the author
        """
        self.threshold_policy = threshold_policy
        self.user_repository = user_repository

    async def assess(self, script: Script) -> RemovalAssessment:
        """Compute the removal threshold and removability of a script.

        Args:
            script: Script with current counters

        Returns:
            Removal assessment
        """
        with logfire.span("removal_policy.assess", script_id=str(script.id)):
            author = await self.user_repository.find_by_id(script.author_id)
            if author is None:
                logfire.warn(
                    "Author not found for threshold",
                    script_id=str(script.id),
                    author_id=str(script.author_id),
                )
            threshold = await self.threshold_policy.threshold(script, author)
            assessment = RemovalAssessment(
                flag_weight=script.flag_weight, threshold=threshold
            )
            logfire.info(
                "Removal assessed",
                script_id=str(script.id),
                flag_weight=script.flag_weight,
                threshold=threshold,
                removable=assessment.removable,
            )
            return assessment

    async def is_removable(self, script: Script) -> bool:
        """Whether the script's flag weight has reached its threshold."""
        return (await self.assess(script)).removable
