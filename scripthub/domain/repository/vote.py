"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from scripthub.domain.model.vote import Vote
from scripthub.domain.value import ScriptId, UserId


class VoteRepository(ABC):
    """Repository for Vote entity.

    Writes are compare-and-swap: each one states what the caller last
    observed and reports whether the ledger still matched. A False return
    means a concurrent request by the same user got there first.
    """

    @abstractmethod
    async def find_by_script_and_user(
        self, script_id: ScriptId, user_id: UserId
    ) -> Optional[Vote]:
        """Find a user's vote on a script.

        Args:
            script_id: ID of the script
            user_id: The user's ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_script(self, script_id: ScriptId) -> List[Vote]:
        """Find all votes on a script.

        Args:
            script_id: ID of the script

        Returns:
            List of votes on the script
        """
        pass

    @abstractmethod
    async def insert_if_absent(self, vote: Vote) -> bool:
        """Create a vote unless the user already has one on the script.

        Args:
            vote: The vote to create

        Returns:
            True if created, False if a vote already existed
        """
        pass

    @abstractmethod
    async def update_direction(
        self,
        script_id: ScriptId,
        user_id: UserId,
        expected_is_upvote: bool,
        is_upvote: bool,
    ) -> bool:
        """Flip a vote's direction if it still has the expected direction.

        Args:
            script_id: ID of the script
            user_id: The user's ID
            expected_is_upvote: Direction the caller observed
            is_upvote: New direction

        Returns:
            True if updated, False if the vote changed or disappeared
        """
        pass

    @abstractmethod
    async def delete_if_matches(
        self, script_id: ScriptId, user_id: UserId, expected_is_upvote: bool
    ) -> bool:
        """Delete a vote if it still has the expected direction.

        Args:
            script_id: ID of the script
            user_id: The user's ID
            expected_is_upvote: Direction the caller observed

        Returns:
            True if deleted, False if the vote changed or disappeared
        """
        pass

    @abstractmethod
    async def tally(self, script_id: ScriptId) -> tuple[int, int]:
        """Compute rating and vote count from the ledger.

        Args:
            script_id: ID of the script

        Returns:
            (rating, vote_count) over all active votes
        """
        pass
