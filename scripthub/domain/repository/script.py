"""Script repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from scripthub.domain.model import CounterDelta, Script
from scripthub.domain.value import ScriptId


class ScriptRepository(ABC):
    """Repository for Script aggregate.

    Defines the contract for script persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, script_id: ScriptId) -> Optional[Script]:
        """Find a script by ID.

        Args:
            script_id: The script's unique identifier

        Returns:
            The script if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, script: Script) -> Script:
        """Save a script (create or update).

        Not for counter changes: use apply_counter_delta so concurrent
        votes are never lost.

        Args:
            script: The script to save

        Returns:
            The saved script
        """
        pass

    @abstractmethod
    async def apply_counter_delta(
        self, script_id: ScriptId, delta: CounterDelta
    ) -> Optional[Script]:
        """Atomically add ``delta`` to the script's counters.

        Uses a storage-level increment so concurrent requests from different
        users never overwrite each other. The vote count is floored at 0.

        Args:
            script_id: The script ID
            delta: Counter changes to add

        Returns:
            The script with updated counters, None if it does not exist
        """
        pass

    @abstractmethod
    async def lock_for_update(self, script_id: ScriptId) -> Optional[Script]:
        """Load a script and hold it against concurrent counter updates.

        The lock lasts until the surrounding transaction ends.

        Args:
            script_id: The script ID

        Returns:
            The locked script, None if it does not exist
        """
        pass

    @abstractmethod
    async def set_vote_counters(
        self, script_id: ScriptId, rating: int, vote_count: int
    ) -> Optional[Script]:
        """Overwrite rating and vote count.

        Only for reconciliation while holding lock_for_update.

        Args:
            script_id: The script ID
            rating: Rating recomputed from the ledger
            vote_count: Vote count recomputed from the ledger

        Returns:
            The updated script, None if it does not exist
        """
        pass
