"""Flag repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from scripthub.domain.model.flag import Flag
from scripthub.domain.value import ScriptId, UserId


class FlagRepository(ABC):
    """Repository for Flag entity.

    Writes are compare-and-swap like the vote ledger.
    """

    @abstractmethod
    async def find_by_script_and_user(
        self, script_id: ScriptId, user_id: UserId
    ) -> Optional[Flag]:
        """Find a user's flag on a script.

        Args:
            script_id: ID of the script
            user_id: The user's ID

        Returns:
            The flag if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert_if_absent(self, flag: Flag) -> bool:
        """Create a flag unless the user already flagged the script.

        Returns:
            True if created, False if a flag already existed
        """
        pass

    @abstractmethod
    async def delete_by_script_and_user(
        self, script_id: ScriptId, user_id: UserId
    ) -> bool:
        """Delete a user's flag on a script.

        Returns:
            True if a flag was deleted, False if none existed
        """
        pass
