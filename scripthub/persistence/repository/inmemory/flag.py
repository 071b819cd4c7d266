"""In-memory flag repository for testing."""

from typing import Optional

from scripthub.domain.model import Flag
from scripthub.domain.repository import FlagRepository
from scripthub.domain.value import ScriptId, UserId


class InMemoryFlagRepository(FlagRepository):
    """In-memory implementation of FlagRepository for testing."""

    def __init__(self) -> None:
        self._flags: dict[tuple[ScriptId, UserId], Flag] = {}

    async def find_by_script_and_user(
        self, script_id: ScriptId, user_id: UserId
    ) -> Optional[Flag]:
        """Find a user's flag on a script."""
        return self._flags.get((script_id, user_id))

    async def insert_if_absent(self, flag: Flag) -> bool:
        """Insert a flag unless one already exists."""
        key = (flag.script_id, flag.user_id)
        if key in self._flags:
            return False
        self._flags[key] = flag
        return True

    async def delete_by_script_and_user(
        self, script_id: ScriptId, user_id: UserId
    ) -> bool:
        """Delete a user's flag on a script."""
        return self._flags.pop((script_id, user_id), None) is not None
