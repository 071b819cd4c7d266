"""In-memory script repository for testing."""

from datetime import datetime
from typing import Optional

from scripthub.domain.model import CounterDelta, Script
from scripthub.domain.repository import ScriptRepository
from scripthub.domain.value import ScriptId


class InMemoryScriptRepository(ScriptRepository):
    """In-memory implementation of ScriptRepository for testing.

    Counter updates never await, so each one is atomic with respect to
    other coroutines on the same event loop.
    """

    def __init__(self) -> None:
        self._scripts: dict[ScriptId, Script] = {}

    async def find_by_id(self, script_id: ScriptId) -> Optional[Script]:
        """Find a script by ID."""
        return self._scripts.get(script_id)

    async def save(self, script: Script) -> Script:
        """Save or update a script."""
        self._scripts[script.id] = script
        return script

    async def apply_counter_delta(
        self, script_id: ScriptId, delta: CounterDelta
    ) -> Optional[Script]:
        """Add delta to the counters (vote count floored at 0)."""
        script = self._scripts.get(script_id)
        if script is None:
            return None
        updated = script.with_counters(script.counters.apply(delta)).model_copy(
            update={"updated_at": datetime.now()}
        )
        self._scripts[script_id] = updated
        return updated

    async def lock_for_update(self, script_id: ScriptId) -> Optional[Script]:
        """Load a script; no locking is needed on a single event loop."""
        return self._scripts.get(script_id)

    async def set_vote_counters(
        self, script_id: ScriptId, rating: int, vote_count: int
    ) -> Optional[Script]:
        """Overwrite rating and vote count."""
        script = self._scripts.get(script_id)
        if script is None:
            return None
        updated = script.model_copy(
            update={"rating": rating, "vote_count": vote_count}
        )
        self._scripts[script_id] = updated
        return updated
