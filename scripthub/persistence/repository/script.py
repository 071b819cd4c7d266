"""PostgreSQL implementation of Script repository."""

from typing import Optional

import logfire
from sqlalchemy import func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from scripthub.domain.model import CounterDelta, Script
from scripthub.domain.repository import ScriptRepository
from scripthub.domain.value import ScriptId
from scripthub.persistence.mappers import row_to_script, script_to_dict
from scripthub.persistence.tables import scripts_table


class PostgresScriptRepository(ScriptRepository):
    """PostgreSQL implementation of ScriptRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, script_id: ScriptId) -> Optional[Script]:
        """Find a script by ID."""
        with logfire.span("script_repository.find_by_id", script_id=str(script_id)):
            stmt = select(scripts_table).where(scripts_table.c.id == script_id)
            result = await self.session.execute(stmt)
            row = result.mappings().first()

            if not row:
                logfire.warn("Script not found", script_id=str(script_id))
                return None

            return row_to_script(dict(row))

    async def save(self, script: Script) -> Script:
        """Save a script (create or update metadata).

        Counters are only written on insert; updates go through
        apply_counter_delta.
        """
        script_dict = script_to_dict(script)
        stmt = insert(scripts_table).values(**script_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[scripts_table.c.id],
            set_={
                "name": stmt.excluded.name,
                "install_name": stmt.excluded.install_name,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return script

    async def apply_counter_delta(
        self, script_id: ScriptId, delta: CounterDelta
    ) -> Optional[Script]:
        """Atomically add delta to the counters.

        Single UPDATE ... SET col = col + :delta, so concurrent votes by
        different users never overwrite each other.
        """
        with logfire.span(
            "script_repository.apply_counter_delta",
            script_id=str(script_id),
            rating=delta.rating,
            vote_count=delta.vote_count,
            flag_weight=delta.flag_weight,
        ):
            stmt = (
                update(scripts_table)
                .where(scripts_table.c.id == script_id)
                .values(
                    rating=scripts_table.c.rating + delta.rating,
                    vote_count=func.greatest(
                        scripts_table.c.vote_count + delta.vote_count, 0
                    ),
                    flag_weight=scripts_table.c.flag_weight + delta.flag_weight,
                )
                .returning(scripts_table)
            )
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            await self.session.flush()
            return row_to_script(dict(row)) if row else None

    async def lock_for_update(self, script_id: ScriptId) -> Optional[Script]:
        """Load a script with SELECT ... FOR UPDATE."""
        stmt = (
            select(scripts_table)
            .where(scripts_table.c.id == script_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_script(dict(row)) if row else None

    async def set_vote_counters(
        self, script_id: ScriptId, rating: int, vote_count: int
    ) -> Optional[Script]:
        """Overwrite rating and vote count."""
        stmt = (
            update(scripts_table)
            .where(scripts_table.c.id == script_id)
            .values(rating=rating, vote_count=vote_count)
            .returning(scripts_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_script(dict(row)) if row else None
