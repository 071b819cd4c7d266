"""PostgreSQL implementation of Flag repository."""

from typing import Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from scripthub.domain.model import Flag
from scripthub.domain.repository import FlagRepository
from scripthub.domain.value import ScriptId, UserId
from scripthub.persistence.mappers import flag_to_dict, row_to_flag
from scripthub.persistence.tables import flags_table


class PostgresFlagRepository(FlagRepository):
    """PostgreSQL implementation of FlagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_script_and_user(
        self, script_id: ScriptId, user_id: UserId
    ) -> Optional[Flag]:
        """Find a user's flag on a script."""
        stmt = select(flags_table).where(
            and_(
                flags_table.c.script_id == script_id,
                flags_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_flag(dict(row)) if row else None

    async def insert_if_absent(self, flag: Flag) -> bool:
        """Insert a flag with ON CONFLICT DO NOTHING."""
        stmt = (
            insert(flags_table)
            .values(**flag_to_dict(flag))
            .on_conflict_do_nothing(constraint="flags_pkey")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_script_and_user(
        self, script_id: ScriptId, user_id: UserId
    ) -> bool:
        """Delete a user's flag on a script."""
        stmt = delete(flags_table).where(
            and_(
                flags_table.c.script_id == script_id,
                flags_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
