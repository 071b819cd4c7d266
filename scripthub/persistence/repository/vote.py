"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional

from sqlalchemy import and_, case, delete, func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from scripthub.domain.model import Vote
from scripthub.domain.repository import VoteRepository
from scripthub.domain.value import ScriptId, UserId
from scripthub.persistence.mappers import row_to_vote, vote_to_dict
from scripthub.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    Conditional writes report their outcome through the affected row count.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _key(self, script_id: ScriptId, user_id: UserId):
        return and_(
            votes_table.c.script_id == script_id,
            votes_table.c.user_id == user_id,
        )

    async def find_by_script_and_user(
        self, script_id: ScriptId, user_id: UserId
    ) -> Optional[Vote]:
        """Find a user's vote on a script."""
        stmt = select(votes_table).where(self._key(script_id, user_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_vote(dict(row)) if row else None

    async def find_by_script(self, script_id: ScriptId) -> List[Vote]:
        """Find all votes on a script."""
        stmt = select(votes_table).where(votes_table.c.script_id == script_id)
        result = await self.session.execute(stmt)
        return [row_to_vote(dict(row)) for row in result.mappings().all()]

    async def insert_if_absent(self, vote: Vote) -> bool:
        """Insert a vote with ON CONFLICT DO NOTHING.

        A conflicting insert leaves the transaction usable, unlike a
        unique-constraint error.
        """
        stmt = (
            insert(votes_table)
            .values(**vote_to_dict(vote))
            .on_conflict_do_nothing(constraint="votes_pkey")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def update_direction(
        self,
        script_id: ScriptId,
        user_id: UserId,
        expected_is_upvote: bool,
        is_upvote: bool,
    ) -> bool:
        """Flip a vote if it still has the expected direction."""
        stmt = (
            update(votes_table)
            .where(self._key(script_id, user_id))
            .where(votes_table.c.is_upvote == expected_is_upvote)
            .values(is_upvote=is_upvote, updated_at=func.now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_if_matches(
        self, script_id: ScriptId, user_id: UserId, expected_is_upvote: bool
    ) -> bool:
        """Delete a vote if it still has the expected direction."""
        stmt = (
            delete(votes_table)
            .where(self._key(script_id, user_id))
            .where(votes_table.c.is_upvote == expected_is_upvote)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def tally(self, script_id: ScriptId) -> tuple[int, int]:
        """Compute rating and vote count in one aggregate query."""
        stmt = select(
            func.coalesce(
                func.sum(case((votes_table.c.is_upvote, 1), else_=-1)), 0
            ).label("rating"),
            func.count().label("vote_count"),
        ).where(votes_table.c.script_id == script_id)
        result = await self.session.execute(stmt)
        row = result.one()
        return int(row.rating), int(row.vote_count)
