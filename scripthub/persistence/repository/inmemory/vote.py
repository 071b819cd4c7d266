"""In-memory vote repository for testing."""

from datetime import datetime
from typing import List, Optional

from scripthub.domain.model import Vote
from scripthub.domain.repository import VoteRepository
from scripthub.domain.value import ScriptId, UserId


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[tuple[ScriptId, UserId], Vote] = {}

    async def find_by_script_and_user(
        self, script_id: ScriptId, user_id: UserId
    ) -> Optional[Vote]:
        """Find a user's vote on a script."""
        return self._votes.get((script_id, user_id))

    async def find_by_script(self, script_id: ScriptId) -> List[Vote]:
        """Find all votes on a script."""
        return [v for v in self._votes.values() if v.script_id == script_id]

    async def insert_if_absent(self, vote: Vote) -> bool:
        """Insert a vote unless the user already voted on the script."""
        key = (vote.script_id, vote.user_id)
        if key in self._votes:
            return False
        self._votes[key] = vote
        return True

    async def update_direction(
        self,
        script_id: ScriptId,
        user_id: UserId,
        expected_is_upvote: bool,
        is_upvote: bool,
    ) -> bool:
        """Flip a vote if it still has the expected direction."""
        vote = self._votes.get((script_id, user_id))
        if vote is None or vote.is_upvote != expected_is_upvote:
            return False
        self._votes[(script_id, user_id)] = vote.model_copy(
            update={"is_upvote": is_upvote, "updated_at": datetime.now()}
        )
        return True

    async def delete_if_matches(
        self, script_id: ScriptId, user_id: UserId, expected_is_upvote: bool
    ) -> bool:
        """Delete a vote if it still has the expected direction."""
        vote = self._votes.get((script_id, user_id))
        if vote is None or vote.is_upvote != expected_is_upvote:
            return False
        del self._votes[(script_id, user_id)]
        return True

    async def tally(self, script_id: ScriptId) -> tuple[int, int]:
        """Compute rating and vote count from the stored votes."""
        votes = await self.find_by_script(script_id)
        rating = sum(1 if v.is_upvote else -1 for v in votes)
        return rating, len(votes)
