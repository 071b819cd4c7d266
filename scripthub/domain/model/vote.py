"""Vote entity.

Votes are the ledger behind a script's rating and vote count.
Each user can hold at most one vote per script.
"""

from datetime import datetime

from pydantic import Field

from scripthub.domain.model.common import DomainModel
from scripthub.domain.value import ScriptId, UserId, VoteState


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per script (enforced by database unique constraint)
    - Flipping direction updates the record in place
    - Retracting deletes the record
    """

    script_id: ScriptId
    user_id: UserId
    is_upvote: bool
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def state(self) -> VoteState:
        return VoteState.from_upvote(self.is_upvote)
