"""Script aggregate root.

Scripts are user-submitted user scripts and libraries. Only the identity
and reputation fields live here; the script body is stored elsewhere.
"""

from datetime import datetime

from pydantic import Field

from scripthub.domain.model.common import DomainModel
from scripthub.domain.model.counters import ContentCounters
from scripthub.domain.value import InstallName, ScriptId, UserId


class Script(DomainModel):
    """Script aggregate root.

    Business rules:
    - The author can never vote on or flag their own script
    - rating and vote_count always agree with the vote ledger
    - flag_weight only moves by explicit flags and the vote coupling rule
    """

    id: ScriptId
    author_id: UserId
    name: str = Field(min_length=1, max_length=255)
    install_name: InstallName
    rating: int = 0
    vote_count: int = Field(default=0, ge=0)
    flag_weight: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_lib(self) -> bool:
        return self.install_name.is_lib

    @property
    def counters(self) -> ContentCounters:
        return ContentCounters(
            rating=self.rating,
            vote_count=self.vote_count,
            flag_weight=self.flag_weight,
        )

    def is_authored_by(self, user_id: UserId) -> bool:
        return self.author_id == user_id

    def with_counters(self, counters: ContentCounters) -> "Script":
        """Return a copy carrying ``counters``."""
        return self.model_copy(
            update={
                "rating": counters.rating,
                "vote_count": counters.vote_count,
                "flag_weight": counters.flag_weight,
            }
        )
