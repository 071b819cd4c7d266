"""Domain model entities for scripthub."""

from scripthub.domain.model.counters import ContentCounters, CounterDelta
from scripthub.domain.model.flag import Flag
from scripthub.domain.model.script import Script
from scripthub.domain.model.user import User
from scripthub.domain.model.vote import Vote

__all__ = [
    "ContentCounters",
    "CounterDelta",
    "Flag",
    "Script",
    "User",
    "Vote",
]
