"""In-memory repository implementations for testing."""

from .flag import InMemoryFlagRepository
from .script import InMemoryScriptRepository
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryFlagRepository",
    "InMemoryScriptRepository",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
