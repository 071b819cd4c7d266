"""PostgreSQL repository implementations."""

from scripthub.persistence.repository.flag import PostgresFlagRepository
from scripthub.persistence.repository.script import PostgresScriptRepository
from scripthub.persistence.repository.user import PostgresUserRepository
from scripthub.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresFlagRepository",
    "PostgresScriptRepository",
    "PostgresUserRepository",
    "PostgresVoteRepository",
]
