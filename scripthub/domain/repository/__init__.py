"""Repository interfaces for scripthub domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from scripthub.domain.repository.flag import FlagRepository
from scripthub.domain.repository.script import ScriptRepository
from scripthub.domain.repository.user import UserRepository
from scripthub.domain.repository.vote import VoteRepository

__all__ = [
    "FlagRepository",
    "ScriptRepository",
    "UserRepository",
    "VoteRepository",
]
