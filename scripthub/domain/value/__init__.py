"""Domain value objects for scripthub."""

from scripthub.domain.value.identifiers import ScriptId, UserId
from scripthub.domain.value.types import (
    InstallName,
    LedgerAction,
    Outcome,
    Rejection,
    UserName,
    UserRole,
    VoteDirection,
    VoteState,
)

__all__ = [
    # Identifiers
    "ScriptId",
    "UserId",
    # Types
    "InstallName",
    "LedgerAction",
    "Outcome",
    "Rejection",
    "UserName",
    "UserRole",
    "VoteDirection",
    "VoteState",
]
