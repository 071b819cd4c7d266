"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from scripthub.domain.model import Flag, Script, User, Vote
from scripthub.domain.value import (
    InstallName,
    ScriptId,
    UserId,
    UserName,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        name=UserName(row["name"]),
        role=UserRole(row["role"]),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "name": user.name.root,
        "role": user.role.value,
        "created_at": user.created_at,
    }


def row_to_script(row: Dict[str, Any]) -> Script:
    """Convert database row to Script domain model.

    Args:
        row: Database row as dict

    Returns:
        Script domain model
    """
    return Script(
        id=ScriptId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        name=row["name"],
        install_name=InstallName(row["install_name"]),
        rating=row["rating"],
        vote_count=row["vote_count"],
        flag_weight=row["flag_weight"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def script_to_dict(script: Script) -> Dict[str, Any]:
    """Convert Script domain model to database dict.

    Args:
        script: Script domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": script.id,
        "author_id": script.author_id,
        "name": script.name,
        "install_name": script.install_name.root,
        "rating": script.rating,
        "vote_count": script.vote_count,
        "flag_weight": script.flag_weight,
        "created_at": script.created_at,
        "updated_at": script.updated_at,
    }


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        script_id=ScriptId(_uuid(row["script_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        is_upvote=row["is_upvote"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return vote.model_dump()


def row_to_flag(row: Dict[str, Any]) -> Flag:
    """Convert database row to Flag domain model."""
    return Flag(
        script_id=ScriptId(_uuid(row["script_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        created_at=row["created_at"],
    )


def flag_to_dict(flag: Flag) -> Dict[str, Any]:
    """Convert Flag domain model to database dict."""
    return flag.model_dump()
