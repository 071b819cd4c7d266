"""Test configuration and fixtures."""

from uuid import uuid4

from scripthub.domain.model import Script, User
from scripthub.domain.value import (
    InstallName,
    ScriptId,
    UserId,
    UserName,
    UserRole,
)


def make_user(name: str = "someone", role: UserRole = UserRole.USER) -> User:
    """Helper function to build a user with a fresh ID."""
    return User(id=UserId(uuid4()), name=UserName(name), role=role)


def make_script(
    author: User,
    name: str = "Example Script",
    is_lib: bool = False,
    rating: int = 0,
    vote_count: int = 0,
    flag_weight: int = 0,
) -> Script:
    """Helper function to build a script owned by ``author``.

    The install name is derived from the author and script name, with the
    ``.user.js`` suffix for user scripts and plain ``.js`` for libraries.
    """
    suffix = ".js" if is_lib else ".user.js"
    slug = name.replace(" ", "_")
    return Script(
        id=ScriptId(uuid4()),
        author_id=author.id,
        name=name,
        install_name=InstallName(f"{author.name.root}/{slug}-{uuid4().hex[:8]}{suffix}"),
        rating=rating,
        vote_count=vote_count,
        flag_weight=flag_weight,
    )
