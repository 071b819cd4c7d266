"""Domain value objects for scripthub.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from scripthub.domain.value.common import RootValueObject


class VoteDirection(str, Enum):
    """Vote action requested by a user."""

    UP = "up"
    DOWN = "down"
    UNVOTE = "unvote"


class VoteState(str, Enum):
    """A user's current vote on a script.

    Explicit three-way state so "never voted" and "voted down" are never
    confused.
    """

    NO_VOTE = "no_vote"
    UP = "up"
    DOWN = "down"

    @classmethod
    def from_upvote(cls, is_upvote: bool) -> "VoteState":
        """Map a stored vote direction to its state."""
        return cls.UP if is_upvote else cls.DOWN

    @property
    def has_vote(self) -> bool:
        return self is not VoteState.NO_VOTE


class LedgerAction(str, Enum):
    """Mutation to apply to a ledger record."""

    NONE = "none"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Outcome(str, Enum):
    """Result of a moderation request."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Rejection(str, Enum):
    """Why a moderation request was turned into a no-op."""

    AUTHENTICATION_REQUIRED = "authentication_required"
    AUTHOR = "author"
    NO_VOTE_TO_RETRACT = "no_vote_to_retract"
    DUPLICATE_VOTE = "duplicate_vote"
    ALREADY_FLAGGED = "already_flagged"
    NOT_FLAGGED = "not_flagged"


class UserRole(str, Enum):
    """Site role of a user."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"

    @property
    def can_moderate(self) -> bool:
        return self in (UserRole.MODERATOR, UserRole.ADMIN)


class UserName(RootValueObject[str]):
    """Public user name.

    1-64 characters; letters, digits, spaces, dots, dashes and underscores.
    """

    @field_validator("root")
    @classmethod
    def validate_user_name(cls, v: str) -> str:
        """Validate user name format."""
        if not re.match(r"^[\w .-]{1,64}$", v):
            raise ValueError(
                "User name must be 1-64 characters of letters, digits, "
                "spaces, dots, dashes or underscores"
            )
        return v


class InstallName(RootValueObject[str]):
    """Install path of a hosted script.

    Format: ``<author>/<script name>.user.js`` for user scripts and
    ``<author>/<script name>.js`` for libraries.
    """

    @field_validator("root")
    @classmethod
    def validate_install_name(cls, v: str) -> str:
        """Validate install name format."""
        if not re.match(r"^[^/]+/[^/]+\.js$", v):
            raise ValueError("Install name must look like '<author>/<name>.js'")
        if len(v) > 255:
            raise ValueError("Install name must be at most 255 characters")
        return v

    @property
    def is_lib(self) -> bool:
        """Libraries are installed as plain .js, user scripts as .user.js."""
        return not self.root.endswith(".user.js")
