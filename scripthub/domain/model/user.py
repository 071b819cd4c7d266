"""User aggregate root.

Users are managed by the account system; this service only reads them to
resolve script authors and moderator privileges.
"""

from datetime import datetime

from pydantic import Field

from scripthub.domain.model.common import DomainModel
from scripthub.domain.value import UserId, UserName, UserRole


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    name: UserName
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=datetime.now)
