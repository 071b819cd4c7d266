"""Flag entity.

A flag records that a user has raised an abuse concern about a script.
The record carries no value: its existence is the flag.
"""

from datetime import datetime

from pydantic import Field

from scripthub.domain.model.common import DomainModel
from scripthub.domain.value import ScriptId, UserId


class Flag(DomainModel):
    """Flag entity, one per user per script."""

    script_id: ScriptId
    user_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)
