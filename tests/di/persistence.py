"""Mock persistence providers for testing."""

from dishka import Scope, provide

from scripthub.domain.repository import (
    FlagRepository,
    ScriptRepository,
    UserRepository,
    VoteRepository,
)
from scripthub.persistence.repository.inmemory import (
    InMemoryFlagRepository,
    InMemoryScriptRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from scripthub.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across HTTP requests within one test;
    every test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_script_repository(self) -> ScriptRepository:
        """Provide in-memory script repository."""
        return InMemoryScriptRepository()

    @provide(scope=Scope.APP)
    def get_vote_repository(self) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository()

    @provide(scope=Scope.APP)
    def get_flag_repository(self) -> FlagRepository:
        """Provide in-memory flag repository."""
        return InMemoryFlagRepository()
