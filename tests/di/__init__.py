"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .policy import MockPolicyProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockPolicyProvider",
    "build_test_container",
]
