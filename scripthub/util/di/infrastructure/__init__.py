"""Infrastructure providers."""

# Import bases
from .persistence import PersistenceProvider
from .policy import PolicyProvider

# Import implementations (needed for __subclasses__())
from .persistence import ProdPersistenceProvider  # noqa: F401
from .policy import ProdPolicyProvider  # noqa: F401

__all__ = [
    "PersistenceProvider",
    "PolicyProvider",
    "ProdPersistenceProvider",
    "ProdPolicyProvider",
]
