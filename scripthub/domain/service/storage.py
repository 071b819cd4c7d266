"""Translation of storage driver failures into domain errors."""

from contextlib import contextmanager
from typing import Iterator

import logfire
from sqlalchemy import exc as sa_exc

from scripthub.domain.error import StorageUnavailableError


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise connection-level database failures as StorageUnavailableError.

    Args:
        operation: Name of the operation, for the log record
    """
    try:
        yield
    except (sa_exc.OperationalError, sa_exc.InterfaceError) as e:
        logfire.error(
            "Storage unavailable",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise StorageUnavailableError(f"Storage unavailable during {operation}") from e
