"""Translation of domain errors into HTTP errors."""

import logfire
from fastapi import HTTPException, status

from scripthub.domain.error import (
    ConcurrencyConflictError,
    DomainError,
    InconsistentCountersError,
    NotAuthorizedError,
    NotFoundError,
    StorageUnavailableError,
)


def to_http_exception(error: DomainError, action: str) -> HTTPException:
    """Map a domain error raised while performing ``action`` to an HTTP error."""
    if isinstance(error, NotFoundError):
        logfire.warn(f"{action}: not found", error=str(error))
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(error),
        )
    if isinstance(error, NotAuthorizedError):
        logfire.warn(f"{action}: not authorized", error=str(error))
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(error),
        )
    if isinstance(error, ConcurrencyConflictError):
        logfire.warn(f"{action}: concurrent update conflict", error=str(error))
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="The request conflicted with a concurrent update, please retry",
        )
    if isinstance(error, InconsistentCountersError):
        logfire.error(f"{action}: inconsistent counters", error=str(error))
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(error),
        )
    if isinstance(error, StorageUnavailableError):
        logfire.error(f"{action}: storage unavailable", error=str(error))
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage is temporarily unavailable",
        )
    logfire.warn(f"{action}: domain error", error=str(error))
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(error),
    )
