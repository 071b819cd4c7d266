"""Request dependencies shared by the API routes."""

from uuid import UUID

from fastapi import Header, HTTPException, status

from scripthub.interface.error import InvalidUserIdError


def parse_user_id(raw: str | None) -> str | None:
    """Normalize the acting user header.

    Args:
        raw: Header value set by the authentication gateway

    Returns:
        Canonical UUID string, or None for anonymous requests

    Raises:
        InvalidUserIdError: If the header is not a UUID
    """
    if raw is None or not raw.strip():
        return None
    try:
        return str(UUID(raw.strip()))
    except ValueError:
        raise InvalidUserIdError(raw)


def get_acting_user_id(
    x_user_id: str | None = Header(default=None),
) -> str | None:
    """Resolve the acting user from the X-User-Id header.

    Authentication happens upstream; a missing header means anonymous.
    """
    try:
        return parse_user_id(x_user_id)
    except InvalidUserIdError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


def parse_script_id(script_id: str) -> str:
    """Validate a script ID path parameter.

    Raises:
        HTTPException: 404 if the ID cannot name any script
    """
    try:
        return str(UUID(script_id))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Script not found: {script_id}",
        )
