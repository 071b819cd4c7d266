"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class ValidationError(InterfaceError):
    """Request validation error."""

    pass


class InvalidUserIdError(ValidationError):
    """Acting user header is present but is not a user ID."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"X-User-Id is not a valid user ID: {raw!r}")
