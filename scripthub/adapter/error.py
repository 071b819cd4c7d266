"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class PolicyError(AdapterError):
    """External policy collaborator error."""

    pass
