"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConcurrencyConflictError(DomainError):
    """Raised when a ledger update keeps losing races to concurrent requests."""

    def __init__(self, script_id: str, user_id: str, attempts: int):
        self.script_id = script_id
        self.user_id = user_id
        self.attempts = attempts
        super().__init__(
            f"Concurrent update on script {script_id} by user {user_id} "
            f"did not settle after {attempts} attempts"
        )


class StorageUnavailableError(DomainError):
    """Raised when the storage collaborator cannot serve the request."""

    pass


class InconsistentCountersError(DomainError):
    """Raised when stored counters cannot have been produced by any ledger."""

    def __init__(self, script_id: str, problems: list[str]):
        self.script_id = script_id
        self.problems = problems
        super().__init__(
            f"Counters of script {script_id} are inconsistent: {'; '.join(problems)}"
        )


class NotAuthorizedError(DomainError):
    """Raised when a user attempts an action their role does not allow."""

    def __init__(self, action: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource_id}"
        )
