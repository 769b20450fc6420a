"""Domain-level exceptions.

Services raise these errors to express login and persistence failures.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class PersistenceError(DomainError):
    """The user store could not complete a read or write."""


class AuthenticationError(DomainError):
    """A federated login could not be turned into a local user."""


class EmailLookupError(DomainError):
    """The provider's email listing could not be fetched or parsed."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
