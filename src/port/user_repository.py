from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations enforce uniqueness of (provider, external_id) and raise
    DuplicateError on a conflicting insert, PersistenceError on any other
    storage failure. Nothing is retried.
    """
    def find_by_provider_and_external_id(self, provider: str, external_id: str) -> User | None:
        """Find a user by foreign identity. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def save(self, user: User) -> User:
        """Insert a user without id (assigning id/created_at/updated_at), else replace by id."""
        ...
