"""In-memory implementation of UserRepository for testing."""

import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.errors import DuplicateError, PersistenceError
from domain.model.user import User


class FakeUserRepository:
    """Stores copies so callers cannot mutate persisted state behind its back."""

    def __init__(self):
        self.store: dict[str, User] = {}
        self.save_calls = 0
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def save(self, user: User) -> User:
        with self._lock:
            self.save_calls += 1
            if user.id is None:
                return self._insert(user)
            if user.id not in self.store:
                raise PersistenceError(f"User {user.id} does not exist")
            if self._identity_taken(user, exclude_id=user.id):
                raise DuplicateError("User with this provider identity already exists")
            self.store[user.id] = replace(user)
            return replace(user)

    def _insert(self, user: User) -> User:
        if self._identity_taken(user):
            raise DuplicateError("User with this provider identity already exists")

        now = datetime.now(timezone.utc)
        saved = replace(user, id=uuid.uuid4().hex, created_at=now, updated_at=now)
        self.store[saved.id] = saved
        return replace(saved)

    def _identity_taken(self, user: User, exclude_id: str | None = None) -> bool:
        return any(
            u.provider == user.provider and u.external_id == user.external_id and u.id != exclude_id
            for u in self.store.values()
        )

    # ── read operations ──────────────────────────────────────

    def find_by_provider_and_external_id(self, provider: str, external_id: str) -> User | None:
        with self._lock:
            for user in self.store.values():
                if user.provider == provider and user.external_id == external_id:
                    return replace(user)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        with self._lock:
            user = self.store.get(user_id)
            return replace(user) if user else None
