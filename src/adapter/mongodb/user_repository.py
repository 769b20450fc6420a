"""MongoDB implementation of UserRepository."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from logging import getLogger
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, PersistenceError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection.

        The unique (provider, external_id) index is what keeps concurrent
        first logins from creating two users for one external identity.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            identity_ok = create_index_safe(
                self.collection,
                [('provider', 1), ('external_id', 1)],
                'idx_users_provider_external_id',
                unique=True,
            )
            login_ok = create_index_safe(self.collection, [('last_login_at', -1)], 'idx_users_last_login_at')
            return identity_ok and login_ok
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            provider=doc['provider'],
            external_id=doc['external_id'],
            username=doc.get('username'),
            display_name=doc.get('display_name'),
            email=doc.get('email'),
            avatar_url=doc.get('avatar_url'),
            created_at=doc.get('created_at'),
            updated_at=doc.get('updated_at'),
            last_login_at=doc.get('last_login_at'),
        )

    def _to_document(self, user: User) -> dict:
        return {
            '_id': user.id,
            'provider': user.provider,
            'external_id': user.external_id,
            'username': user.username,
            'display_name': user.display_name,
            'email': user.email,
            'avatar_url': user.avatar_url,
            'created_at': user.created_at,
            'updated_at': user.updated_at,
            'last_login_at': user.last_login_at,
        }

    def save(self, user: User) -> User:
        """Insert a new user or replace an existing one by id."""
        if user.id is None:
            return self._insert(user)

        log_extra = {"userId": user.id, "provider": user.provider}
        try:
            result = self.collection.replace_one({'_id': user.id}, self._to_document(user))
        except DuplicateKeyError as e:
            logger.warning("User update conflicts with another identity", extra=log_extra)
            raise DuplicateError("User with this provider identity already exists") from e
        except PyMongoError as e:
            logger.error("Failed to update user", extra={**log_extra, "error": str(e)})
            raise PersistenceError("Failed to update user") from e

        if result.matched_count == 0:
            logger.error("User to update does not exist", extra=log_extra)
            raise PersistenceError(f"User {user.id} does not exist")

        logger.debug("User updated", extra=log_extra)
        return user

    def _insert(self, user: User) -> User:
        now = datetime.now(timezone.utc)
        new_user = replace(user, id=uuid.uuid4().hex, created_at=now, updated_at=now)
        log_extra = {"provider": user.provider, "externalId": user.external_id}

        try:
            self.collection.insert_one(self._to_document(new_user))
        except DuplicateKeyError as e:
            logger.warning("User creation failed: provider identity already exists", extra=log_extra)
            raise DuplicateError("User with this provider identity already exists") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={**log_extra, "error": str(e)})
            raise PersistenceError("Failed to create user") from e

        logger.info("User created", extra={**log_extra, "userId": new_user.id})
        return new_user

    def find_by_provider_and_external_id(self, provider: str, external_id: str) -> User | None:
        """Find a user by foreign identity. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'provider': provider, 'external_id': external_id})
        except PyMongoError as e:
            logger.error(
                "Failed to get user by provider identity",
                extra={"provider": provider, "externalId": external_id, "error": str(e)},
            )
            raise PersistenceError("Failed to look up user") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError("Failed to look up user") from e
        return self._to_domain(doc) if doc else None
