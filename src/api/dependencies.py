import logging
from functools import lru_cache

from fastapi import Depends, HTTPException

from adapter.external.github_emails import GitHubEmailsAdapter
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.indexes import ensure_all_indexes
from adapter.mongodb.user_repository import MongoUserRepository
from api.security_policy import SecurityPolicy, get_security_policy
from port.email_directory import EmailDirectoryPort
from port.user_repository import UserRepository
from services.profile_resolver import ProfileResolver

logger = logging.getLogger(__name__)

# Client whose database already carries the unique identity index
_indexed_client = None


def ensure_indexes_once(client) -> bool:
    """Ensure indexes for a connected client, once per client instance.

    A reconnect yields a new client, so indexes are re-checked after MongoDB
    comes back (including when it was down at startup).
    """
    global _indexed_client
    if client is _indexed_client:
        return True
    if not ensure_all_indexes(client[DATABASE_NAME]):
        return False
    _indexed_client = client
    return True


def _get_db():
    """Get MongoDB database, raising 503 if unavailable or unindexed."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    if not ensure_indexes_once(client):
        logger.error("Refusing writes without the users identity index")
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_email_directory() -> EmailDirectoryPort:
    return GitHubEmailsAdapter()


def get_profile_resolver(
    email_directory: EmailDirectoryPort = Depends(get_email_directory),
) -> ProfileResolver:
    return ProfileResolver(email_directory)


@lru_cache
def get_policy() -> SecurityPolicy:
    return get_security_policy()
