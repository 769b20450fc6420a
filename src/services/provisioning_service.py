"""Provisioning service — create-or-update the local user for a login.

Pure business logic with no HTTP dependencies. This module is the only
writer of User records; the repository persists what it is given and
assigns id/created_at/updated_at on first insert.

updated_at moves only when a tracked profile field changed. A login that
merely advances last_login_at leaves it untouched.
"""

import logging
from datetime import datetime, timedelta, timezone

from domain.model.provider import ProviderProfile
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

# Smallest step the MongoDB store can represent
LOGIN_TIME_RESOLUTION = timedelta(milliseconds=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _next_login_time(previous: datetime | None, now: datetime) -> datetime:
    """Keep last_login_at strictly increasing even within one clock tick."""
    if previous is None:
        return now
    floor = _as_utc(previous) + LOGIN_TIME_RESOLUTION
    return now if now >= floor else floor


def get_or_create(repo: UserRepository, profile: ProviderProfile) -> User:
    """Upsert the local user for a provider profile and record the login.

    Returns the persisted User.

    Raises:
        DuplicateError: a concurrent login inserted the same identity first
        PersistenceError: the store failed
    """
    now = _utcnow()
    user = repo.find_by_provider_and_external_id(profile.provider, profile.external_id)

    if user is None:
        user = User.from_profile(profile)
        user.last_login_at = now
        saved = repo.save(user)
        logger.info(
            "User provisioned",
            extra={"userId": saved.id, "provider": saved.provider, "externalId": saved.external_id},
        )
        return saved

    changed = user.apply_profile(profile)
    if changed:
        user.updated_at = now
    user.last_login_at = _next_login_time(user.last_login_at, now)

    saved = repo.save(user)
    logger.info(
        "User login recorded",
        extra={"userId": saved.id, "provider": saved.provider, "changed": changed},
    )
    return saved
