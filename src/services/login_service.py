"""Login service — from a completed federated login to a local User.

Called once per login by the security layer after the OAuth handshake.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from typing import Any, Mapping

from domain.model.errors import AuthenticationError
from domain.model.provider import AccessToken, ProviderProfile
from domain.model.user import User
from port.user_repository import UserRepository
from services import provisioning_service
from services.profile_resolver import ProfileResolver
from utils.attributes import first_non_blank

logger = logging.getLogger(__name__)


def _resolve_profile(
    resolver: ProfileResolver,
    registration_id: str,
    attributes: Mapping[str, Any],
    access_token: AccessToken | None,
) -> ProviderProfile:
    try:
        profile = resolver.resolve(registration_id, attributes, access_token)
    except Exception as e:
        logger.warning(
            "Profile resolution failed",
            extra={"registration_id": registration_id, "error_type": type(e).__name__},
            exc_info=True,
        )
        raise AuthenticationError("Could not resolve provider profile") from e

    if first_non_blank(profile.external_id) is None:
        logger.warning(
            "Provider returned no stable identifier",
            extra={"registration_id": registration_id, "provider": profile.provider},
        )
        raise AuthenticationError("Provider profile has no external id")
    return profile


def complete_login(
    repo: UserRepository,
    resolver: ProfileResolver,
    registration_id: str,
    attributes: Mapping[str, Any],
    access_token: AccessToken | None = None,
) -> User:
    """Resolve the provider profile and provision the matching local user.

    Nothing is persisted when resolution fails.

    Raises:
        AuthenticationError: the profile could not be resolved or has no external id
        DuplicateError: a concurrent login for the same identity won the insert
        PersistenceError: the user store failed
    """
    profile = _resolve_profile(resolver, registration_id, attributes, access_token)
    return provisioning_service.get_or_create(repo, profile)
