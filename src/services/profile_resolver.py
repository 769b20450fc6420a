"""Profile resolver — single dispatch point from registration id to mapping.

Known providers go through their dedicated mapper (GitHub additionally
through email enrichment); any other registration falls back to a generic
OIDC-style mapping so an unrecognized provider never fails outright.
"""

import logging
from typing import Any, Callable, Mapping

from domain.model.provider import AccessToken, Provider, ProviderProfile
from port.email_directory import EmailDirectoryPort
from services.email_resolver import resolve_email
from services.profile_mapper import map_from_azure, map_from_github, map_generic

logger = logging.getLogger(__name__)

Mapper = Callable[[Mapping[str, Any]], ProviderProfile]

PROFILE_MAPPERS: dict[Provider, Mapper] = {
    Provider.GITHUB: map_from_github,
    Provider.AZURE: map_from_azure,
}


class ProfileResolver:
    """Turns a provider's raw attributes into a canonical ProviderProfile."""

    def __init__(self, email_directory: EmailDirectoryPort):
        self.email_directory = email_directory

    def resolve(
        self,
        registration_id: str,
        attributes: Mapping[str, Any],
        access_token: AccessToken | None = None,
    ) -> ProviderProfile:
        provider = Provider.from_registration_id(registration_id)

        if provider is None:
            logger.debug(
                "No dedicated mapper, using generic mapping",
                extra={"registration_id": registration_id},
            )
            return map_generic(registration_id, attributes)

        profile = PROFILE_MAPPERS[provider](attributes)
        if provider is Provider.GITHUB:
            profile = resolve_email(profile, access_token, self.email_directory)
        return profile
