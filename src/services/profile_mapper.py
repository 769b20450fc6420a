"""Provider profile mapping — raw attribute maps to ProviderProfile.

Pure functions with no I/O. Every field is resolved from an ordered list of
candidate attributes; a field with no usable candidate is None, never an error.
"""

from typing import Any, Mapping

from domain.model.provider import Provider, ProviderProfile
from utils.attributes import attr, first_non_blank


def map_from_github(attributes: Mapping[str, Any]) -> ProviderProfile:
    """Map GitHub user attributes. ``email`` is often withheld by GitHub."""
    external_id = attr(attributes, "id")
    login = attr(attributes, "login")

    return ProviderProfile(
        provider=Provider.GITHUB.value,
        external_id=external_id,
        username=first_non_blank(login, external_id),
        display_name=first_non_blank(attr(attributes, "name"), login),
        email=attr(attributes, "email"),
        avatar_url=attr(attributes, "avatar_url"),
    )


def map_from_azure(attributes: Mapping[str, Any]) -> ProviderProfile:
    """Map Azure AD / OIDC claims. Some tenants expose ``oid`` alongside ``sub``."""
    external_id = first_non_blank(attr(attributes, "oid"), attr(attributes, "sub"))
    upn = attr(attributes, "userPrincipalName")
    mail_nickname = attr(attributes, "mailNickname")
    email = attr(attributes, "email")

    username = first_non_blank(
        attr(attributes, "preferred_username"), upn, mail_nickname, email, external_id,
    )
    display_name = first_non_blank(attr(attributes, "name"), mail_nickname, upn, username)

    return ProviderProfile(
        provider=Provider.AZURE.value,
        external_id=external_id,
        username=username,
        display_name=display_name,
        email=email,
        avatar_url=None,
    )


def map_generic(registration_id: str, attributes: Mapping[str, Any]) -> ProviderProfile:
    """Best-effort mapping for registrations without a dedicated mapper."""
    name = attr(attributes, "name")
    return ProviderProfile(
        provider=registration_id.upper(),
        external_id=attr(attributes, "sub"),
        username=first_non_blank(attr(attributes, "preferred_username"), name),
        display_name=name,
        email=attr(attributes, "email"),
        avatar_url=None,
    )
