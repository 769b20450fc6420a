"""Email resolver — fills in a withheld GitHub email from the emails API.

The lookup is best-effort: it only runs when the base mapping produced no
email and the token was granted the email-read scope, and any failure
leaves the profile without an email instead of failing the login.
"""

import logging
from dataclasses import replace
from typing import Sequence

from domain.model.provider import (
    GITHUB_EMAIL_SCOPE,
    AccessToken,
    EmailAddress,
    Provider,
    ProviderProfile,
)
from port.email_directory import EmailDirectoryPort

logger = logging.getLogger(__name__)


def select_email(records: Sequence[EmailAddress]) -> str | None:
    """Pick the best address: primary+verified, first verified, first entry, else None."""
    for record in records:
        if record.primary and record.verified:
            return record.email
    for record in records:
        if record.verified:
            return record.email
    return records[0].email if records else None


def _should_lookup(profile: ProviderProfile, access_token: AccessToken | None) -> bool:
    if profile.provider != Provider.GITHUB.value or profile.email is not None:
        return False
    return access_token is not None and access_token.has_scope(GITHUB_EMAIL_SCOPE)


def resolve_email(
    profile: ProviderProfile,
    access_token: AccessToken | None,
    directory: EmailDirectoryPort,
) -> ProviderProfile:
    """Return the profile with its email filled in when the provider can supply one.

    Never raises: lookup failures are logged at debug level and the original
    profile is returned.
    """
    if not _should_lookup(profile, access_token):
        return profile

    try:
        records = directory.list_emails(access_token.value)
    except Exception as e:
        logger.debug(
            "GitHub emails lookup failed",
            extra={"externalId": profile.external_id, "error_type": type(e).__name__, "error": str(e)},
        )
        return profile

    email = select_email(records)
    if email is None:
        logger.debug(
            "GitHub emails lookup returned no usable address",
            extra={"externalId": profile.external_id, "record_count": len(records)},
        )
        return profile

    return replace(profile, email=email)
