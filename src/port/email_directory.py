"""Email directory port — outbound interface for a provider's email listing."""

from typing import Protocol

from domain.model.provider import EmailAddress


class EmailDirectoryPort(Protocol):
    """Port for listing the email addresses attached to a provider account.

    list_emails() raises EmailLookupError when the listing cannot be
    fetched or parsed; callers decide whether that is fatal.
    """

    def list_emails(self, access_token: str) -> list[EmailAddress]: ...
