"""GitHub emails API adapter.

Implements EmailDirectoryPort by listing the addresses attached to the
authenticated GitHub account. Requires a token granted the ``user:email``
scope.

API Documentation: https://docs.github.com/en/rest/users/emails
"""

import logging
from typing import Any

import httpx

from domain.model.errors import EmailLookupError
from domain.model.provider import EmailAddress

logger = logging.getLogger(__name__)

GITHUB_API_BASE_URL = "https://api.github.com"
# Fixed bound on login latency; a slow lookup degrades to "no email".
API_TIMEOUT_SECONDS = 5.0


class GitHubEmailsAdapter:
    """Adapter that fetches the account's email list from the GitHub API.

    Performs a single blocking request per call with no retry.
    """

    def __init__(
        self,
        base_url: str = GITHUB_API_BASE_URL,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def list_emails(self, access_token: str) -> list[EmailAddress]:
        """List the account's emails.

        Raises:
            EmailLookupError: transport failure, non-2xx status, or malformed body.
        """
        url = f"{self.base_url}/user/emails"
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(url, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise EmailLookupError(
                "GitHub emails API HTTP error", status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise EmailLookupError(f"GitHub emails API request error: {type(e).__name__}") from e
        except ValueError as e:
            raise EmailLookupError("GitHub emails API returned invalid JSON") from e

        if not isinstance(data, list):
            raise EmailLookupError(
                f"Unexpected response type from GitHub emails API: {type(data).__name__}"
            )

        records = parse_email_records(data)
        logger.debug("GitHub emails lookup successful", extra={"record_count": len(records)})
        return records


def parse_email_records(items: list[Any]) -> list[EmailAddress]:
    """Convert the API payload to EmailAddress records, skipping unusable entries."""
    records: list[EmailAddress] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        email = item.get("email")
        if not isinstance(email, str) or not email.strip():
            continue
        records.append(EmailAddress(
            email=email,
            primary=item.get("primary") is True,
            verified=item.get("verified") is True,
        ))
    return records
