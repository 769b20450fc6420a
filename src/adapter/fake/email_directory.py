"""In-memory implementation of EmailDirectoryPort for testing."""

from domain.model.provider import EmailAddress


class FakeEmailDirectory:
    """Fake email directory that returns preconfigured records or raises."""

    def __init__(self, records: list[EmailAddress] | None = None, error: Exception | None = None):
        self.records = records or []
        self.error = error
        self.tokens: list[str] = []

    def list_emails(self, access_token: str) -> list[EmailAddress]:
        self.tokens.append(access_token)
        if self.error is not None:
            raise self.error
        return list(self.records)
