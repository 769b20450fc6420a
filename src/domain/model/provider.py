"""Provider Value Objects.

Canonical, provider-agnostic identity data produced after a federated
login, plus the access token and email records a provider hands back.
"""

from dataclasses import dataclass, field
from enum import Enum

GITHUB_EMAIL_SCOPE = "user:email"


class Provider(str, Enum):
    """Identity providers with a dedicated profile mapping."""
    GITHUB = 'GITHUB'
    AZURE = 'AZURE'

    @classmethod
    def from_registration_id(cls, registration_id: str | None) -> "Provider | None":
        """Match a client registration id case-insensitively.

        Returns None for registrations without a dedicated mapping.
        """
        if not registration_id:
            return None
        return cls.__members__.get(registration_id.strip().upper())


@dataclass(frozen=True)
class ProviderProfile:
    """Normalized profile of an external account (Value Object).

    ``provider`` and ``external_id`` together form the stable foreign identity.
    """
    provider: str
    external_id: str | None
    username: str | None = None
    display_name: str | None = None
    email: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True)
class AccessToken:
    """Access token issued by the provider together with its granted scopes."""
    value: str
    scopes: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.scopes, frozenset):
            object.__setattr__(self, "scopes", frozenset(self.scopes))

    def has_scope(self, scope: str) -> bool:
        return scope in self.scopes


@dataclass(frozen=True)
class EmailAddress:
    """One entry of a provider's email listing."""
    email: str
    primary: bool = False
    verified: bool = False
