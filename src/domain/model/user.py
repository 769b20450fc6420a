from dataclasses import dataclass
from datetime import datetime

from domain.model.provider import ProviderProfile


@dataclass
class User:
    """Canonical local identity shadowing a provider account.

    ``(provider, external_id)`` is unique across all users. ``id``,
    ``created_at`` and ``updated_at`` stay None until the repository
    inserts the record.
    """

    TRACKED_FIELDS = ('username', 'display_name', 'email', 'avatar_url')

    provider: str
    external_id: str
    username: str | None = None
    display_name: str | None = None
    email: str | None = None
    avatar_url: str | None = None
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_login_at: datetime | None = None

    @classmethod
    def from_profile(cls, profile: ProviderProfile) -> "User":
        return cls(
            provider=profile.provider,
            external_id=profile.external_id,
            username=profile.username,
            display_name=profile.display_name,
            email=profile.email,
            avatar_url=profile.avatar_url,
        )

    def apply_profile(self, profile: ProviderProfile) -> list[str]:
        """Overwrite tracked fields that differ from the profile.

        Returns the names of the fields that changed.
        """
        changed = []
        for name in self.TRACKED_FIELDS:
            incoming = getattr(profile, name)
            if getattr(self, name) != incoming:
                setattr(self, name, incoming)
                changed.append(name)
        return changed
