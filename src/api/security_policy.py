"""Named security policy profiles.

The environment picks one profile at startup (APP_PROFILE); nothing below
the API layer ever branches on the environment.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class SecurityPolicy:
    """Wiring choices for the login hand-off endpoints."""
    name: str
    callback_base_path: str
    success_url: str = "/me"
    failure_url: str = "/login?error"


# Local development registers provider apps against /auth/callback/{registration_id}
DEV = SecurityPolicy(name="dev", callback_base_path="/auth/callback")
PROD = SecurityPolicy(name="prod", callback_base_path="/login/oauth2/code")

POLICIES: dict[str, SecurityPolicy] = {policy.name: policy for policy in (DEV, PROD)}


def get_security_policy(profile: str | None = None) -> SecurityPolicy:
    """Return the policy named by ``profile`` (default: APP_PROFILE, else prod).

    Raises:
        ValueError: unknown profile name
    """
    name = (profile or os.getenv("APP_PROFILE") or PROD.name).strip().lower()
    try:
        return POLICIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown APP_PROFILE '{name}'. Expected one of: {', '.join(sorted(POLICIES))}"
        ) from None
