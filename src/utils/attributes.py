"""Helpers for reading raw provider attribute maps."""

from typing import Any, Mapping


def stringify(value: Any) -> str | None:
    """Null-safe string coercion. Booleans render as JSON does ("true"/"false")."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def attr(attributes: Mapping[str, Any], key: str) -> str | None:
    """Read one attribute as a string (None when absent or null)."""
    return stringify(attributes.get(key))


def first_non_blank(*candidates: str | None) -> str | None:
    """Return the first candidate that is neither None nor whitespace-only.

    The winning value is returned unmodified; None if no candidate qualifies.
    """
    for candidate in candidates:
        if candidate is not None and candidate.strip():
            return candidate
    return None
