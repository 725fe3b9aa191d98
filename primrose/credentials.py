"""Per-session credential context.

A `Credentials` value is created once per incoming call batch (usually from
the headers the outer server received) and handed to `create_client()`. It is
never mutated and never persisted; a missing key only becomes an error when a
request actually needs it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

API_KEY_HEADER = "X-Pinecone-Api-Key"


def _clean(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True, slots=True)
class Credentials:
    """Immutable holder of the caller's API key."""

    api_key: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_key", _clean(self.api_key))

    @property
    def has_api_key(self) -> bool:
        return self.api_key is not None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "Credentials":
        """Build credentials from inbound request headers (case-insensitive)."""
        wanted = API_KEY_HEADER.lower()
        for name, value in headers.items():
            if str(name).lower() == wanted:
                return cls(api_key=value)
        return cls()

    @classmethod
    def from_settings(cls, settings: Any) -> "Credentials":
        """Build credentials from a Settings-like object (local tooling only)."""
        secret = getattr(settings, "api_key", None)
        if secret is None:
            return cls()
        getter = getattr(secret, "get_secret_value", None)
        return cls(api_key=getter() if callable(getter) else secret)

    def __repr__(self) -> str:
        state = "set" if self.has_api_key else "missing"
        return f"Credentials(api_key=<{state}>)"


__all__ = ["API_KEY_HEADER", "Credentials"]
