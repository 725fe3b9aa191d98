from __future__ import annotations

import pytest
from pydantic import ValidationError

from primrose.config import DEFAULT_API_VERSION, DEFAULT_CONTROL_PLANE_URL, Settings


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PINECONE_API_KEY",
        "PINECONE_API_VERSION",
        "PINECONE_CONTROL_PLANE_URL",
        "PINECONE_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    settings = Settings(_env_file=None)
    assert settings.control_plane_url == DEFAULT_CONTROL_PLANE_URL == "https://api.pinecone.io"
    assert settings.api_version == DEFAULT_API_VERSION == "2025-01"
    assert settings.api_key is None
    assert settings.follow_redirects is True


def test_env_overrides_and_trailing_slash(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("PINECONE_CONTROL_PLANE_URL", "https://proxy.internal/pinecone/")
    monkeypatch.setenv("PINECONE_TIMEOUT_SECONDS", "2.5")
    settings = Settings(_env_file=None)
    assert settings.control_plane_url == "https://proxy.internal/pinecone"
    assert settings.timeout_seconds == 2.5


def test_blank_api_version_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("PINECONE_API_VERSION", "  ")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_export_safe_hides_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("PINECONE_API_KEY", "pk-very-secret")
    exported = Settings(_env_file=None).export_safe()
    assert exported["api_key_configured"] is True
    assert "environment" not in exported
    assert "pk-very-secret" not in repr(exported)
