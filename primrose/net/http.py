"""Shared async HTTP helpers built on top of httpx.

This module centralizes default timeout/redirect behavior for outbound calls.
Unlike a typical wrapper it does not raise on 4xx/5xx responses: status
classification belongs to `primrose.errors`, and transport errors raised by
httpx propagate unchanged.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Mapping

import httpx

__all__ = ["AsyncHttpClient", "safe_response_text"]

_MIN_TIMEOUT_SECONDS = 0.1
_MAX_ERROR_TEXT_CHARS = 2048


def _truncate(text: str, *, limit: int) -> str:
    """Return a truncated string with an ellipsis when needed."""
    if limit <= 0:
        return ""
    if len(text) <= limit:
        return text
    head = text[: max(0, limit - 3)].rstrip()
    return f"{head}..."


def safe_response_text(response: httpx.Response, *, limit: int = _MAX_ERROR_TEXT_CHARS) -> str:
    """Best-effort extraction of response text for log messages.

    The returned value is trimmed and truncated to keep logs readable.
    """
    try:
        text = (response.text or "").strip()
    except Exception:
        try:
            text = response.content.decode("utf-8", errors="replace").strip()
        except Exception:
            text = ""
    return _truncate(text, limit=limit)


class AsyncHttpClient:
    """Small async HTTP client with consistent defaults.

    Notes:
        - By default, a short-lived `httpx.AsyncClient` is created per request.
        - Inside `async with` an internal persistent `httpx.AsyncClient` is
          used to enable connection pooling until `aclose()` is called.
        - Timeouts are clamped to at least `_MIN_TIMEOUT_SECONDS`.
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = 30.0,
        follow_redirects: bool = True,
        user_agent: str | None = None,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout_seconds = float(max(_MIN_TIMEOUT_SECONDS, timeout_seconds))
        self.follow_redirects = bool(follow_redirects)
        self.transport = transport

        merged: dict[str, str] = dict(headers or {})
        if user_agent and "User-Agent" not in merged:
            merged["User-Agent"] = user_agent
        self.headers = merged
        self._client: httpx.AsyncClient | None = None

    def _build_client(self) -> httpx.AsyncClient:
        kwargs: dict[str, object] = {
            "timeout": self.timeout_seconds,
            "follow_redirects": self.follow_redirects,
            "headers": self.headers,
        }
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)  # type: ignore[arg-type]

    @property
    def is_open(self) -> bool:
        return self._client is not None

    def open(self) -> None:
        """Open an internal persistent `httpx.AsyncClient`."""
        if self._client is None:
            self._client = self._build_client()

    async def aclose(self) -> None:
        """Close any internal persistent `httpx.AsyncClient`."""
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        self.open()
        return self

    async def __aexit__(self, exc_type: object, exc: object, tb: object) -> None:
        await self.aclose()

    @asynccontextmanager
    async def _client_ctx(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with self._build_client() as client:
            yield client

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        json_body: Any | None = None,
    ) -> httpx.Response:
        """Send an HTTP request and return the fully read response.

        Raises:
            httpx.RequestError: When the request cannot be completed.
        """
        method = (method or "GET").strip().upper()
        target = (url or "").strip()
        if not target:
            raise ValueError("url must be non-empty.")

        async with self._client_ctx() as client:
            response = await client.request(
                method,
                target,
                params=dict(params) if params else None,
                headers=dict(headers) if headers else None,
                json=json_body,
            )
            await response.aread()
            return response
