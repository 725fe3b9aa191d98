"""Typed error taxonomy and HTTP response classification.

Every HTTP outcome is classified by one ordered rule table:

1. 429 -> `RateLimitError` (Retry-After seconds, default 60)
2. 401/403 -> `AuthenticationError` (body is never surfaced)
3. any other non-2xx -> `PineconeApiError` with the server message when present
4. 2xx -> success

Transport failures (`httpx.RequestError`) and malformed 2xx JSON bodies are
not classified here; they propagate unchanged to the caller.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Mapping

__all__ = [
    "AUTHENTICATION_FAILED_MESSAGE",
    "DEFAULT_RETRY_AFTER_SECONDS",
    "MISSING_API_KEY_MESSAGE",
    "AuthenticationError",
    "ClassificationRule",
    "PineconeApiError",
    "PreconditionError",
    "RateLimitError",
    "RESPONSE_RULES",
    "classify_response",
    "decode_success",
    "describe_error",
    "extract_error_message",
    "parse_retry_after",
]

DEFAULT_RETRY_AFTER_SECONDS = 60
AUTHENTICATION_FAILED_MESSAGE = "Authentication failed. Check your API key."
MISSING_API_KEY_MESSAGE = "No API key provided. Include X-Pinecone-Api-Key header."
RATE_LIMIT_MESSAGE = "Rate limit exceeded"

_NO_CONTENT_STATUSES = frozenset({202, 204})


class PineconeApiError(RuntimeError):
    """Raised when the Pinecone API rejects a request."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = str(message)
        self.status_code = int(status_code) if status_code is not None else None
        self.retryable = bool(retryable)

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.status_code is None:
            return self.message
        return f"{self.message} (status={self.status_code})"


class AuthenticationError(PineconeApiError):
    """Missing or rejected API key. Never retryable."""

    def __init__(self, message: str = AUTHENTICATION_FAILED_MESSAGE, *, status_code: int | None = None) -> None:
        super().__init__(message, status_code=status_code, retryable=False)


class RateLimitError(PineconeApiError):
    """Server-side throttling; retry after `retry_after` seconds."""

    def __init__(
        self,
        message: str = RATE_LIMIT_MESSAGE,
        *,
        retry_after: int = DEFAULT_RETRY_AFTER_SECONDS,
    ) -> None:
        super().__init__(message, status_code=429, retryable=True)
        self.retry_after = int(retry_after)


class PreconditionError(PineconeApiError):
    """A required argument combination is missing; raised before any request."""

    def __init__(self, precondition: str) -> None:
        super().__init__(f"Invalid request: {precondition}", status_code=None, retryable=False)
        self.precondition = precondition


def parse_retry_after(headers: Mapping[str, str] | None) -> int:
    """Return the Retry-After delay in whole seconds, defaulting to 60."""
    if not headers:
        return DEFAULT_RETRY_AFTER_SECONDS
    raw = None
    for name, value in headers.items():
        if str(name).lower() == "retry-after":
            raw = value
            break
    if raw is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    try:
        seconds = int(str(raw).strip())
    except ValueError:
        # HTTP-date values are not supported.
        return DEFAULT_RETRY_AFTER_SECONDS
    return max(0, seconds)


def extract_error_message(body: bytes | str | None) -> str | None:
    """Pull `error.message` (or top-level `message`) out of a JSON error body."""
    if not body:
        return None
    try:
        payload = json.loads(body)
    except (TypeError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    nested = payload.get("error")
    if isinstance(nested, dict):
        message = nested.get("message")
        if isinstance(message, str) and message:
            return message
    message = payload.get("message")
    if isinstance(message, str) and message:
        return message
    return None


@dataclass(frozen=True, slots=True)
class ClassificationRule:
    """One row of the response classification table."""

    name: str
    matches: Callable[[int], bool]
    build: Callable[[int, Mapping[str, str], bytes], PineconeApiError | None]


def _rate_limited(status: int, headers: Mapping[str, str], body: bytes) -> PineconeApiError:
    return RateLimitError(retry_after=parse_retry_after(headers))


def _unauthorized(status: int, headers: Mapping[str, str], body: bytes) -> PineconeApiError:
    return AuthenticationError(status_code=status)


def _api_error(status: int, headers: Mapping[str, str], body: bytes) -> PineconeApiError:
    message = extract_error_message(body) or f"API error: {status}"
    return PineconeApiError(message, status_code=status)


def _success(status: int, headers: Mapping[str, str], body: bytes) -> None:
    return None


def _is_success(status: int) -> bool:
    return 200 <= status < 300


RESPONSE_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("rate_limited", lambda status: status == 429, _rate_limited),
    ClassificationRule("unauthorized", lambda status: status in (401, 403), _unauthorized),
    ClassificationRule("api_error", lambda status: not _is_success(status), _api_error),
    ClassificationRule("success", _is_success, _success),
)


def classify_response(
    status: int,
    headers: Mapping[str, str] | None = None,
    body: bytes | None = None,
) -> PineconeApiError | None:
    """Map an HTTP outcome to a typed error, or None for 2xx responses."""
    status = int(status)
    for rule in RESPONSE_RULES:
        if rule.matches(status):
            return rule.build(status, headers or {}, body or b"")
    raise AssertionError(f"No classification rule matched status {status}")  # pragma: no cover


def decode_success(status: int, body: bytes | None) -> Any:
    """Decode a 2xx body; 202/204 and empty bodies yield None.

    Raises:
        json.JSONDecodeError: When a non-empty body is not valid JSON.
    """
    if int(status) in _NO_CONTENT_STATUSES:
        return None
    if not body or not body.strip():
        return None
    return json.loads(body)


def describe_error(error: BaseException) -> dict[str, Any]:
    """Return a log-friendly summary of an error."""
    info: dict[str, Any] = {
        "type": type(error).__name__,
        "message": getattr(error, "message", None) or str(error),
    }
    if isinstance(error, PineconeApiError):
        info["status_code"] = error.status_code
        info["retryable"] = error.retryable
    if isinstance(error, RateLimitError):
        info["retry_after"] = error.retry_after
    return info
