"""Caller-side Tenacity retry policy for rate-limited calls.

The client never retries on its own. Callers that want to ride out throttling
can wrap calls in `rate_limit_retrying()`, which retries only `RateLimitError`
and sleeps for the server-supplied Retry-After delay.
"""

from __future__ import annotations

from typing import Any

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt

from primrose.errors import DEFAULT_RETRY_AFTER_SECONDS, RateLimitError

__all__ = ["rate_limit_retrying", "retry_after_wait"]


def retry_after_wait(*, max_wait_seconds: float | None = None):  # type: ignore[no-untyped-def]
    """Return a Tenacity wait callable honouring `RateLimitError.retry_after`."""

    def _wait(retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        delay = float(getattr(exc, "retry_after", DEFAULT_RETRY_AFTER_SECONDS))
        if max_wait_seconds is not None:
            delay = min(delay, max(0.0, float(max_wait_seconds)))
        return max(0.0, delay)

    return _wait


def rate_limit_retrying(
    *,
    max_attempts: int = 3,
    max_wait_seconds: float | None = None,
    log: Any = None,
    operation: str = "Pinecone call",
    sleep: Any = None,
) -> AsyncRetrying:
    """Return a configured `AsyncRetrying` for rate-limited Pinecone calls.

    Notes:
    - `max_attempts` maps to Tenacity's `stop_after_attempt(max_attempts)`.
    - Sleep duration is the error's `retry_after`, optionally capped by
      `max_wait_seconds`.
    - The final `RateLimitError` is re-raised once attempts are exhausted.
    """

    max_attempts = max(1, int(max_attempts))
    operation = (operation or "Pinecone call").strip() or "Pinecone call"

    def _before_sleep(retry_state: RetryCallState) -> None:
        if log is None:
            return
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        sleep_for = getattr(getattr(retry_state, "next_action", None), "sleep", None)
        log.warning(
            "{} attempt {} rate limited: {}. Retrying in {:.1f}s",
            operation,
            retry_state.attempt_number,
            exc,
            float(sleep_for or 0.0),
        )

    kwargs: dict[str, Any] = {
        "stop": stop_after_attempt(max_attempts),
        "wait": retry_after_wait(max_wait_seconds=max_wait_seconds),
        "retry": retry_if_exception_type(RateLimitError),
        "reraise": True,
        "before_sleep": _before_sleep,
    }
    if sleep is not None:
        kwargs["sleep"] = sleep
    return AsyncRetrying(**kwargs)
