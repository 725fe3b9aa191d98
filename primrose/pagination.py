"""Paginated results and a caller-side page iterator.

The client returns one page per call; looping is always the caller's decision.
`iterate_pages` is a convenience for callers that do want every item.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

T = TypeVar("T")

__all__ = ["Page", "iterate_pages", "next_token_from"]


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One page of results plus the opaque token for the following page."""

    items: list[T] = field(default_factory=list)
    next_token: str | None = None

    @property
    def has_more(self) -> bool:
        return self.next_token is not None

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def next_token_from(payload: Mapping[str, Any] | None) -> str | None:
    """Return `pagination.next` from a list envelope, treating blanks as absent."""
    if not payload:
        return None
    pagination = payload.get("pagination")
    if not isinstance(pagination, Mapping):
        return None
    token = pagination.get("next")
    if not isinstance(token, str) or not token.strip():
        return None
    return token


async def iterate_pages(
    fetch: Callable[[str | None], Awaitable[Page[T]]],
    *,
    max_pages: int | None = None,
) -> AsyncIterator[T]:
    """Yield items across pages until the server stops returning a next token.

    `fetch` receives the continuation token (None for the first page).
    """
    token: str | None = None
    pages = 0
    while True:
        page = await fetch(token)
        pages += 1
        for item in page.items:
            yield item
        token = page.next_token
        if token is None:
            return
        if max_pages is not None and pages >= max(1, int(max_pages)):
            return
