"""Data-plane endpoint cache.

Maps index names to the base URL of their data-plane host. Entries are added
only after a successful describe-index call and removed only when the index is
deleted through the owning client; they never expire on a timer.

One cache belongs to exactly one `PineconeClient`, and one client serves one
credential context, so cached hosts never cross tenants. The cache performs no
locking; sharing one client between concurrent sessions is unsupported.
"""

from __future__ import annotations

from loguru import logger

log = logger.bind(module="cache")

__all__ = ["EndpointCache", "normalize_host"]


def normalize_host(host: str | None) -> str | None:
    """Return a base URL for a data-plane host, or None when it is empty."""
    text = (host or "").strip().rstrip("/")
    if not text:
        return None
    if "://" not in text:
        text = f"https://{text}"
    return text


class EndpointCache:
    """In-memory index name -> data-plane base URL mapping."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def get(self, index_name: str) -> str | None:
        return self._entries.get(index_name)

    def put(self, index_name: str, host: str) -> str:
        """Store the normalized host for an index and return it."""
        base_url = normalize_host(host)
        if base_url is None:
            raise ValueError(f"Cannot cache an empty host for index {index_name!r}.")
        self._entries[index_name] = base_url
        log.debug("Cached data-plane host for index {}: {}", index_name, base_url)
        return base_url

    def evict(self, index_name: str) -> bool:
        """Drop the entry for an index; return True when one existed."""
        removed = self._entries.pop(index_name, None) is not None
        if removed:
            log.debug("Evicted data-plane host for index {}", index_name)
        return removed

    def __contains__(self, index_name: object) -> bool:
        return index_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
