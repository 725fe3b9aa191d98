"""Preflight checks shared by the doctor script and tests.

Each check returns a `CheckResult` instead of raising so that a single run can
report every problem at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import httpx

from primrose.client import PineconeClient
from primrose.config import Settings
from primrose.errors import PineconeApiError

Status = Literal["ok", "warn", "fail"]

__all__ = [
    "CheckResult",
    "Status",
    "check_api_key",
    "check_control_plane",
    "check_index",
]


@dataclass(slots=True)
class CheckResult:
    name: str
    status: Status
    details: str


def check_api_key(settings: Settings) -> CheckResult:
    secret = settings.api_key.get_secret_value().strip() if settings.api_key is not None else ""
    if not secret:
        return CheckResult("api_key", "fail", "PINECONE_API_KEY is not set.")
    return CheckResult("api_key", "ok", f"configured ({len(secret)} chars)")


async def check_control_plane(client: PineconeClient) -> CheckResult:
    status = await client.test_connection()
    if status.connected:
        return CheckResult("control_plane", "ok", f"reachable: {client.control_plane_url}")
    return CheckResult("control_plane", "fail", f"{client.control_plane_url}: {status.message}")


async def check_index(client: PineconeClient, index_name: str) -> CheckResult:
    """Describe an index, then probe its data plane through the resolved host."""
    label = f"index:{index_name}"
    try:
        index = await client.describe_index(index_name)
        if not index.status.ready:
            return CheckResult(label, "warn", f"state={index.status.state.value} (not ready)")
        stats = await client.describe_index_stats(index_name)
    except (PineconeApiError, httpx.HTTPError) as exc:
        return CheckResult(label, "fail", str(exc))
    host = client.endpoints.get(index_name) or index.host
    vectors = stats.total_vector_count if stats.total_vector_count is not None else "?"
    return CheckResult(label, "ok", f"host={host} vectors={vectors}")
