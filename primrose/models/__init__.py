"""Pydantic models mirroring the Pinecone REST wire contracts."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

__all__ = ["Pagination", "WireModel"]


class WireModel(BaseModel):
    """Base model for request and response payloads.

    Field names follow Python conventions; the JSON spelling (camelCase for the
    data plane, snake_case for the control plane) is kept via aliases. Unknown
    fields are retained so that a payload survives a parse/serialize cycle
    unchanged even when the server adds attributes.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_wire(self) -> dict[str, Any]:
        """Serialize using wire field names, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Pagination(WireModel):
    next: str | None = None
