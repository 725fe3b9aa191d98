"""Namespace schemas (data plane)."""

from __future__ import annotations

from primrose.models import WireModel


class NamespaceModel(WireModel):
    name: str
    vector_count: int | None = None


__all__ = ["NamespaceModel"]
