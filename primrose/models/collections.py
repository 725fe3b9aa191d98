"""Collection schemas."""

from __future__ import annotations

import enum

from primrose.models import WireModel


class CollectionStatus(str, enum.Enum):
    INITIALIZING = "Initializing"
    READY = "Ready"
    TERMINATING = "Terminating"


class CollectionModel(WireModel):
    name: str
    status: CollectionStatus
    size: int | None = None
    dimension: int | None = None
    vector_count: int | None = None
    environment: str | None = None


class CreateCollectionRequest(WireModel):
    name: str
    source: str


__all__ = ["CollectionModel", "CollectionStatus", "CreateCollectionRequest"]
