"""Bulk import schemas (data plane)."""

from __future__ import annotations

import enum
from typing import Literal

from primrose.models import WireModel


class ImportStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


class ImportModel(WireModel):
    id: str
    uri: str | None = None
    status: ImportStatus
    created_at: str | None = None
    finished_at: str | None = None
    percent_complete: float | None = None
    records_imported: int | None = None
    error: str | None = None


class ImportErrorMode(WireModel):
    on_error: Literal["abort", "continue"] | None = None


class StartImportRequest(WireModel):
    uri: str
    integration_id: str | None = None
    error_mode: ImportErrorMode | None = None


class StartImportResponse(WireModel):
    id: str


__all__ = [
    "ImportErrorMode",
    "ImportModel",
    "ImportStatus",
    "StartImportRequest",
    "StartImportResponse",
]
