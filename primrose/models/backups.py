"""Backup and restore job schemas."""

from __future__ import annotations

import enum

from primrose.models import WireModel
from primrose.models.indexes import DeletionProtection


class BackupStatus(str, enum.Enum):
    INITIALIZING = "Initializing"
    READY = "Ready"
    FAILED = "Failed"


class RestoreJobStatus(str, enum.Enum):
    PENDING = "Pending"
    RUNNING = "Running"
    COMPLETED = "Completed"
    FAILED = "Failed"


class BackupModel(WireModel):
    backup_id: str
    source_index_name: str
    status: BackupStatus
    name: str | None = None
    description: str | None = None
    cloud: str | None = None
    region: str | None = None
    dimension: int | None = None
    metric: str | None = None
    record_count: int | None = None
    namespace_count: int | None = None
    size_bytes: int | None = None
    tags: dict[str, str] | None = None
    # Timestamps are kept as the server's ISO-8601 strings.
    created_at: str | None = None


class CreateBackupRequest(WireModel):
    name: str | None = None
    description: str | None = None


class CreateIndexFromBackupRequest(WireModel):
    name: str
    backup_id: str
    deletion_protection: DeletionProtection | None = None
    tags: dict[str, str] | None = None


class CreateIndexFromBackupResponse(WireModel):
    restore_job_id: str | None = None
    index_id: str | None = None


class RestoreJobModel(WireModel):
    restore_job_id: str
    backup_id: str
    target_index_name: str
    status: RestoreJobStatus
    created_at: str | None = None
    completed_at: str | None = None
    percent_complete: float | None = None


__all__ = [
    "BackupModel",
    "BackupStatus",
    "CreateBackupRequest",
    "CreateIndexFromBackupRequest",
    "CreateIndexFromBackupResponse",
    "RestoreJobModel",
    "RestoreJobStatus",
]
