"""Index lifecycle schemas (control plane)."""

from __future__ import annotations

import enum
from typing import Literal

from primrose.models import WireModel

Metric = Literal["cosine", "euclidean", "dotproduct"]
Cloud = Literal["aws", "gcp", "azure"]
DeletionProtection = Literal["enabled", "disabled"]


class IndexState(str, enum.Enum):
    INITIALIZING = "Initializing"
    INITIALIZATION_FAILED = "InitializationFailed"
    SCALING_UP = "ScalingUp"
    SCALING_DOWN = "ScalingDown"
    SCALING_UP_POD_SIZE = "ScalingUpPodSize"
    SCALING_DOWN_POD_SIZE = "ScalingDownPodSize"
    TERMINATING = "Terminating"
    READY = "Ready"


class ServerlessSpec(WireModel):
    cloud: Cloud
    region: str


class MetadataConfig(WireModel):
    indexed: list[str] | None = None


class PodSpec(WireModel):
    environment: str
    pod_type: str
    pods: int | None = None
    replicas: int | None = None
    shards: int | None = None
    metadata_config: MetadataConfig | None = None
    source_collection: str | None = None


class IndexSpec(WireModel):
    serverless: ServerlessSpec | None = None
    pod: PodSpec | None = None


class IndexStatus(WireModel):
    ready: bool
    state: IndexState


class IndexModel(WireModel):
    """Resource descriptor returned by describe/list/create index."""

    name: str
    dimension: int | None = None
    metric: Metric
    host: str | None = None
    spec: IndexSpec
    status: IndexStatus
    deletion_protection: DeletionProtection | None = None
    tags: dict[str, str] | None = None


class CreateIndexRequest(WireModel):
    name: str
    dimension: int
    metric: Metric | None = None
    spec: IndexSpec
    deletion_protection: DeletionProtection | None = None
    tags: dict[str, str] | None = None


class ConfigurePodSpec(WireModel):
    replicas: int | None = None
    pod_type: str | None = None


class ConfigureIndexSpec(WireModel):
    pod: ConfigurePodSpec | None = None


class ConfigureIndexRequest(WireModel):
    spec: ConfigureIndexSpec | None = None
    deletion_protection: DeletionProtection | None = None
    tags: dict[str, str] | None = None


__all__ = [
    "Cloud",
    "ConfigureIndexRequest",
    "ConfigureIndexSpec",
    "ConfigurePodSpec",
    "CreateIndexRequest",
    "DeletionProtection",
    "IndexModel",
    "IndexSpec",
    "IndexState",
    "IndexStatus",
    "MetadataConfig",
    "Metric",
    "PodSpec",
    "ServerlessSpec",
]
