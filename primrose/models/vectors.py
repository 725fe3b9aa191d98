"""Vector, query and index statistics schemas (data plane).

The data plane speaks camelCase; Python attributes are snake_case with the
wire spelling kept as the field alias.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from primrose.models import Pagination, WireModel


class SparseValues(WireModel):
    indices: list[int]
    values: list[float]


class Vector(WireModel):
    id: str
    values: list[float]
    sparse_values: SparseValues | None = Field(default=None, alias="sparseValues")
    metadata: dict[str, Any] | None = None


class ScoredVector(WireModel):
    id: str
    score: float
    values: list[float] | None = None
    sparse_values: SparseValues | None = Field(default=None, alias="sparseValues")
    metadata: dict[str, Any] | None = None


class Usage(WireModel):
    read_units: int | None = Field(default=None, alias="readUnits")
    write_units: int | None = Field(default=None, alias="writeUnits")


class UpsertRequest(WireModel):
    vectors: list[Vector]
    namespace: str | None = None


class UpsertResponse(WireModel):
    upserted_count: int = Field(alias="upsertedCount")


class QueryRequest(WireModel):
    """Similarity query by explicit vector or by the id of a stored vector."""

    top_k: int = Field(alias="topK")
    namespace: str | None = None
    vector: list[float] | None = None
    id: str | None = None
    sparse_vector: SparseValues | None = Field(default=None, alias="sparseVector")
    filter: dict[str, Any] | None = None
    include_values: bool | None = Field(default=None, alias="includeValues")
    include_metadata: bool | None = Field(default=None, alias="includeMetadata")


class QueryResponse(WireModel):
    matches: list[ScoredVector] = Field(default_factory=list)
    namespace: str = ""
    usage: Usage | None = None


class FetchResponse(WireModel):
    vectors: dict[str, Vector] = Field(default_factory=dict)
    namespace: str = ""
    usage: Usage | None = None


class UpdateRequest(WireModel):
    id: str
    values: list[float] | None = None
    sparse_values: SparseValues | None = Field(default=None, alias="sparseValues")
    set_metadata: dict[str, Any] | None = Field(default=None, alias="setMetadata")
    namespace: str | None = None


class DeleteRequest(WireModel):
    ids: list[str] | None = None
    delete_all: bool | None = Field(default=None, alias="deleteAll")
    namespace: str | None = None
    filter: dict[str, Any] | None = None


class VectorId(WireModel):
    id: str


class ListVectorsResponse(WireModel):
    vectors: list[VectorId] = Field(default_factory=list)
    pagination: Pagination | None = None
    namespace: str = ""
    usage: Usage | None = None


class DescribeIndexStatsRequest(WireModel):
    filter: dict[str, Any] | None = None


class NamespaceStats(WireModel):
    vector_count: int = Field(default=0, alias="vectorCount")


class DescribeIndexStatsResponse(WireModel):
    namespaces: dict[str, NamespaceStats] = Field(default_factory=dict)
    dimension: int | None = None
    index_fullness: float | None = Field(default=None, alias="indexFullness")
    total_vector_count: int | None = Field(default=None, alias="totalVectorCount")


__all__ = [
    "DeleteRequest",
    "DescribeIndexStatsRequest",
    "DescribeIndexStatsResponse",
    "FetchResponse",
    "ListVectorsResponse",
    "NamespaceStats",
    "QueryRequest",
    "QueryResponse",
    "ScoredVector",
    "SparseValues",
    "UpdateRequest",
    "UpsertRequest",
    "UpsertResponse",
    "Usage",
    "Vector",
    "VectorId",
]
