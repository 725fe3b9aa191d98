"""Declarative descriptors for every remote operation.

Each operation is bound to one plane at definition time. The client consults
this table from a single dispatch routine, so routing rules (base address,
path encoding, cache eviction) live in exactly one place.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Final
from urllib.parse import quote


class Plane(str, enum.Enum):
    CONTROL = "control"
    DATA = "data"


@dataclass(frozen=True, slots=True)
class Operation:
    """A single REST call: method, path template and target plane.

    Path templates use `str.format` placeholders; every value is
    percent-encoded before substitution. `evicts_endpoint` marks operations
    whose success invalidates the cached data-plane host of `index_name`.
    """

    name: str
    method: str
    path: str
    plane: Plane
    evicts_endpoint: bool = False

    def render_path(self, **params: object) -> str:
        encoded = {key: quote(str(value), safe="") for key, value in params.items()}
        try:
            return self.path.format(**encoded)
        except KeyError as exc:
            raise ValueError(f"Operation {self.name!r} requires path parameter {exc.args[0]!r}.") from exc


def _control(name: str, method: str, path: str, *, evicts_endpoint: bool = False) -> Operation:
    return Operation(name=name, method=method, path=path, plane=Plane.CONTROL, evicts_endpoint=evicts_endpoint)


def _data(name: str, method: str, path: str) -> Operation:
    return Operation(name=name, method=method, path=path, plane=Plane.DATA)


_ALL: Final[tuple[Operation, ...]] = (
    # Indexes
    _control("list_indexes", "GET", "/indexes"),
    _control("create_index", "POST", "/indexes"),
    _control("describe_index", "GET", "/indexes/{index_name}"),
    _control("delete_index", "DELETE", "/indexes/{index_name}", evicts_endpoint=True),
    _control("configure_index", "PATCH", "/indexes/{index_name}"),
    # Collections
    _control("list_collections", "GET", "/collections"),
    _control("create_collection", "POST", "/collections"),
    _control("describe_collection", "GET", "/collections/{collection_name}"),
    _control("delete_collection", "DELETE", "/collections/{collection_name}"),
    # Backups and restore jobs
    _control("list_backups", "GET", "/backups"),
    _control("list_index_backups", "GET", "/indexes/{index_name}/backups"),
    _control("create_backup", "POST", "/indexes/{index_name}/backups"),
    _control("describe_backup", "GET", "/backups/{backup_id}"),
    _control("delete_backup", "DELETE", "/backups/{backup_id}"),
    _control("create_index_from_backup", "POST", "/indexes/from_backup"),
    _control("list_restore_jobs", "GET", "/restore_jobs"),
    _control("describe_restore_job", "GET", "/restore_jobs/{restore_job_id}"),
    # Inference
    _control("generate_embeddings", "POST", "/embed"),
    _control("rerank_documents", "POST", "/rerank"),
    _control("list_models", "GET", "/models"),
    _control("describe_model", "GET", "/models/{model_name}"),
    # Vectors
    _data("upsert_vectors", "POST", "/vectors/upsert"),
    _data("query_vectors", "POST", "/query"),
    _data("fetch_vectors", "GET", "/vectors/fetch"),
    _data("update_vector", "POST", "/vectors/update"),
    _data("delete_vectors", "POST", "/vectors/delete"),
    _data("list_vector_ids", "GET", "/vectors/list"),
    _data("describe_index_stats", "POST", "/describe_index_stats"),
    # Namespaces
    _data("list_namespaces", "GET", "/namespaces"),
    _data("describe_namespace", "GET", "/namespaces/{namespace}"),
    _data("delete_namespace", "DELETE", "/namespaces/{namespace}"),
    # Bulk import
    _data("start_import", "POST", "/bulk/imports"),
    _data("list_imports", "GET", "/bulk/imports"),
    _data("describe_import", "GET", "/bulk/imports/{import_id}"),
    _data("cancel_import", "POST", "/bulk/imports/{import_id}/cancel"),
)

OPERATIONS: Final[dict[str, Operation]] = {op.name: op for op in _ALL}


def get_operation(name: str) -> Operation:
    try:
        return OPERATIONS[name]
    except KeyError as exc:
        raise KeyError(f"Unknown operation: {name!r}") from exc


__all__ = ["OPERATIONS", "Operation", "Plane", "get_operation"]
