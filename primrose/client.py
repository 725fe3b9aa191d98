"""Credential-scoped async client for the Pinecone REST APIs.

Base URLs:
- Control plane: `Settings.control_plane_url` (https://api.pinecone.io)
- Data plane: the per-index host returned by describe-index

Each `create_client()` call returns a fresh `PineconeClient` with its own
endpoint cache, so one client serves exactly one credential context. Every
operation is declared in `primrose.operations` and routed through `_call()`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel

from primrose.cache import EndpointCache
from primrose.config import Settings, get_settings
from primrose.credentials import Credentials
from primrose.errors import (
    MISSING_API_KEY_MESSAGE,
    AuthenticationError,
    PineconeApiError,
    PreconditionError,
    RateLimitError,
    classify_response,
    decode_success,
    describe_error,
)
from primrose.models.backups import (
    BackupModel,
    CreateBackupRequest,
    CreateIndexFromBackupRequest,
    CreateIndexFromBackupResponse,
    RestoreJobModel,
)
from primrose.models.collections import CollectionModel, CreateCollectionRequest
from primrose.models.imports import ImportModel, StartImportRequest, StartImportResponse
from primrose.models.indexes import ConfigureIndexRequest, CreateIndexRequest, IndexModel
from primrose.models.inference import EmbedRequest, EmbedResponse, ModelInfo, RerankRequest, RerankResponse
from primrose.models.namespaces import NamespaceModel
from primrose.models.vectors import (
    DeleteRequest,
    DescribeIndexStatsRequest,
    DescribeIndexStatsResponse,
    FetchResponse,
    ListVectorsResponse,
    QueryRequest,
    QueryResponse,
    UpdateRequest,
    UpsertRequest,
    UpsertResponse,
    Usage,
)
from primrose.net.http import AsyncHttpClient, safe_response_text
from primrose.operations import Operation, Plane, get_operation
from primrose.pagination import Page, next_token_from

log = logger.bind(module="client")

M = TypeVar("M", bound=BaseModel)

__all__ = ["ConnectionStatus", "PineconeClient", "VectorIdPage", "create_client"]


@dataclass(frozen=True, slots=True)
class ConnectionStatus:
    connected: bool
    message: str


@dataclass(frozen=True, slots=True)
class VectorIdPage(Page[str]):
    """A page of vector ids with the namespace and read usage the server reported."""

    namespace: str = ""
    usage: Usage | None = None


def _decode(model: type[M], payload: Any) -> M | None:
    if payload is None:
        return None
    return model.model_validate(payload)


def _unwrap(payload: Any, field: str) -> list[Any]:
    """Return the collection under `field`, or an empty list when absent."""
    if not isinstance(payload, Mapping):
        return []
    items = payload.get(field)
    if items is None:
        return []
    return list(items)


def _page_params(limit: int | None, pagination_token: str | None, **extra: Any) -> dict[str, Any]:
    params: dict[str, Any] = {key: value for key, value in extra.items() if value}
    if limit:
        params["limit"] = int(limit)
    if pagination_token:
        params["paginationToken"] = pagination_token
    return params


def _body(request: BaseModel | None) -> dict[str, Any]:
    if request is None:
        return {}
    return request.model_dump(mode="json", by_alias=True, exclude_none=True)


class PineconeClient:
    """Typed facade over the Pinecone control and data planes.

    All operations are coroutines. Failures surface as `PineconeApiError`
    subclasses; transport errors from httpx and malformed success bodies
    propagate unchanged. Nothing is retried here.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self.settings = settings or get_settings()
        self.control_plane_url = self.settings.control_plane_url.rstrip("/")
        self.api_version = self.settings.api_version
        self.endpoints = EndpointCache()
        self._http = AsyncHttpClient(
            timeout_seconds=self.settings.timeout_seconds,
            follow_redirects=self.settings.follow_redirects,
            user_agent=self.settings.user_agent,
            transport=transport,
        )

    async def __aenter__(self) -> "PineconeClient":
        await self._http.__aenter__()
        return self

    async def __aexit__(self, exc_type: object, exc: object, tb: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release pooled HTTP connections, if any."""
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _auth_headers(self) -> dict[str, str]:
        if not self._credentials.has_api_key:
            raise AuthenticationError(MISSING_API_KEY_MESSAGE)
        return {
            "Api-Key": str(self._credentials.api_key),
            "Content-Type": "application/json",
            "X-Pinecone-Api-Version": self.api_version,
        }

    async def _resolve_endpoint(self, index_name: str) -> str:
        cached = self.endpoints.get(index_name)
        if cached is not None:
            return cached
        log.debug("Resolving data-plane host for index {}", index_name)
        index = await self.describe_index(index_name)
        resolved = self.endpoints.get(index_name)
        if resolved is None:
            raise PineconeApiError(f"Index {index.name!r} does not expose a data-plane host yet.")
        return resolved

    async def _call(
        self,
        name: str,
        *,
        index_name: str | None = None,
        path_params: Mapping[str, object] | None = None,
        params: Mapping[str, Any] | None = None,
        json_body: Any | None = None,
    ) -> Any:
        """Send one declared operation and return its decoded JSON payload."""
        op: Operation = get_operation(name)
        headers = self._auth_headers()

        if op.plane is Plane.DATA:
            if not index_name:
                raise PreconditionError("Must provide an index name")
            base_url = await self._resolve_endpoint(index_name)
        else:
            base_url = self.control_plane_url

        render_args: dict[str, object] = dict(path_params or {})
        if index_name is not None:
            render_args.setdefault("index_name", index_name)
        url = f"{base_url}{op.render_path(**render_args)}"

        response = await self._http.request(
            op.method,
            url,
            params=params,
            headers=headers,
            json_body=json_body,
        )
        log.debug("{} {} [{}] -> {}", op.method, op.name, op.plane.value, response.status_code)

        error = classify_response(response.status_code, response.headers, response.content)
        if error is not None:
            if isinstance(error, RateLimitError):
                log.warning("{} rate limited; retry after {}s", op.name, error.retry_after)
            elif not isinstance(error, AuthenticationError):
                log.debug("{} failed: {} body={}", op.name, describe_error(error), safe_response_text(response))
            raise error

        if op.evicts_endpoint and index_name is not None:
            if self.endpoints.evict(index_name):
                log.info("Dropped cached data-plane host for deleted index {}", index_name)
        return decode_success(response.status_code, response.content)

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    async def test_connection(self) -> ConnectionStatus:
        """Probe the control plane; failures are reported, not raised."""
        try:
            await self.list_indexes()
        except (PineconeApiError, httpx.HTTPError) as exc:
            message = getattr(exc, "message", None) or str(exc) or "Connection failed"
            return ConnectionStatus(connected=False, message=message)
        return ConnectionStatus(connected=True, message="Successfully connected to Pinecone")

    # ------------------------------------------------------------------
    # Indexes (control plane)
    # ------------------------------------------------------------------

    async def list_indexes(self) -> list[IndexModel]:
        payload = await self._call("list_indexes")
        return [IndexModel.model_validate(item) for item in _unwrap(payload, "indexes")]

    async def create_index(self, request: CreateIndexRequest) -> IndexModel | None:
        payload = await self._call("create_index", json_body=_body(request))
        return _decode(IndexModel, payload)

    async def describe_index(self, index_name: str) -> IndexModel:
        """Describe an index and remember its data-plane host."""
        payload = await self._call("describe_index", index_name=index_name)
        index = IndexModel.model_validate(payload)
        if index.host and index.host.strip():
            self.endpoints.put(index_name, index.host)
        return index

    async def delete_index(self, index_name: str) -> None:
        """Delete an index; its cached host is evicted before returning."""
        await self._call("delete_index", index_name=index_name)

    async def configure_index(self, index_name: str, request: ConfigureIndexRequest) -> IndexModel | None:
        payload = await self._call("configure_index", index_name=index_name, json_body=_body(request))
        return _decode(IndexModel, payload)

    # ------------------------------------------------------------------
    # Collections (control plane)
    # ------------------------------------------------------------------

    async def list_collections(self) -> list[CollectionModel]:
        payload = await self._call("list_collections")
        return [CollectionModel.model_validate(item) for item in _unwrap(payload, "collections")]

    async def create_collection(self, request: CreateCollectionRequest) -> CollectionModel | None:
        payload = await self._call("create_collection", json_body=_body(request))
        return _decode(CollectionModel, payload)

    async def describe_collection(self, collection_name: str) -> CollectionModel:
        payload = await self._call("describe_collection", path_params={"collection_name": collection_name})
        return CollectionModel.model_validate(payload)

    async def delete_collection(self, collection_name: str) -> None:
        await self._call("delete_collection", path_params={"collection_name": collection_name})

    # ------------------------------------------------------------------
    # Backups and restore jobs (control plane)
    # ------------------------------------------------------------------

    async def list_backups(
        self,
        index_name: str | None = None,
        *,
        limit: int | None = None,
        pagination_token: str | None = None,
    ) -> Page[BackupModel]:
        """List backups for the project, or for one index when named."""
        params = _page_params(limit, pagination_token)
        if index_name:
            payload = await self._call("list_index_backups", path_params={"index_name": index_name}, params=params)
        else:
            payload = await self._call("list_backups", params=params)
        items = [BackupModel.model_validate(item) for item in _unwrap(payload, "backups")]
        return Page(items=items, next_token=next_token_from(payload))

    async def create_backup(self, index_name: str, request: CreateBackupRequest | None = None) -> BackupModel | None:
        payload = await self._call(
            "create_backup",
            path_params={"index_name": index_name},
            json_body=_body(request),
        )
        return _decode(BackupModel, payload)

    async def describe_backup(self, backup_id: str) -> BackupModel:
        payload = await self._call("describe_backup", path_params={"backup_id": backup_id})
        return BackupModel.model_validate(payload)

    async def delete_backup(self, backup_id: str) -> None:
        await self._call("delete_backup", path_params={"backup_id": backup_id})

    async def create_index_from_backup(
        self, request: CreateIndexFromBackupRequest
    ) -> CreateIndexFromBackupResponse | None:
        payload = await self._call("create_index_from_backup", json_body=_body(request))
        return _decode(CreateIndexFromBackupResponse, payload)

    async def list_restore_jobs(
        self,
        *,
        limit: int | None = None,
        pagination_token: str | None = None,
    ) -> Page[RestoreJobModel]:
        payload = await self._call("list_restore_jobs", params=_page_params(limit, pagination_token))
        items = [RestoreJobModel.model_validate(item) for item in _unwrap(payload, "restore_jobs")]
        return Page(items=items, next_token=next_token_from(payload))

    async def describe_restore_job(self, restore_job_id: str) -> RestoreJobModel:
        payload = await self._call("describe_restore_job", path_params={"restore_job_id": restore_job_id})
        return RestoreJobModel.model_validate(payload)

    # ------------------------------------------------------------------
    # Vectors (data plane)
    # ------------------------------------------------------------------

    async def upsert_vectors(self, index_name: str, request: UpsertRequest) -> UpsertResponse:
        payload = await self._call("upsert_vectors", index_name=index_name, json_body=_body(request))
        return UpsertResponse.model_validate(payload)

    async def query_vectors(self, index_name: str, request: QueryRequest) -> QueryResponse:
        """Similarity search by explicit vector or by the id of a stored vector."""
        if request.vector is None and not request.id:
            raise PreconditionError("Must provide either vector or id")
        payload = await self._call("query_vectors", index_name=index_name, json_body=_body(request))
        return QueryResponse.model_validate(payload or {})

    async def fetch_vectors(
        self,
        index_name: str,
        ids: Sequence[str],
        namespace: str | None = None,
    ) -> FetchResponse:
        if not ids:
            raise PreconditionError("Must provide at least one vector id to fetch")
        params: dict[str, Any] = {"ids": list(ids)}
        if namespace:
            params["namespace"] = namespace
        payload = await self._call("fetch_vectors", index_name=index_name, params=params)
        return FetchResponse.model_validate(payload or {})

    async def update_vector(self, index_name: str, request: UpdateRequest) -> None:
        if request.values is None and request.sparse_values is None and request.set_metadata is None:
            raise PreconditionError("Must provide either values or setMetadata")
        await self._call("update_vector", index_name=index_name, json_body=_body(request))

    async def delete_vectors(self, index_name: str, request: DeleteRequest) -> None:
        """Delete by id list, by metadata filter, or everything in a namespace."""
        if not request.ids and not request.delete_all and not request.filter:
            raise PreconditionError("Must provide ids, deleteAll, or filter")
        await self._call("delete_vectors", index_name=index_name, json_body=_body(request))

    async def list_vector_ids(
        self,
        index_name: str,
        *,
        namespace: str | None = None,
        prefix: str | None = None,
        limit: int | None = None,
        pagination_token: str | None = None,
    ) -> VectorIdPage:
        params = _page_params(limit, pagination_token, namespace=namespace, prefix=prefix)
        payload = await self._call("list_vector_ids", index_name=index_name, params=params)
        listing = ListVectorsResponse.model_validate(payload or {})
        return VectorIdPage(
            items=[vector.id for vector in listing.vectors],
            next_token=next_token_from(payload),
            namespace=listing.namespace,
            usage=listing.usage,
        )

    async def describe_index_stats(
        self,
        index_name: str,
        request: DescribeIndexStatsRequest | None = None,
    ) -> DescribeIndexStatsResponse:
        payload = await self._call("describe_index_stats", index_name=index_name, json_body=_body(request))
        return DescribeIndexStatsResponse.model_validate(payload or {})

    # ------------------------------------------------------------------
    # Namespaces (data plane)
    # ------------------------------------------------------------------

    async def list_namespaces(
        self,
        index_name: str,
        *,
        limit: int | None = None,
        pagination_token: str | None = None,
    ) -> Page[NamespaceModel]:
        payload = await self._call(
            "list_namespaces",
            index_name=index_name,
            params=_page_params(limit, pagination_token),
        )
        items = [NamespaceModel.model_validate(item) for item in _unwrap(payload, "namespaces")]
        return Page(items=items, next_token=next_token_from(payload))

    async def describe_namespace(self, index_name: str, namespace: str) -> NamespaceModel:
        payload = await self._call("describe_namespace", index_name=index_name, path_params={"namespace": namespace})
        return NamespaceModel.model_validate(payload)

    async def delete_namespace(self, index_name: str, namespace: str) -> None:
        await self._call("delete_namespace", index_name=index_name, path_params={"namespace": namespace})

    # ------------------------------------------------------------------
    # Bulk import (data plane)
    # ------------------------------------------------------------------

    async def start_import(self, index_name: str, request: StartImportRequest) -> StartImportResponse | None:
        payload = await self._call("start_import", index_name=index_name, json_body=_body(request))
        return _decode(StartImportResponse, payload)

    async def list_imports(
        self,
        index_name: str,
        *,
        limit: int | None = None,
        pagination_token: str | None = None,
    ) -> Page[ImportModel]:
        payload = await self._call(
            "list_imports",
            index_name=index_name,
            params=_page_params(limit, pagination_token),
        )
        items = [ImportModel.model_validate(item) for item in _unwrap(payload, "imports")]
        return Page(items=items, next_token=next_token_from(payload))

    async def describe_import(self, index_name: str, import_id: str) -> ImportModel:
        payload = await self._call("describe_import", index_name=index_name, path_params={"import_id": import_id})
        return ImportModel.model_validate(payload)

    async def cancel_import(self, index_name: str, import_id: str) -> None:
        await self._call("cancel_import", index_name=index_name, path_params={"import_id": import_id})

    # ------------------------------------------------------------------
    # Inference (control plane)
    # ------------------------------------------------------------------

    async def generate_embeddings(self, request: EmbedRequest) -> EmbedResponse:
        payload = await self._call("generate_embeddings", json_body=_body(request))
        return EmbedResponse.model_validate(payload)

    async def rerank_documents(self, request: RerankRequest) -> RerankResponse:
        payload = await self._call("rerank_documents", json_body=_body(request))
        return RerankResponse.model_validate(payload)

    async def list_models(self) -> list[ModelInfo]:
        payload = await self._call("list_models")
        return [ModelInfo.model_validate(item) for item in _unwrap(payload, "models")]

    async def describe_model(self, model_name: str) -> ModelInfo:
        payload = await self._call("describe_model", path_params={"model_name": model_name})
        return ModelInfo.model_validate(payload)


def create_client(
    credentials: Credentials,
    *,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PineconeClient:
    """Create a client bound to one credential context.

    Each call returns a new instance with an empty endpoint cache; clients
    must not be shared between tenants.
    """
    return PineconeClient(credentials, settings=settings, transport=transport)
