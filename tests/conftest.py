from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Generator

import httpx
import pytest

import sys


ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from primrose.client import PineconeClient, create_client
from primrose.config import Settings
from primrose.credentials import Credentials

CONTROL_HOST = "api.pinecone.test"
DATA_HOST = "movies-abc123.svc.pinecone.test"


def index_payload(name: str = "movies", host: str = DATA_HOST, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": name,
        "dimension": 3,
        "metric": "cosine",
        "host": host,
        "spec": {"serverless": {"cloud": "aws", "region": "us-east-1"}},
        "status": {"ready": True, "state": "Ready"},
        "deletion_protection": "disabled",
    }
    payload.update(overrides)
    return payload


Handler = Callable[[httpx.Request], httpx.Response]


@dataclass
class FakePinecone:
    """Route table for `httpx.MockTransport` that records every request."""

    routes: dict[tuple[str, str, str], Handler] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def add(self, method: str, host: str, path: str, handler: Handler | httpx.Response | dict | None = None) -> None:
        if handler is None:

            def _empty(request: httpx.Request) -> httpx.Response:
                return httpx.Response(200, content=b"", request=request)

            self.routes[(method, host, path)] = _empty
        elif isinstance(handler, dict):
            body = handler

            def _json(request: httpx.Request) -> httpx.Response:
                return httpx.Response(200, json=body, request=request)

            self.routes[(method, host, path)] = _json
        elif isinstance(handler, httpx.Response):
            response = handler

            def _fixed(request: httpx.Request) -> httpx.Response:
                return httpx.Response(
                    response.status_code,
                    content=response.content,
                    headers=response.headers,
                    request=request,
                )

            self.routes[(method, host, path)] = _fixed
        else:
            self.routes[(method, host, path)] = handler

    def describe(self, name: str = "movies", host: str = DATA_HOST) -> None:
        self.add("GET", CONTROL_HOST, f"/indexes/{name}", index_payload(name=name, host=host))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.host, request.url.raw_path.decode("ascii").split("?", 1)[0])
        route = self.routes.get(key)
        if route is None:
            return httpx.Response(404, json={"error": {"code": "NOT_FOUND", "message": f"no route {key}"}})
        return route(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None


@pytest.fixture
def settings() -> Generator[Settings, None, None]:
    """Return a fresh Settings instance pointing at the fake control plane."""

    yield Settings(
        _env_file=None,
        PINECONE_CONTROL_PLANE_URL=f"https://{CONTROL_HOST}",
        PINECONE_API_VERSION="2025-01",
        PINECONE_TIMEOUT_SECONDS=5.0,
    )


@pytest.fixture
def fake() -> FakePinecone:
    return FakePinecone()


@pytest.fixture
def client(fake: FakePinecone, settings: Settings) -> PineconeClient:
    return create_client(Credentials(api_key="pk-test"), settings=settings, transport=fake.transport())
