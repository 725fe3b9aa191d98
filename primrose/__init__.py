"""Credential-scoped async facade over the Pinecone REST APIs."""

from __future__ import annotations

__version__ = "0.1.0"

from primrose.client import ConnectionStatus, PineconeClient, VectorIdPage, create_client  # noqa: E402
from primrose.credentials import Credentials  # noqa: E402
from primrose.errors import (  # noqa: E402
    AuthenticationError,
    PineconeApiError,
    PreconditionError,
    RateLimitError,
)

__all__ = [
    "AuthenticationError",
    "ConnectionStatus",
    "Credentials",
    "PineconeApiError",
    "PineconeClient",
    "PreconditionError",
    "RateLimitError",
    "VectorIdPage",
    "__version__",
    "create_client",
]
