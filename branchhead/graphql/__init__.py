"""Generic GraphQL-over-HTTP transport."""

from __future__ import annotations

from .errors import GraphQLResponseError, PlatformError, TransportError, TransportStep
from .models import (
    GraphQLErrorLocation,
    GraphQLErrorPayload,
    GraphQLQuery,
    GraphQLResponse,
    QueryBody,
)
from .transport import GraphQLTransport, decode_envelope, require_data

__all__ = [
    "GraphQLErrorLocation",
    "GraphQLErrorPayload",
    "GraphQLQuery",
    "GraphQLResponse",
    "GraphQLResponseError",
    "GraphQLTransport",
    "PlatformError",
    "QueryBody",
    "TransportError",
    "TransportStep",
    "decode_envelope",
    "require_data",
]
