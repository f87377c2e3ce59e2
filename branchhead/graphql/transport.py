"""Execute one GraphQL request/response cycle over HTTP."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import httpx
import msgspec

from branchhead.logging import get_logger

from .errors import GraphQLResponseError, PlatformError, TransportError
from .models import DataT, GraphQLQuery, GraphQLResponse, VariablesT

if typ.TYPE_CHECKING:
    import types

logger = get_logger(__name__)

_HTTP_ERROR_STATUS_THRESHOLD = 400
_ENVELOPE_KEYS = frozenset({"data", "errors"})
_HTTP_SCHEMES = frozenset({"http", "https"})


def _platform_message(payload: object) -> str | None:
    """Return the message of an out-of-band ``{"message": ...}`` body."""
    if not isinstance(payload, dict):
        return None
    message = payload.get("message")
    if not isinstance(message, str) or _ENVELOPE_KEYS & payload.keys():
        return None
    return message


def decode_envelope(
    body: bytes,
    data_type: type[DataT],
    *,
    status_code: int = 200,
) -> GraphQLResponse[DataT]:
    """Decode a raw response body into a typed GraphQL envelope.

    Parameters
    ----------
    body
        The complete response body.
    data_type
        Type the envelope's ``data`` member is validated against.
    status_code
        HTTP status the body arrived with.

    Returns
    -------
    GraphQLResponse
        The validated envelope. In-band ``errors`` are left for the caller.

    Raises
    ------
    TransportError
        If the body is not UTF-8, not JSON, or not shaped like the envelope.
    PlatformError
        If the body is an out-of-band ``{"message": ...}`` object, or the
        status is an error without a GraphQL envelope.

    """
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TransportError.undecodable_body(str(exc)) from exc

    try:
        payload = msgspec.json.decode(text)
    except msgspec.DecodeError as exc:
        if status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise PlatformError.http_error(status_code) from exc
        raise TransportError.invalid_json(text, str(exc)) from exc

    message = _platform_message(payload)
    if message is not None:
        raise PlatformError.from_message(message, status_code=status_code)

    if not isinstance(payload, dict) or not _ENVELOPE_KEYS & payload.keys():
        if status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise PlatformError.http_error(status_code)
        raise TransportError.invalid_shape("expected a GraphQL data/errors envelope")

    try:
        return msgspec.convert(payload, GraphQLResponse[data_type])
    except msgspec.ValidationError as exc:
        raise TransportError.invalid_shape(str(exc)) from exc


class GraphQLTransport:
    """Send GraphQL queries as JSON POST requests.

    The transport owns its ``httpx.AsyncClient`` unless one is injected, in
    which case the caller keeps responsibility for closing it. No retries are
    attempted and timeouts are whatever the HTTP client enforces.
    """

    def __init__(self, *, http_client: httpx.AsyncClient | None = None) -> None:
        """Initialise the transport, creating a client when none is given."""
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient()

    async def aclose(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> typ.Self:
        """Return the transport for use in an ``async with`` block."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Close owned resources on exit."""
        await self.aclose()

    async def execute(
        self,
        query: GraphQLQuery[VariablesT, DataT],
        variables: VariablesT,
        *,
        endpoint: str,
        headers: cabc.Mapping[str, str],
    ) -> GraphQLResponse[DataT]:
        """POST ``query`` with ``variables`` to ``endpoint`` and decode the reply.

        Returns
        -------
        GraphQLResponse
            The typed envelope, which may still carry in-band ``errors``.

        Raises
        ------
        TransportError
            If the request cannot be built or sent, or the reply cannot be
            decoded.
        PlatformError
            If the API answers outside the GraphQL envelope.

        """
        body = msgspec.json.encode(query.build_body(variables))
        request = self._build_request(endpoint, headers, body)
        logger.debug(
            "graphql.request",
            endpoint=endpoint,
            operation=query.operation_name,
            body_bytes=len(body),
        )
        response = await self._send(request, endpoint)
        logger.debug(
            "graphql.response",
            endpoint=endpoint,
            status_code=response.status_code,
            body_bytes=len(response.content),
        )
        return decode_envelope(
            response.content,
            query.response_type,
            status_code=response.status_code,
        )

    def _build_request(
        self,
        endpoint: str,
        headers: cabc.Mapping[str, str],
        body: bytes,
    ) -> httpx.Request:
        try:
            request = self._client.build_request(
                "POST",
                endpoint,
                headers=dict(headers),
                content=body,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise TransportError.request_invalid(endpoint, str(exc)) from exc
        if request.url.scheme not in _HTTP_SCHEMES:
            raise TransportError.request_invalid(
                endpoint, "endpoint must be an absolute http(s) URL"
            )
        return request

    async def _send(self, request: httpx.Request, endpoint: str) -> httpx.Response:
        try:
            return await self._client.send(request)
        except httpx.UnsupportedProtocol as exc:
            raise TransportError.request_invalid(endpoint, str(exc)) from exc
        except httpx.TimeoutException as exc:
            logger.warning("graphql.request.timeout", endpoint=endpoint)
            raise TransportError.timeout(endpoint) from exc
        except httpx.RequestError as exc:
            logger.warning(
                "graphql.request.failed", endpoint=endpoint, error=str(exc)
            )
            raise TransportError.network_error(endpoint, str(exc)) from exc


def require_data(response: GraphQLResponse[DataT]) -> DataT:
    """Return the envelope's data, or raise when the server sent none.

    Raises
    ------
    GraphQLResponseError
        Listing every server-reported message when ``data`` is null.

    """
    if response.data is not None:
        return response.data
    if response.errors:
        raise GraphQLResponseError.from_errors(response.error_messages)
    raise GraphQLResponseError.empty_response()
