"""Errors raised while executing a GraphQL request."""

from __future__ import annotations

import enum
import typing as typ

from branchhead.errors import BranchHeadError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

# Body preview length for error messages
_BODY_PREVIEW_LIMIT = 120


def _preview(body: str) -> str:
    if len(body) > _BODY_PREVIEW_LIMIT:
        return body[:_BODY_PREVIEW_LIMIT] + "..."
    return body


class TransportStep(enum.StrEnum):
    """Stage of the request/response cycle at which a transport error occurred."""

    BUILD_REQUEST = "build_request"
    SEND_REQUEST = "send_request"
    DECODE_BODY = "decode_body"
    PARSE_JSON = "parse_json"
    VALIDATE_SHAPE = "validate_shape"


class TransportError(BranchHeadError):
    """Raised when a GraphQL request cannot be built, sent, or decoded.

    Attributes
    ----------
    step
        The stage of the request/response cycle that failed.

    """

    def __init__(self, message: str, *, step: TransportStep) -> None:
        """Initialise with a message and the failing step."""
        self.step = step
        super().__init__(message)

    @classmethod
    def request_invalid(cls, endpoint: str, detail: str) -> TransportError:
        """Return an error for a request that could not be constructed."""
        return cls(
            f"Could not create request for {endpoint}: {detail}",
            step=TransportStep.BUILD_REQUEST,
        )

    @classmethod
    def network_error(cls, endpoint: str, detail: str) -> TransportError:
        """Return an error for connection, TLS, or protocol failures."""
        return cls(
            f"Could not execute request to {endpoint}: {detail}",
            step=TransportStep.SEND_REQUEST,
        )

    @classmethod
    def timeout(cls, endpoint: str) -> TransportError:
        """Return an error for a request that exceeded the client timeout."""
        return cls(
            f"Request to {endpoint} timed out",
            step=TransportStep.SEND_REQUEST,
        )

    @classmethod
    def undecodable_body(cls, detail: str) -> TransportError:
        """Return an error for a response body that is not UTF-8 text."""
        return cls(
            f"Could not get text from response: {detail}",
            step=TransportStep.DECODE_BODY,
        )

    @classmethod
    def invalid_json(cls, body: str, detail: str) -> TransportError:
        """Return an error for a body that is not valid JSON."""
        return cls(
            f"Could not parse response data ({detail}): {_preview(body)}",
            step=TransportStep.PARSE_JSON,
        )

    @classmethod
    def invalid_shape(cls, detail: str) -> TransportError:
        """Return an error for JSON that does not match the expected schema."""
        return cls(
            f"Response did not match the expected schema: {detail}",
            step=TransportStep.VALIDATE_SHAPE,
        )


class PlatformError(BranchHeadError):
    """Raised when the API rejects a request outside the GraphQL envelope.

    GitHub answers authentication and endpoint failures with a bare
    ``{"message": ...}`` object instead of ``{"data", "errors"}``.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def from_message(cls, message: str, *, status_code: int) -> PlatformError:
        """Return an error carrying the platform's own message."""
        return cls(
            f"GitHub rejected the request (HTTP {status_code}): {message}",
            status_code=status_code,
        )

    @classmethod
    def http_error(cls, status_code: int) -> PlatformError:
        """Return an error for non-2xx responses without a usable message."""
        return cls(f"GitHub GraphQL HTTP {status_code}", status_code=status_code)


class GraphQLResponseError(BranchHeadError):
    """Raised when the envelope reports errors and carries no usable data.

    Attributes
    ----------
    messages
        Every server-reported error message, in response order.

    """

    def __init__(self, message: str, *, messages: tuple[str, ...] = ()) -> None:
        """Initialise with a summary and the individual server messages."""
        self.messages = messages
        super().__init__(message)

    @classmethod
    def from_errors(cls, messages: cabc.Sequence[str]) -> GraphQLResponseError:
        """Return an error listing every server-reported message."""
        collected = tuple(messages)
        return cls(
            f"GitHub GraphQL errors ({len(collected)}): {'; '.join(collected)}",
            messages=collected,
        )

    @classmethod
    def empty_response(cls) -> GraphQLResponseError:
        """Return an error for an envelope with neither data nor errors."""
        return cls("No data on response")
