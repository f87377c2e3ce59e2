"""Wire structures shared by every GraphQL query."""

from __future__ import annotations

import dataclasses
import typing as typ

import msgspec

VariablesT = typ.TypeVar("VariablesT", bound=msgspec.Struct)
DataT = typ.TypeVar("DataT")


class GraphQLErrorLocation(msgspec.Struct, frozen=True):
    """Position in the query document an error refers to."""

    line: int
    column: int


class GraphQLErrorPayload(msgspec.Struct, kw_only=True, frozen=True):
    """One entry of the envelope's ``errors`` list.

    Attributes
    ----------
    message
        Human-readable description reported by the server.
    type
        GitHub's error classification (``NOT_FOUND``, ``FORBIDDEN``...).
    path
        Response path the error is attached to, if any.
    locations
        Query document positions the error is attached to, if any.

    """

    message: str
    type: str | None = None
    path: list[str | int] | None = None
    locations: list[GraphQLErrorLocation] | None = None


class GraphQLResponse(msgspec.Struct, typ.Generic[DataT], kw_only=True, frozen=True):
    """Standard ``{data, errors}`` envelope returned by a GraphQL server."""

    data: DataT | None = None
    errors: list[GraphQLErrorPayload] | None = None

    @property
    def error_messages(self) -> tuple[str, ...]:
        """Return the server-reported error messages in response order."""
        return tuple(error.message for error in self.errors or ())


class QueryBody(msgspec.Struct, typ.Generic[VariablesT], kw_only=True, rename="camel"):
    """JSON body POSTed for a single query."""

    query: str
    variables: VariablesT
    operation_name: str


@dataclasses.dataclass(frozen=True, slots=True)
class GraphQLQuery(typ.Generic[VariablesT, DataT]):
    """A query document bound to its variables and response data types.

    Attributes
    ----------
    document
        The GraphQL document sent verbatim as ``query``.
    operation_name
        Name of the operation defined in ``document``.
    response_type
        Type the envelope's ``data`` member is validated against.

    """

    document: str
    operation_name: str
    response_type: type[DataT]

    def build_body(self, variables: VariablesT) -> QueryBody[VariablesT]:
        """Return the request body for ``variables``."""
        return QueryBody(
            query=self.document,
            variables=variables,
            operation_name=self.operation_name,
        )
