"""GitHub GraphQL API client."""

from __future__ import annotations

import dataclasses
import os
import typing as typ

from branchhead.graphql import GraphQLTransport

if typ.TYPE_CHECKING:
    import types

    import httpx

    from branchhead.graphql.models import (
        DataT,
        GraphQLQuery,
        GraphQLResponse,
        VariablesT,
    )

GITHUB_GRAPHQL_ENDPOINT = "https://api.github.com/graphql"
GITHUB_ACCEPT = "application/vnd.github.v3+json"


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubClientConfig:
    """Connection settings for the GitHub GraphQL API."""

    endpoint: str = GITHUB_GRAPHQL_ENDPOINT
    user_agent: str = "branchhead/0.1"

    @classmethod
    def from_env(cls) -> GitHubClientConfig:
        """Build configuration, honouring ``BRANCHHEAD_GITHUB_ENDPOINT``."""
        endpoint = os.environ.get("BRANCHHEAD_GITHUB_ENDPOINT", "").strip()
        return cls(endpoint=endpoint or GITHUB_GRAPHQL_ENDPOINT)


class GitHubClient:
    """Run typed GraphQL queries against GitHub with bearer authentication.

    The token is stored verbatim; GitHub is left to judge whether it is valid.
    """

    def __init__(
        self,
        token: str,
        *,
        config: GitHubClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with a token and optional HTTP client."""
        self._token = token
        self._config = config or GitHubClientConfig()
        self._transport = GraphQLTransport(http_client=http_client)

    @property
    def config(self) -> GitHubClientConfig:
        """Return the connection settings in use."""
        return self._config

    @property
    def headers(self) -> dict[str, str]:
        """Return the headers sent with every query."""
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": GITHUB_ACCEPT,
            "Content-Type": "application/json",
            "User-Agent": self._config.user_agent,
        }

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        await self._transport.aclose()

    async def __aenter__(self) -> typ.Self:
        """Return the client for use in an ``async with`` block."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Close owned resources on exit."""
        await self.aclose()

    async def run_query(
        self,
        query: GraphQLQuery[VariablesT, DataT],
        variables: VariablesT,
    ) -> GraphQLResponse[DataT]:
        """Execute ``query`` once against the configured endpoint."""
        return await self._transport.execute(
            query,
            variables,
            endpoint=self._config.endpoint,
            headers=self.headers,
        )
