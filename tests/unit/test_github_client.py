"""Unit tests for the GitHub GraphQL client binding."""

from __future__ import annotations

import secrets
import typing as typ

import pytest

from branchhead.branch_head import BRANCH_HEAD_QUERY, BranchHeadVariables
from branchhead.github import (
    GITHUB_GRAPHQL_ENDPOINT,
    GitHubClient,
    GitHubClientConfig,
)

if typ.TYPE_CHECKING:
    from tests.conftest import MockGitHub
    from tests.helpers.github_responses import BranchHeadPayloadSpec

_TOKEN = secrets.token_hex(8)
_ENDPOINT = "https://example.test/graphql"


def _variables() -> BranchHeadVariables:
    return BranchHeadVariables(owner="octo", repo_name="hello", branch="main")


class TestGitHubClientConfig:
    """Tests for GitHubClientConfig."""

    def test_defaults_to_public_endpoint(self) -> None:
        """The default configuration targets api.github.com."""
        assert GitHubClientConfig().endpoint == GITHUB_GRAPHQL_ENDPOINT
        assert GITHUB_GRAPHQL_ENDPOINT == "https://api.github.com/graphql"

    def test_from_env_reads_endpoint_override(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """BRANCHHEAD_GITHUB_ENDPOINT replaces the default endpoint."""
        monkeypatch.setenv(
            "BRANCHHEAD_GITHUB_ENDPOINT", " https://ghe.test/api/graphql "
        )

        assert GitHubClientConfig.from_env().endpoint == "https://ghe.test/api/graphql"

    def test_from_env_falls_back_when_unset(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An unset or blank override keeps the public endpoint."""
        monkeypatch.delenv("BRANCHHEAD_GITHUB_ENDPOINT", raising=False)

        assert GitHubClientConfig.from_env().endpoint == GITHUB_GRAPHQL_ENDPOINT


class TestGitHubClient:
    """Tests for GitHubClient.run_query."""

    @pytest.mark.asyncio
    async def test_headers_carry_bearer_token_verbatim(self) -> None:
        """The token is not validated or altered."""
        async with GitHubClient("  not-a-real-token  ") as client:
            headers = client.headers

        assert headers["Authorization"] == "Bearer   not-a-real-token  "
        assert headers["Accept"] == "application/vnd.github.v3+json"
        assert headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_run_query_posts_once_with_github_headers(
        self,
        mock_github: MockGitHub,
        payload_spec: BranchHeadPayloadSpec,
    ) -> None:
        """run_query issues a single authenticated POST to the endpoint."""
        recorder, http_client = mock_github(payload_spec.build())

        async with GitHubClient(
            _TOKEN,
            config=GitHubClientConfig(endpoint=_ENDPOINT),
            http_client=http_client,
        ) as client:
            response = await client.run_query(BRANCH_HEAD_QUERY, _variables())

        assert response.data is not None
        assert len(recorder.requests) == 1
        request = recorder.requests[0]
        assert str(request.url) == _ENDPOINT
        assert request.headers["Authorization"] == f"Bearer {_TOKEN}"
        assert request.headers["Accept"] == "application/vnd.github.v3+json"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["User-Agent"].startswith("branchhead/")

    @pytest.mark.asyncio
    async def test_run_query_sends_camel_case_variables(
        self,
        mock_github: MockGitHub,
        payload_spec: BranchHeadPayloadSpec,
    ) -> None:
        """The repository name is sent as the repoName variable."""
        recorder, http_client = mock_github(payload_spec.build())

        async with GitHubClient(_TOKEN, http_client=http_client) as client:
            await client.run_query(BRANCH_HEAD_QUERY, _variables())

        body = recorder.sent_json()
        assert body["variables"] == {
            "owner": "octo",
            "repoName": "hello",
            "branch": "main",
        }
        assert body["operationName"] == "BranchHeadCommitAuthor"
        assert "query BranchHeadCommitAuthor" in body["query"]
