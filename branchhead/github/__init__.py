"""GitHub GraphQL API binding."""

from __future__ import annotations

from .client import (
    GITHUB_ACCEPT,
    GITHUB_GRAPHQL_ENDPOINT,
    GitHubClient,
    GitHubClientConfig,
)

__all__ = [
    "GITHUB_ACCEPT",
    "GITHUB_GRAPHQL_ENDPOINT",
    "GitHubClient",
    "GitHubClientConfig",
]
