"""Fetch the head commit of a GitHub branch through the GraphQL API.

Example:
>>> import asyncio
>>> from branchhead import initialize, run_query
>>> initialize()
>>> # data = asyncio.run(run_query("octo", "hello", "main", token))

"""

from __future__ import annotations

from .branch_head import (
    Branch,
    BranchHeadLookupError,
    Commit,
    Data,
    GraphQLError,
    RateLimitInfo,
    Repo,
    User,
    run_query,
)
from .errors import BranchHeadError
from .graphql import GraphQLResponseError, PlatformError, TransportError
from .runtime import initialize

__all__ = [
    "Branch",
    "BranchHeadError",
    "BranchHeadLookupError",
    "Commit",
    "Data",
    "GraphQLError",
    "GraphQLResponseError",
    "PlatformError",
    "RateLimitInfo",
    "Repo",
    "TransportError",
    "User",
    "initialize",
    "run_query",
]
