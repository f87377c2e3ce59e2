"""Branch head lookup: the query, its raw shape, and normalization."""

from __future__ import annotations

from .errors import BranchHeadLookupError
from .models import Branch, Commit, Data, GraphQLError, RateLimitInfo, Repo, User
from .observability import (
    ErrorCategory,
    QueryEventLogger,
    QueryEventType,
    categorize_error,
)
from .query import BRANCH_HEAD_QUERY, BranchHeadResponseData, BranchHeadVariables
from .service import normalize_response, run_query

__all__ = [
    "BRANCH_HEAD_QUERY",
    "Branch",
    "BranchHeadLookupError",
    "BranchHeadResponseData",
    "BranchHeadVariables",
    "Commit",
    "Data",
    "ErrorCategory",
    "GraphQLError",
    "QueryEventLogger",
    "QueryEventType",
    "RateLimitInfo",
    "Repo",
    "User",
    "categorize_error",
    "normalize_response",
    "run_query",
]
