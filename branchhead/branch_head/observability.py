"""Structured log events for branch head lookups.

``QueryEventLogger`` emits one start event per lookup followed by exactly one
of completion or failure, plus a warning when GitHub returned errors next to
usable data. Failures are tagged with an :class:`ErrorCategory` so log
aggregators can tell bad input from platform trouble.
"""

from __future__ import annotations

import enum
import typing as typ

from branchhead.graphql.errors import (
    GraphQLResponseError,
    PlatformError,
    TransportError,
)
from branchhead.logging import get_logger

from .errors import BranchHeadLookupError

if typ.TYPE_CHECKING:
    from .models import Data

logger = get_logger(__name__)


class QueryEventType(enum.StrEnum):
    """Structured log event types for branch head lookups."""

    QUERY_STARTED = "query.started"
    QUERY_COMPLETED = "query.completed"
    QUERY_PARTIAL = "query.partial"
    QUERY_FAILED = "query.failed"


class ErrorCategory(enum.StrEnum):
    """Failure classes used to route alerts."""

    TRANSPORT = "transport"
    PLATFORM = "platform"
    GRAPHQL = "graphql"
    SHAPE = "shape"
    UNKNOWN = "unknown"


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (TransportError, ErrorCategory.TRANSPORT),
    (PlatformError, ErrorCategory.PLATFORM),
    (GraphQLResponseError, ErrorCategory.GRAPHQL),
    (BranchHeadLookupError, ErrorCategory.SHAPE),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Return the alerting category for ``exc``."""
    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category
    return ErrorCategory.UNKNOWN


class QueryEventLogger:
    """Emit branch head lookup events via structlog."""

    def log_query_started(self, *, repo_slug: str, branch: str) -> None:
        """Log the start of a lookup."""
        logger.info(
            QueryEventType.QUERY_STARTED.value,
            repo_slug=repo_slug,
            branch=branch,
        )

    def log_query_completed(self, *, repo_slug: str, result: Data) -> None:
        """Log a successful lookup with the head sha and remaining quota.

        A ``query.partial`` warning precedes the completion event when the
        result carries server-reported errors.
        """
        if result.errors:
            logger.warning(
                QueryEventType.QUERY_PARTIAL.value,
                repo_slug=repo_slug,
                error_count=len(result.errors),
                errors=[error.message for error in result.errors],
            )
        logger.info(
            QueryEventType.QUERY_COMPLETED.value,
            repo_slug=repo_slug,
            branch=result.branch.name,
            sha=result.branch.head.sha,
            rate_limit_remaining=(
                result.rate_limit_info.remaining
                if result.rate_limit_info is not None
                else None
            ),
        )

    def log_query_failed(
        self, *, repo_slug: str, branch: str, error: BaseException
    ) -> None:
        """Log a failed lookup with its error category."""
        logger.error(
            QueryEventType.QUERY_FAILED.value,
            repo_slug=repo_slug,
            branch=branch,
            error_type=type(error).__name__,
            error_category=categorize_error(error).value,
            error_message=str(error),
        )
