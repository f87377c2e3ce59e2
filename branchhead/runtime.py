"""Process-wide setup for hosts embedding branchhead.

Call :func:`initialize` once before issuing any lookup. It is never run on
import. Configuration is driven by environment variables:

- ``BRANCHHEAD_LOG_LEVEL``: Log level (default ``INFO``)
- ``BRANCHHEAD_GITHUB_ENDPOINT``: GraphQL endpoint override, read by
  :meth:`branchhead.github.GitHubClientConfig.from_env`
"""

from __future__ import annotations

import os
import sys
import typing as typ

from branchhead.logging import configure_logging, get_logger

if typ.TYPE_CHECKING:
    import types

__all__ = ["initialize", "is_initialized"]

logger = get_logger(__name__)

_configured_level: str | None = None


def _install_crash_hook() -> None:
    """Log uncaught exceptions before handing them to the previous hook."""
    previous_hook = sys.excepthook

    def _crash_hook(
        exc_type: type[BaseException],
        exc: BaseException,
        tb: types.TracebackType | None,
    ) -> None:
        if not issubclass(exc_type, KeyboardInterrupt):
            logger.error(
                "process.crashed",
                error_type=exc_type.__name__,
                exc_info=(exc_type, exc, tb),
            )
        previous_hook(exc_type, exc, tb)

    sys.excepthook = _crash_hook


def is_initialized() -> bool:
    """Return whether :func:`initialize` has already run in this process."""
    return _configured_level is not None


def initialize(level: str | None = None) -> str:
    """Configure logging and the crash hook once per process.

    Parameters
    ----------
    level : str | None, optional
        Log level name. ``BRANCHHEAD_LOG_LEVEL`` is used when omitted.

    Returns
    -------
    str
        The normalized log level in effect. Later calls return it unchanged.

    """
    global _configured_level  # noqa: PLW0603 - one-time process setup

    if _configured_level is not None:
        return _configured_level

    raw_level = level if level is not None else os.environ.get("BRANCHHEAD_LOG_LEVEL")
    normalized, invalid = configure_logging(raw_level)
    if invalid and raw_level is not None:
        logger.warning(
            "runtime.invalid_log_level",
            requested=raw_level,
            fallback=normalized,
        )

    _install_crash_hook()
    _configured_level = normalized
    logger.info("runtime.initialized", log_level=normalized)
    return normalized
