"""Logging helpers wrapping structlog.

Every module in branchhead obtains its logger here and emits key/value
events, so a host only has to call :func:`configure_logging` (usually via
:func:`branchhead.runtime.initialize`) to control level and rendering.

Example:
>>> from branchhead.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("lookup.started", repo_slug="octo/hello", branch="main")

"""

from __future__ import annotations

import enum
import logging as stdlib_logging
import typing as typ

import structlog

DEFAULT_LOG_LEVEL = "INFO"

_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


class LogLevel(enum.StrEnum):
    """Log levels accepted by :func:`configure_logging`."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def numeric(self) -> int:
        """Return the numeric level structlog filters on."""
        return stdlib_logging.getLevelNamesMapping()[self.value]


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Normalize a log level name, falling back to ``INFO``.

    Parameters
    ----------
    level : str | None
        Raw level name, usually read from ``BRANCHHEAD_LOG_LEVEL``.

    Returns
    -------
    tuple[str, bool]
        The normalized level and ``True`` when the input was unusable.

    """
    if not level:
        return (DEFAULT_LOG_LEVEL, True)

    normalized = level.strip().upper()
    normalized = _ALIASES.get(normalized, normalized)
    if normalized in LogLevel.__members__:
        return (normalized, False)

    return (DEFAULT_LOG_LEVEL, True)


def configure_logging(
    level: str | None,
    *,
    renderer: structlog.typing.Processor | None = None,
) -> tuple[str, bool]:
    """Configure structlog to filter at the normalized level.

    Parameters
    ----------
    level : str | None
        Raw level name.
    renderer : Processor, optional
        Final processor; defaults to JSON lines.

    Returns
    -------
    tuple[str, bool]
        The same tuple as :func:`normalize_log_level`, so callers can warn
        about invalid input once logging is live.

    """
    normalized, invalid = normalize_log_level(level)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer or structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            LogLevel(normalized).numeric
        ),
    )
    return (normalized, invalid)


def get_logger(name: str) -> typ.Any:  # noqa: ANN401 - structlog proxies are untyped
    """Return a lazy structlog logger whose events carry ``logger_name=name``.

    The proxy resolves the configuration on every call, so loggers created at
    import time honour a later :func:`configure_logging`.
    """
    return structlog.get_logger(logger_name=name)


__all__ = [
    "DEFAULT_LOG_LEVEL",
    "LogLevel",
    "configure_logging",
    "get_logger",
    "normalize_log_level",
]
