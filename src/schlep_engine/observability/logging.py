"""structlog setup for the Schlep-engine client.

Library code only asks for loggers through :func:`get_logger`; nothing is
configured on import. The ``schlep`` CLI, or an application embedding the
client, calls :func:`configure_logging` once.

Every request the client sends is logged as ``api_request``/``api_response``
with the ``request_id`` that also goes out in the ``X-Request-ID`` header.
"""

from __future__ import annotations

import logging
import sys
import uuid
from enum import StrEnum
from typing import TYPE_CHECKING, TextIO

import structlog


if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger, Processor


__all__ = [
    "LogLevel",
    "configure_logging",
    "generate_request_id",
    "get_logger",
]


# Libraries that log each HTTP exchange on their own
_HTTP_LOGGERS = ("httpx", "httpcore")

_KEY_ORDER = ["timestamp", "level", "event", "request_id", "method", "url"]


class LogLevel(StrEnum):
    """Log levels accepted in settings and on the command line."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def stdlib(self) -> int:
        return logging.getLevelNamesMapping()[self.name]


def generate_request_id() -> str:
    """Return a 12-character hex ID for ``X-Request-ID`` and log correlation."""
    return uuid.uuid4().hex[:12]


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    *,
    stream: TextIO | None = None,
    colors: bool | None = None,
) -> None:
    """Configure client logging.

    Args:
        level: Minimum level, as a LogLevel or its name in any case.
        stream: Where to write. Defaults to stderr, so command output on
            stdout stays parseable.
        colors: Console output with colors instead of logfmt. Defaults to
            whether ``stream`` is a TTY.
    """
    level = LogLevel(level.lower())
    out = stream if stream is not None else sys.stderr
    if colors is None:
        colors = hasattr(out, "isatty") and out.isatty()

    renderer: Processor
    if colors:
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.LogfmtRenderer(
            key_order=_KEY_ORDER,
            drop_missing=True,
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            structlog.dev.set_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level.stdlib),
        logger_factory=structlog.PrintLoggerFactory(file=out),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(levelname)s %(name)s %(message)s",
        stream=out,
        level=level.stdlib,
        force=True,
    )
    # api_request/api_response already cover each exchange below debug
    http_level = logging.DEBUG if level is LogLevel.DEBUG else logging.WARNING
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(max(http_level, level.stdlib))


def get_logger(
    name: str | None = None,
    **initial_context: object,
) -> FilteringBoundLogger:
    """Return a structlog logger, optionally with bound context."""
    logger: FilteringBoundLogger = structlog.get_logger(name, **initial_context)
    return logger
