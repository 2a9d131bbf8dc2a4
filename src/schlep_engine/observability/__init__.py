"""Observability module (structured logging)."""

from __future__ import annotations

from schlep_engine.observability.logging import (
    LogLevel,
    configure_logging,
    generate_request_id,
    get_logger,
)


__all__ = [
    "LogLevel",
    "configure_logging",
    "generate_request_id",
    "get_logger",
]
