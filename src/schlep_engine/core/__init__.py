"""Request execution and response decoding shared by all clients."""

from __future__ import annotations

from schlep_engine.core.envelope import ENVELOPE_KEY, decode, unwrap
from schlep_engine.core.resource import ResourceClient
from schlep_engine.core.transport import (
    ASYNC_METHODS,
    DEFAULT_TIMEOUT,
    ClientConfig,
    HttpTransport,
    encode_json,
)


__all__ = [
    "ASYNC_METHODS",
    "DEFAULT_TIMEOUT",
    "ENVELOPE_KEY",
    "ClientConfig",
    "HttpTransport",
    "ResourceClient",
    "decode",
    "encode_json",
    "unwrap",
]
