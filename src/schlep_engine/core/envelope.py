"""Response envelope unwrapping and typed decoding.

The API may return a payload directly or wrap it in an object under a
top-level ``data`` key. Every typed result is decoded with the same rule:
use ``data`` when present, otherwise the whole response. A few list
endpoints nest their items one level deeper (``data.datasets``,
``data.logs``); callers pass those keys as ``path``.
"""

from __future__ import annotations

import functools
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from schlep_engine.exceptions import ResponseDecodeError


__all__ = ["ENVELOPE_KEY", "decode", "unwrap"]


ENVELOPE_KEY = "data"

T = TypeVar("T")


def unwrap(payload: Any, path: Sequence[str] = ()) -> Any:  # noqa: ANN401
    """Return the payload inside the response envelope.

    Args:
        payload: Parsed JSON response.
        path: Keys to descend into after the envelope, each only if present.

    Returns:
        The unwrapped sub-value. The input is never modified.

    Example:
        >>> unwrap({"data": {"datasets": [{"name": "a"}]}}, ("datasets",))
        [{'name': 'a'}]
        >>> unwrap({"job_id": "u1"})
        {'job_id': 'u1'}
    """
    node = payload
    if isinstance(node, Mapping) and ENVELOPE_KEY in node:
        node = node[ENVELOPE_KEY]
    for key in path:
        if isinstance(node, Mapping) and key in node:
            node = node[key]
    return node


@functools.lru_cache(maxsize=128)
def _adapter(target: Any) -> TypeAdapter[Any]:  # noqa: ANN401
    return TypeAdapter(target)


def decode(
    payload: Any,  # noqa: ANN401
    target: type[T],
    *,
    path: Sequence[str] = (),
) -> T:
    """Unwrap a parsed response and validate it into ``target``.

    Args:
        payload: Parsed JSON response.
        target: Result type, e.g. a response model, ``list[JobInfo]`` or
            ``dict[str, Any]``.
        path: Per-endpoint keys to descend into after the envelope.

    Returns:
        The decoded value.

    Raises:
        ResponseDecodeError: If the payload does not fit ``target``.
    """
    node = unwrap(payload, path)
    try:
        return _adapter(target).validate_python(node)
    except ValidationError as exc:
        # list[JobInfo] reports __name__ "list"; keep its arguments
        name = target.__name__ if isinstance(target, type) else repr(target)
        msg = f"Response does not match {name}: {exc.error_count()} error(s)"
        raise ResponseDecodeError(msg) from exc
