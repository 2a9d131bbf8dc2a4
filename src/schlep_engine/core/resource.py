"""Base class binding a path prefix to the shared transport."""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from schlep_engine.core.transport import ASYNC_METHODS


if TYPE_CHECKING:
    from os import PathLike

    from schlep_engine.core.transport import HttpTransport


__all__ = ["ResourceClient"]


class ResourceClient:
    """A group of API operations under one path prefix.

    Subclasses set :attr:`prefix` (e.g. ``"/ml"``) and implement their
    operations on top of the request primitives below. Every primitive
    returns the parsed JSON response; decoding into result types is left
    to the caller (see :func:`schlep_engine.core.envelope.decode`).

    Instances hold a reference to the parent client's transport and do not
    own it.
    """

    prefix: ClassVar[str] = ""

    def __init__(self, transport: HttpTransport) -> None:
        """Bind the resource client to a shared transport.

        Args:
            transport: Transport owned by the parent client.
        """
        self._transport = transport

    def _url(self, path: str) -> str:
        """Absolute URL of ``path`` under this client's prefix."""
        return self._transport.url(self.prefix, path)

    def _get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:  # noqa: ANN401
        request = self._transport.json_request("GET", self._url(path), params=params)
        return self._transport.execute(request)

    def _post(self, path: str, body: Any = None) -> Any:  # noqa: ANN401
        request = self._transport.json_request("POST", self._url(path), body=body)
        return self._transport.execute(request)

    def _put(self, path: str, body: Any = None) -> Any:  # noqa: ANN401
        request = self._transport.json_request("PUT", self._url(path), body=body)
        return self._transport.execute(request)

    def _patch(self, path: str, body: Any = None) -> Any:  # noqa: ANN401
        request = self._transport.json_request("PATCH", self._url(path), body=body)
        return self._transport.execute(request)

    def _delete(self, path: str) -> Any:  # noqa: ANN401
        request = self._transport.json_request("DELETE", self._url(path))
        return self._transport.execute(request)

    def _post_multipart(
        self,
        path: str,
        file: str | PathLike[str],
        fields: Mapping[str, str] | None = None,
    ) -> Any:  # noqa: ANN401
        """POST a file as multipart form data.

        Args:
            path: Endpoint path under the prefix.
            file: Local file to upload as the ``file`` part.
            fields: Extra string form fields.

        Returns:
            The parsed JSON response.
        """
        file_path = Path(file)
        with file_path.open("rb") as fh:
            request = self._transport.multipart_request(
                self._url(path),
                fh,
                filename=file_path.name,
                fields=fields,
            )
            return self._transport.execute(request)

    def _execute_async(
        self,
        method: str,
        path: str,
        body: Any = None,  # noqa: ANN401
    ) -> Awaitable[Any]:
        """Start a non-blocking request and return an awaitable for its result.

        The request is built before this returns, so an unsupported method
        fails here, before any network I/O.

        Args:
            method: One of GET, POST, PUT, DELETE (case-insensitive).
            path: Endpoint path under the prefix.
            body: JSON body for POST/PUT; None sends an empty JSON payload.

        Returns:
            Awaitable resolving to the parsed JSON response.

        Raises:
            ValueError: If ``method`` is not supported.
        """
        verb = method.upper()
        if verb not in ASYNC_METHODS:
            msg = f"Unsupported HTTP method: {method}"
            raise ValueError(msg)
        request = self._transport.json_request(verb, self._url(path), body=body)
        return self._transport.execute_async(request)
