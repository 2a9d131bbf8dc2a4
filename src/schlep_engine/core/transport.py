"""Request building and execution shared by every Schlep-engine client.

One :class:`HttpTransport` is created per :class:`~schlep_engine.SchlepClient`
and shared by all of its resource clients. It owns the pooled
``httpx.Client`` used for blocking calls and, once the first asynchronous
call is made, an ``httpx.AsyncClient``.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
from dataclasses import dataclass, field
from typing import IO, TYPE_CHECKING, Any

import httpx
import pydantic_core
from pydantic import BaseModel

from schlep_engine._version import __version__
from schlep_engine.exceptions import (
    ApiError,
    ConfigurationError,
    ResponseDecodeError,
)
from schlep_engine.observability import generate_request_id, get_logger


if TYPE_CHECKING:
    from collections.abc import Mapping


__all__ = [
    "ASYNC_METHODS",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
    "HttpTransport",
    "encode_json",
]


DEFAULT_TIMEOUT = httpx.Timeout(60.0, connect=30.0)
USER_AGENT = f"schlep-engine-python/{__version__}"
JSON_CONTENT_TYPE = "application/json"
OCTET_STREAM = "application/octet-stream"

# Methods accepted by the asynchronous executor
ASYNC_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Immutable connection settings of one client.

    Attributes:
        api_key: API key sent as ``Authorization: Bearer <key>``.
        base_url: API base URL, stored without trailing slash.
        timeout: Connect/read/write timeouts applied to every request.

    Raises:
        ConfigurationError: If the API key is missing or blank.
    """

    api_key: str = field(repr=False)
    base_url: str
    timeout: httpx.Timeout

    def __post_init__(self) -> None:
        if self.api_key is None or not self.api_key.strip():
            msg = "API key cannot be null or empty"
            raise ConfigurationError(msg)
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))


def encode_json(body: Any) -> bytes:  # noqa: ANN401
    """Serialize a request body to JSON bytes.

    Strings are taken to be JSON text already and are sent unchanged.
    Models are dumped without their ``None`` fields. ``None`` becomes an
    empty payload.
    """
    if body is None:
        return b""
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, BaseModel):
        return body.model_dump_json(exclude_none=True).encode("utf-8")
    return pydantic_core.to_json(body)


def _query_params(params: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Drop query parameters whose value is None."""
    if not params:
        return None
    return {k: v for k, v in params.items() if v is not None}


def _api_error(response: httpx.Response, text: str) -> ApiError:
    """Build the ApiError for a failed response.

    The ``message`` field of a JSON body is preferred; any other body is
    used verbatim.
    """
    message = text
    with contextlib.suppress(ValueError):
        payload = json.loads(text)
        if isinstance(payload, dict) and payload.get("message") is not None:
            message = str(payload["message"])
    return ApiError(response.status_code, message, response=response)


def _parse_response(response: httpx.Response) -> Any:  # noqa: ANN401
    """Return the parsed JSON of a 2xx response or raise ApiError."""
    text = response.text or ""

    if not response.is_success:
        raise _api_error(response, text)

    if not text.strip():
        return {}
    try:
        return json.loads(text)
    except ValueError as exc:
        msg = f"Response body is not valid JSON (status={response.status_code})"
        raise ResponseDecodeError(msg, response=response) from exc


class HttpTransport:
    """Builds and dispatches authenticated requests.

    Transport failures (``httpx.TransportError``) are never wrapped; API
    failures become :class:`~schlep_engine.exceptions.ApiError`.

    Attributes:
        config: The client configuration.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Client configuration.
            transport: Optional custom sync transport for testing.
            async_transport: Optional custom async transport for testing.
        """
        self.config = config
        self._async_transport = async_transport
        self._client = httpx.Client(
            timeout=config.timeout,
            transport=transport,
            follow_redirects=True,
        )
        self._async_client: httpx.AsyncClient | None = None
        self._async_loop: asyncio.AbstractEventLoop | None = None
        self._logger = get_logger(__name__)

    # -------------------------------------------------------------------------
    # Request Building
    # -------------------------------------------------------------------------

    def url(self, prefix: str, path: str) -> str:
        """Compose ``base_url + prefix + path``, adding a leading slash to path."""
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.config.base_url}{prefix}{path}"

    def _headers(self, *, multipart: bool = False) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Accept": JSON_CONTENT_TYPE,
            "User-Agent": USER_AGENT,
            "X-Request-ID": generate_request_id(),
        }
        # httpx sets the multipart boundary header itself
        if not multipart:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        return headers

    def json_request(
        self,
        method: str,
        url: str,
        *,
        body: Any = None,  # noqa: ANN401
        params: Mapping[str, Any] | None = None,
    ) -> httpx.Request:
        """Build a JSON request.

        POST, PUT and PATCH always carry a body (empty when ``body`` is
        None); other methods never do.

        Args:
            method: HTTP method.
            url: Absolute URL.
            body: Model, mapping, raw JSON string, or None.
            params: Query parameters; None values are skipped.

        Returns:
            The request, ready to be executed.
        """
        method = method.upper()
        content = encode_json(body) if method in _BODY_METHODS else None
        return httpx.Request(
            method,
            url,
            params=_query_params(params),
            headers=self._headers(),
            content=content,
            extensions={"timeout": self.config.timeout.as_dict()},
        )

    def multipart_request(
        self,
        url: str,
        file: IO[bytes],
        *,
        filename: str,
        fields: Mapping[str, str] | None = None,
    ) -> httpx.Request:
        """Build a multipart POST with one ``file`` part and string fields.

        Args:
            url: Absolute URL.
            file: Open binary file; it is streamed when the request is sent.
            filename: File name reported in the ``file`` part.
            fields: Extra form fields, sent after the file part in order.

        Returns:
            The request, ready to be executed.
        """
        # httpx emits data= fields ahead of files=, so fields go in files= too
        parts: list[tuple[str, Any]] = [("file", (filename, file, OCTET_STREAM))]
        parts.extend((name, (None, value)) for name, value in (fields or {}).items())
        return httpx.Request(
            "POST",
            url,
            headers=self._headers(multipart=True),
            files=parts,
            extensions={"timeout": self.config.timeout.as_dict()},
        )

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def execute(self, request: httpx.Request) -> Any:  # noqa: ANN401
        """Send a request, blocking until the response has been read.

        Args:
            request: Request built by this transport.

        Returns:
            The parsed JSON body, not unwrapped.

        Raises:
            ApiError: For non-2xx responses.
            ResponseDecodeError: For 2xx responses that are not JSON.
            httpx.TransportError: For connection failures and timeouts.
        """
        log = self._logger.bind(
            method=request.method,
            url=str(request.url),
            request_id=request.headers.get("X-Request-ID"),
        )
        log.debug("api_request")

        try:
            response = self._client.send(request)
        except httpx.TransportError as exc:
            log.warning("transport_error", error=str(exc))
            raise

        log.debug(
            "api_response",
            status_code=response.status_code,
            elapsed_ms=response.elapsed.total_seconds() * 1000,
        )
        return _parse_response(response)

    async def execute_async(self, request: httpx.Request) -> Any:  # noqa: ANN401
        """Send a request on the shared async client.

        Same outcomes as :meth:`execute`; calls may run concurrently and
        share one connection pool.
        """
        client = self._ensure_async_client()
        log = self._logger.bind(
            method=request.method,
            url=str(request.url),
            request_id=request.headers.get("X-Request-ID"),
        )
        log.debug("api_request", mode="async")

        try:
            response = await client.send(request)
        except httpx.TransportError as exc:
            log.warning("transport_error", error=str(exc))
            raise

        log.debug(
            "api_response",
            status_code=response.status_code,
            elapsed_ms=response.elapsed.total_seconds() * 1000,
        )
        return _parse_response(response)

    def _ensure_async_client(self) -> httpx.AsyncClient:
        """Return the async HTTP client for the running event loop.

        Pooled connections belong to the loop that opened them. A client
        created under another loop, such as an earlier ``asyncio.run()``, is
        dropped and a new one is created.
        """
        loop = asyncio.get_running_loop()
        client = self._async_client
        if client is None or client.is_closed or self._async_loop is not loop:
            if client is not None and not client.is_closed:
                self._logger.debug("async_client_replaced")
            self._async_client = httpx.AsyncClient(
                timeout=self.config.timeout,
                transport=self._async_transport,
                follow_redirects=True,
            )
            self._async_loop = loop
        return self._async_client

    # -------------------------------------------------------------------------
    # Shutdown
    # -------------------------------------------------------------------------

    @property
    def is_closed(self) -> bool:
        """Whether the blocking client has been closed."""
        return self._client.is_closed

    def close(self) -> None:
        """Close the blocking client and its connection pool.

        In-flight requests are not cancelled. The async client can only be
        closed from an event loop, so after any async call use :meth:`aclose`
        to evict both pools; ``close`` leaves the async pool open and logs a
        warning.
        """
        if not self._client.is_closed:
            self._client.close()
        if self._async_client is not None and not self._async_client.is_closed:
            self._logger.warning("async_client_still_open", hint="call aclose()")

    async def aclose(self) -> None:
        """Close both the blocking and the async client."""
        if not self._client.is_closed:
            self._client.close()
        if self._async_client is not None and not self._async_client.is_closed:
            await self._async_client.aclose()
        self._async_client = None
        self._async_loop = None
