"""Top-level client for the Schlep-engine API."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Self

from schlep_engine.config.settings import (
    API_KEY_ENV_VAR,
    BASE_URL_ENV_VAR,
    DEFAULT_BASE_URL,
)
from schlep_engine.core.envelope import decode
from schlep_engine.core.resource import ResourceClient
from schlep_engine.core.transport import DEFAULT_TIMEOUT, ClientConfig, HttpTransport
from schlep_engine.exceptions import ConfigurationError
from schlep_engine.models import (
    DeployRequest,
    DeployResponse,
    StatusResponse,
    StreamConfig,
    TrainConfig,
    TrainResponse,
    UploadRequest,
    UploadResponse,
)
from schlep_engine.observability import get_logger
from schlep_engine.resources import (
    AdminClient,
    AnalyticsClient,
    DataProcessingClient,
    DocumentClient,
    MLPipelineClient,
    MonitoringClient,
    QualityClient,
    StorageClient,
    UsersClient,
)


if TYPE_CHECKING:
    import httpx

    from schlep_engine.config.settings import Settings


__all__ = ["SchlepClient"]


def _stream_url(base_url: str) -> str:
    """Websocket URL of the event stream for an HTTP(S) base URL."""
    if base_url.startswith("https://"):
        base_url = "wss://" + base_url.removeprefix("https://")
    elif base_url.startswith("http://"):
        base_url = "ws://" + base_url.removeprefix("http://")
    return f"{base_url}/stream"


class SchlepClient(ResourceClient):
    """Client for the Schlep-engine API.

    Carries the top-level endpoints (upload, train, deploy, status) and one
    resource client per API area, all sharing a single connection pool.

    Example:
        ```python
        with SchlepClient.from_env() as client:
            upload = client.upload("a,b\\n1,2")
            job = client.status(upload.job_id)
            datasets = client.analytics.get_datasets()
        ```

    Attributes:
        data: Data processing operations (``/data``).
        ml: ML pipeline operations (``/ml``).
        analytics: Analytics operations (``/analytics``).
        document: Document extraction operations (``/extract``).
        quality: Data quality operations (``/quality``).
        storage: File storage operations (``/storage``).
        monitoring: Monitoring operations (``/monitoring``).
        users: Current-user operations (``/users``).
        admin: Administration operations (``/admin``).
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        *,
        timeout: httpx.Timeout | None = None,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: API key. Defaults to the ``SCHLEP_API_KEY`` variable.
            base_url: API base URL. Defaults to ``SCHLEP_BASE_URL``, then
                the public endpoint.
            timeout: Request timeouts. Defaults to 30s connect, 60s
                read/write.
            transport: Optional custom sync transport for testing.
            async_transport: Optional custom async transport for testing.

        Raises:
            ConfigurationError: If no usable API key is available.
        """
        if api_key is None:
            api_key = os.environ.get(API_KEY_ENV_VAR)
        if base_url is None:
            base_url = os.environ.get(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL

        config = ClientConfig(
            api_key=api_key,  # type: ignore[arg-type]
            base_url=base_url,
            timeout=timeout or DEFAULT_TIMEOUT,
        )
        super().__init__(
            HttpTransport(
                config,
                transport=transport,
                async_transport=async_transport,
            ),
        )

        self.data = DataProcessingClient(self._transport)
        self.ml = MLPipelineClient(self._transport)
        self.analytics = AnalyticsClient(self._transport)
        self.document = DocumentClient(self._transport)
        self.quality = QualityClient(self._transport)
        self.storage = StorageClient(self._transport)
        self.monitoring = MonitoringClient(self._transport)
        self.users = UsersClient(self._transport)
        self.admin = AdminClient(self._transport)

        self._logger = get_logger(__name__)
        self._logger.debug("client_initialized", base_url=config.base_url)

    @classmethod
    def from_env(cls, **kwargs: object) -> Self:
        """Create a client from the ``SCHLEP_API_KEY`` environment variable.

        Raises:
            ConfigurationError: If the variable is unset or blank.
        """
        api_key = os.environ.get(API_KEY_ENV_VAR)
        if api_key is None or not api_key.strip():
            msg = f"{API_KEY_ENV_VAR} environment variable not set or empty"
            raise ConfigurationError(msg)
        return cls(api_key, **kwargs)  # type: ignore[arg-type]

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: object) -> Self:
        """Create a client from loaded :class:`~schlep_engine.config.Settings`."""
        return cls(
            settings.api_key,
            settings.base_url,
            timeout=settings.timeout,
            **kwargs,  # type: ignore[arg-type]
        )

    @property
    def base_url(self) -> str:
        return self._transport.config.base_url

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.aclose()

    def close(self) -> None:
        """Release the blocking connection pool. Safe to call more than once.

        After any ``*_async`` call, use :meth:`aclose` (or ``async with``)
        instead: the async pool can only be closed from an event loop, and
        ``close`` leaves it open with an ``async_client_still_open``
        warning.
        """
        self._transport.close()
        self._logger.debug("client_closed")

    async def aclose(self) -> None:
        """Release both the blocking and the async connection pools.

        Call it from the event loop that made the last async request.
        """
        await self._transport.aclose()
        self._logger.debug("client_closed")

    # -------------------------------------------------------------------------
    # Top-level Endpoints
    # -------------------------------------------------------------------------

    def upload(self, data: str) -> UploadResponse:
        """Upload raw data for processing.

        Args:
            data: The data, as text.

        Returns:
            The upload job.
        """
        response = self._post("/upload", UploadRequest(data=data))
        return decode(response, UploadResponse)

    def train(self, config: TrainConfig | str) -> TrainResponse:
        """Start training a model.

        Args:
            config: Training configuration, or a JSON document sent verbatim.

        Returns:
            The training job.
        """
        response = self._post("/train", config)
        return decode(response, TrainResponse)

    def deploy(self, model_id: str) -> DeployResponse:
        response = self._post("/deploy", DeployRequest(model_id=model_id))
        return decode(response, DeployResponse)

    def status(self, job_id: str) -> StatusResponse:
        response = self._get(f"/status/{job_id}")
        return decode(response, StatusResponse)

    def stream(self, config: StreamConfig) -> None:
        """Subscribe to real-time events.

        Not available yet: logs the websocket URL and the subscription as
        ``stream_not_implemented`` and returns without opening a connection.
        """
        url = _stream_url(self.base_url)
        self._logger.info(
            "stream_not_implemented",
            url=url,
            event_types=config.event_types,
            filters=config.filters,
        )
