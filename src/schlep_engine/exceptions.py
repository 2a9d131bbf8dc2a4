"""Exceptions raised by the Schlep-engine client.

Transport-level failures (DNS, refused connections, timeouts) are not
wrapped: they surface as the ``httpx.TransportError`` family so callers can
tell them apart from API errors, which always carry a status code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    import httpx


__all__ = [
    "ApiError",
    "ConfigurationError",
    "ResponseDecodeError",
    "SchlepError",
]


class SchlepError(Exception):
    """Base exception for all Schlep-engine client errors.

    Attributes:
        message: Human-readable error description.
        response: The HTTP response that caused this error, if available.
    """

    def __init__(
        self,
        message: str,
        *,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            response: The HTTP response that caused this error.
        """
        super().__init__(message)
        self.message = message
        self.response = response


class ConfigurationError(SchlepError):
    """Raised when the client cannot be configured.

    Only raised at construction time, before any network activity.
    """

    def __init__(self, message: str) -> None:
        """Initialize the configuration error.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)


class ApiError(SchlepError):
    """Raised for any non-2xx response from the API.

    Attributes:
        status_code: The HTTP status code of the response.
        message: The ``message`` field of the error body, or the raw body
            text when the body carries no such field.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialize the API error.

        Args:
            status_code: HTTP status code.
            message: Best-effort error message.
            response: The HTTP response that caused this error.
        """
        super().__init__(message, response=response)
        self.status_code = status_code

    def __str__(self) -> str:
        """Return the status code combined with the message."""
        return f"API error {self.status_code}: {self.message}"


class ResponseDecodeError(SchlepError):
    """Raised when a successful response cannot be decoded.

    Either the body is not valid JSON, or the payload does not fit the
    requested result type.
    """
