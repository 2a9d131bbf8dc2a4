"""Configuration-loading exceptions."""

from __future__ import annotations

from schlep_engine.exceptions import ConfigurationError


__all__ = [
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
]


class ConfigurationFileNotFoundError(ConfigurationError):
    """Raised when a required configuration file cannot be found.

    Attributes:
        path: The path that was requested (None if searching defaults).
        searched_paths: List of paths that were searched.
    """

    def __init__(
        self,
        path: str | None = None,
        searched_paths: list[str] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            path: The specific path requested, or None if searching defaults.
            searched_paths: List of paths that were searched.
        """
        self.path = path
        self.searched_paths = searched_paths or []

        if path:
            message = f"Configuration file not found: {path}"
        elif self.searched_paths:
            paths_str = ", ".join(self.searched_paths)
            message = f"Configuration file not found. Searched: {paths_str}"
        else:
            message = "Configuration file not found"

        super().__init__(message)


class ConfigurationValidationError(ConfigurationError):
    """Raised when loaded settings fail validation.

    Attributes:
        errors: Validation error details from Pydantic.
    """

    def __init__(
        self,
        message: str,
        errors: list[dict[str, object]] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable summary of the validation failure.
            errors: Validation error details (from Pydantic).
        """
        super().__init__(message)
        self.errors = errors or []
