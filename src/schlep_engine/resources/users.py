"""Current-user API (``/users``)."""

from __future__ import annotations

from typing import Any

from schlep_engine.core.envelope import decode
from schlep_engine.core.resource import ResourceClient


__all__ = ["UsersClient"]


class UsersClient(ResourceClient):
    """Profile of the user owning the API key."""

    prefix = "/users"

    def get_profile(self) -> dict[str, Any]:
        response = self._get("/me")
        return decode(response, dict[str, Any])

    def update_profile(self, updates: dict[str, Any]) -> dict[str, Any]:
        """Apply a partial update to the profile."""
        response = self._patch("/me", updates)
        return decode(response, dict[str, Any])
