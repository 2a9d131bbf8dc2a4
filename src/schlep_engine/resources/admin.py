"""Administration API (``/admin``). Requires an admin API key."""

from __future__ import annotations

from typing import Any

from schlep_engine.core.envelope import decode
from schlep_engine.core.resource import ResourceClient


__all__ = ["AdminClient"]


class AdminClient(ResourceClient):
    prefix = "/admin"

    def get_system_stats(self) -> dict[str, Any]:
        response = self._get("/stats")
        return decode(response, dict[str, Any])

    def list_users(self, page: int = 1, page_size: int = 20) -> list[dict[str, Any]]:
        response = self._get("/users", {"page": page, "page_size": page_size})
        return decode(response, list[dict[str, Any]])
