"""Analytics API (``/analytics``)."""

from __future__ import annotations

from typing import Any

from schlep_engine.core.envelope import decode
from schlep_engine.core.resource import ResourceClient


__all__ = ["AnalyticsClient"]


class AnalyticsClient(ResourceClient):
    """Query datasets and inspect their schemas."""

    prefix = "/analytics"

    def query(self, query: dict[str, Any]) -> dict[str, Any]:
        """Run an analytics query.

        Args:
            query: Query document, sent as-is.

        Returns:
            Query results.
        """
        response = self._post("/query", query)
        return decode(response, dict[str, Any])

    def get_datasets(self) -> list[dict[str, Any]]:
        """Descriptions of the datasets available for querying.

        The list is nested under ``data.datasets``.
        """
        response = self._get("/datasets")
        return decode(response, list[dict[str, Any]], path=("datasets",))

    def get_schema(self, dataset: str) -> dict[str, Any]:
        response = self._get(f"/datasets/{dataset}/schema")
        return decode(response, dict[str, Any])
