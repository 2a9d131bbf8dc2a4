"""Monitoring API (``/monitoring``)."""

from __future__ import annotations

from typing import Any

from schlep_engine.core.envelope import decode
from schlep_engine.core.resource import ResourceClient


__all__ = ["MonitoringClient"]


class MonitoringClient(ResourceClient):
    """System health and usage metrics."""

    prefix = "/monitoring"

    def get_system_health(self) -> dict[str, Any]:
        response = self._get("/health")
        return decode(response, dict[str, Any])

    def get_metrics(
        self,
        metric_names: list[str] | None = None,
        time_range: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Fetch metrics.

        Args:
            metric_names: Metrics to fetch, sent comma-joined as ``metrics``.
                All metrics when empty.
            time_range: Extra query parameters bounding the time window,
                e.g. ``{"start": "...", "end": "..."}``.

        Returns:
            Metric values keyed by name.
        """
        params: dict[str, Any] = {}
        if metric_names:
            params["metrics"] = ",".join(metric_names)
        if time_range:
            params.update(time_range)
        response = self._get("/metrics", params)
        return decode(response, dict[str, Any])
