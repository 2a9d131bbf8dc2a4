"""Data quality API (``/quality``)."""

from __future__ import annotations

from typing import Any

from schlep_engine.core.envelope import decode
from schlep_engine.core.resource import ResourceClient


__all__ = ["QualityClient"]


class QualityClient(ResourceClient):
    """Run data quality assessments and fetch their reports."""

    prefix = "/quality"

    def assess_quality(
        self,
        data_path: str,
        checks: list[str] | None = None,
    ) -> dict[str, Any]:
        """Assess the quality of a stored dataset.

        Args:
            data_path: Location of the dataset.
            checks: Checks to run; the server default set when empty.

        Returns:
            The assessment, including a report ID.
        """
        body: dict[str, Any] = {"data_path": data_path}
        if checks:
            body["checks"] = checks
        response = self._post("/assess", body)
        return decode(response, dict[str, Any])

    def get_report(self, report_id: str) -> dict[str, Any]:
        response = self._get(f"/reports/{report_id}")
        return decode(response, dict[str, Any])
