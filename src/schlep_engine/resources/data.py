"""Data processing API (``/data``)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from schlep_engine.core.envelope import decode
from schlep_engine.core.resource import ResourceClient
from schlep_engine.models import (
    DataFormat,
    DataProcessingRequest,
    DataProcessingResult,
    FileUpload,
    JobInfo,
)


if TYPE_CHECKING:
    from os import PathLike


__all__ = ["DataProcessingClient"]


class DataProcessingClient(ResourceClient):
    """Upload, transform and convert datasets, and manage processing pipelines.

    Example:
        ```python
        result = client.data.process_file(
            "sales.csv",
            DataFormat.CSV,
            DataFormat.PARQUET,
        )
        job = client.data.get_job_status(result.job_id)
        ```
    """

    prefix = "/data"

    # -------------------------------------------------------------------------
    # Processing
    # -------------------------------------------------------------------------

    def process_file(
        self,
        file: str | PathLike[str],
        input_format: DataFormat,
        output_format: DataFormat,
        transformations: list[dict[str, Any]] | None = None,
    ) -> DataProcessingResult:
        """Upload a local file and process it in batch mode.

        Args:
            file: Local file to upload.
            input_format: Format of the file.
            output_format: Format of the processed output.
            transformations: Optional transformation rules.

        Returns:
            The processing result.
        """
        upload = self.upload_file(file)
        request = DataProcessingRequest(
            source_path=upload.url,
            data_format=input_format,
            processing_mode="batch",
            output_format=output_format,
            transformations=transformations,
        )
        return self.process_data(request)

    def process_url(
        self,
        url: str,
        input_format: DataFormat,
        output_format: DataFormat,
    ) -> DataProcessingResult:
        """Process data fetched by the API from a URL."""
        request = DataProcessingRequest(
            source_url=url,
            data_format=input_format,
            processing_mode="batch",
            output_format=output_format,
        )
        return self.process_data(request)

    def process_data(self, request: DataProcessingRequest) -> DataProcessingResult:
        """Submit a processing request (``POST /data/process``)."""
        response = self._post("/process", request)
        return decode(response, DataProcessingResult)

    async def process_data_async(
        self,
        request: DataProcessingRequest,
    ) -> DataProcessingResult:
        """Non-blocking variant of :meth:`process_data`."""
        response = await self._execute_async("POST", "/process", request)
        return decode(response, DataProcessingResult)

    def upload_file(self, file: str | PathLike[str]) -> FileUpload:
        """Upload a file for later processing (``POST /data/upload``)."""
        response = self._post_multipart("/upload", file)
        return decode(response, FileUpload)

    # -------------------------------------------------------------------------
    # Jobs
    # -------------------------------------------------------------------------

    def get_job_status(self, job_id: str) -> JobInfo:
        response = self._get(f"/jobs/{job_id}")
        return decode(response, JobInfo)

    def get_job_result(self, job_id: str) -> DataProcessingResult:
        response = self._get(f"/jobs/{job_id}/result")
        return decode(response, DataProcessingResult)

    def cancel_job(self, job_id: str) -> dict[str, Any]:
        response = self._post(f"/jobs/{job_id}/cancel", {})
        return decode(response, dict[str, Any])

    def list_jobs(
        self,
        page: int = 1,
        page_size: int = 20,
        status: str | None = None,
    ) -> list[JobInfo]:
        """List processing jobs.

        Args:
            page: Page number (1-indexed).
            page_size: Number of jobs per page.
            status: Only return jobs in this status.

        Returns:
            Jobs on the requested page.
        """
        params = {"page": page, "page_size": page_size, "status": status}
        response = self._get("/jobs", params)
        return decode(response, list[JobInfo])

    # -------------------------------------------------------------------------
    # Pipelines
    # -------------------------------------------------------------------------

    def create_pipeline(self, pipeline_config: dict[str, Any]) -> dict[str, Any]:
        response = self._post("/pipelines", pipeline_config)
        return decode(response, dict[str, Any])

    def get_pipeline(self, pipeline_id: str) -> dict[str, Any]:
        response = self._get(f"/pipelines/{pipeline_id}")
        return decode(response, dict[str, Any])

    def update_pipeline(
        self,
        pipeline_id: str,
        pipeline_config: dict[str, Any],
    ) -> dict[str, Any]:
        response = self._put(f"/pipelines/{pipeline_id}", pipeline_config)
        return decode(response, dict[str, Any])

    def delete_pipeline(self, pipeline_id: str) -> dict[str, Any]:
        response = self._delete(f"/pipelines/{pipeline_id}")
        return decode(response, dict[str, Any])

    def run_pipeline(
        self,
        pipeline_id: str,
        parameters: dict[str, Any] | None = None,
    ) -> DataProcessingResult:
        """Run a pipeline with optional run parameters."""
        body = {"parameters": parameters or {}}
        response = self._post(f"/pipelines/{pipeline_id}/run", body)
        return decode(response, DataProcessingResult)

    def list_pipelines(
        self,
        page: int = 1,
        page_size: int = 20,
    ) -> list[dict[str, Any]]:
        response = self._get("/pipelines", {"page": page, "page_size": page_size})
        return decode(response, list[dict[str, Any]])
