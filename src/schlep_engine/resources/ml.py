"""ML pipeline API (``/ml``): pipelines, training, prediction and models."""

from __future__ import annotations

from typing import Any

from schlep_engine.core.envelope import decode
from schlep_engine.core.resource import ResourceClient
from schlep_engine.models import ModelInfo, PredictionRequest, TrainingJob


__all__ = ["MLPipelineClient"]


class MLPipelineClient(ResourceClient):
    """Create ML pipelines, train them, and serve predictions.

    Example:
        ```python
        pipeline = client.ml.create_pipeline(
            {"name": "churn", "task_type": MLTaskType.CLASSIFICATION},
        )
        job = client.ml.train_pipeline(pipeline["pipeline_id"], "s3://bucket/train.csv")
        prediction = client.ml.predict(job.model_id, {"tenure": 12})
        ```
    """

    prefix = "/ml"

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

    def list_pipelines(
        self,
        page: int = 1,
        page_size: int = 20,
    ) -> list[dict[str, Any]]:
        response = self._get("/pipelines", {"page": page, "page_size": page_size})
        return decode(response, list[dict[str, Any]])

    # -------------------------------------------------------------------------
    # Training
    # -------------------------------------------------------------------------

    @staticmethod
    def _training_body(
        pipeline_id: str,
        training_data_path: str | None,
        parameters: dict[str, Any] | None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"pipeline_id": pipeline_id}
        if training_data_path is not None:
            body["training_data_path"] = training_data_path
        body["parameters"] = parameters or {}
        return body

    def train_pipeline(
        self,
        pipeline_id: str,
        training_data_path: str | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> TrainingJob:
        """Start training a pipeline.

        Args:
            pipeline_id: Pipeline to train.
            training_data_path: Location of the training data, if not set
                on the pipeline.
            parameters: Training parameters.

        Returns:
            The started training job.
        """
        body = self._training_body(pipeline_id, training_data_path, parameters)
        response = self._post("/train", body)
        return decode(response, TrainingJob)

    async def train_pipeline_async(
        self,
        pipeline_id: str,
        training_data_path: str | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> TrainingJob:
        """Non-blocking variant of :meth:`train_pipeline`."""
        body = self._training_body(pipeline_id, training_data_path, parameters)
        response = await self._execute_async("POST", "/train", body)
        return decode(response, TrainingJob)

    def get_training_job(self, job_id: str) -> TrainingJob:
        response = self._get(f"/training/{job_id}")
        return decode(response, TrainingJob)

    def cancel_training(self, job_id: str) -> dict[str, Any]:
        response = self._post(f"/training/{job_id}/cancel", {})
        return decode(response, dict[str, Any])

    def get_training_logs(self, job_id: str, lines: int | None = None) -> list[str]:
        """Fetch log lines of a training job.

        The endpoint nests the lines under ``data.logs``.

        Args:
            job_id: Training job ID.
            lines: Maximum number of trailing lines to return.

        Returns:
            Log lines.
        """
        response = self._get(f"/training/{job_id}/logs", {"lines": lines})
        return decode(response, list[str], path=("logs",))

    def list_training_jobs(
        self,
        page: int = 1,
        page_size: int = 20,
        status: str | None = None,
        pipeline_id: str | None = None,
    ) -> list[TrainingJob]:
        params = {
            "page": page,
            "page_size": page_size,
            "status": status,
            "pipeline_id": pipeline_id,
        }
        response = self._get("/training", params)
        return decode(response, list[TrainingJob])

    # -------------------------------------------------------------------------
    # Prediction
    # -------------------------------------------------------------------------

    def predict(
        self,
        model_id: str,
        input_data: Any,  # noqa: ANN401
        *,
        return_probabilities: bool = False,
        explain_predictions: bool = False,
    ) -> dict[str, Any]:
        """Run a single prediction against a deployed model."""
        request = PredictionRequest(
            model_id=model_id,
            input_data=input_data,
            return_probabilities=return_probabilities,
            explain_predictions=explain_predictions,
        )
        response = self._post("/predict", request)
        return decode(response, dict[str, Any])

    def batch_predict(
        self,
        model_id: str,
        data_path: str,
        output_path: str | None = None,
    ) -> dict[str, Any]:
        """Run predictions over a stored dataset."""
        body: dict[str, Any] = {"model_id": model_id, "data_path": data_path}
        if output_path is not None:
            body["output_path"] = output_path
        response = self._post("/predict/batch", body)
        return decode(response, dict[str, Any])

    # -------------------------------------------------------------------------
    # Models
    # -------------------------------------------------------------------------

    def get_model(self, model_id: str) -> ModelInfo:
        response = self._get(f"/models/{model_id}")
        return decode(response, ModelInfo)

    def list_models(self, page: int = 1, page_size: int = 20) -> list[ModelInfo]:
        response = self._get("/models", {"page": page, "page_size": page_size})
        return decode(response, list[ModelInfo])

    def delete_model(self, model_id: str) -> dict[str, Any]:
        response = self._delete(f"/models/{model_id}")
        return decode(response, dict[str, Any])

    def get_model_metrics(self, model_id: str) -> dict[str, Any]:
        response = self._get(f"/models/{model_id}/metrics")
        return decode(response, dict[str, Any])

    def get_model_download_url(self, model_id: str) -> str:
        """URL the model artifact can be downloaded from. Makes no request."""
        return self._url(f"/models/{model_id}/download")
