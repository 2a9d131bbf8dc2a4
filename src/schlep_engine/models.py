"""Pydantic models for Schlep-engine API requests and responses.

All models are immutable. Response models ignore unknown fields and leave
absent fields as ``None``; request models are serialized without their
``None`` fields.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


__all__ = [
    "DataFormat",
    "DataProcessingRequest",
    "DataProcessingResult",
    "DeployRequest",
    "DeployResponse",
    "FileUpload",
    "JobInfo",
    "MLTaskType",
    "ModelInfo",
    "PredictionRequest",
    "StatusResponse",
    "StreamConfig",
    "TrainConfig",
    "TrainResponse",
    "TrainingJob",
    "UploadRequest",
    "UploadResponse",
]


class DataFormat(StrEnum):
    """Data formats accepted by the data processing API."""

    CSV = "csv"
    JSON = "json"
    XLSX = "xlsx"
    PARQUET = "parquet"
    AVRO = "avro"
    ORC = "orc"


class MLTaskType(StrEnum):
    """Machine learning task types."""

    CLASSIFICATION = "classification"
    REGRESSION = "regression"
    CLUSTERING = "clustering"
    ANOMALY_DETECTION = "anomaly_detection"
    TIME_SERIES = "time_series"
    NLP = "nlp"
    COMPUTER_VISION = "computer_vision"


class SchlepBaseModel(BaseModel):
    """Base model with common configuration for all API models."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="ignore",  # Ignore unknown fields from API
        protected_namespaces=(),  # model_id, model_type are API fields
    )


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------


class UploadRequest(SchlepBaseModel):
    """Body of ``POST /upload``."""

    data: str


class TrainConfig(SchlepBaseModel):
    """Training configuration for ``POST /train``.

    Example:
        ```python
        config = TrainConfig(model_type="classification", dataset_id="u1")
        result = client.train(config)
        ```
    """

    model_type: str | None = None
    dataset_id: str | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)


class DeployRequest(SchlepBaseModel):
    """Body of ``POST /deploy``."""

    model_id: str


class PredictionRequest(SchlepBaseModel):
    """Body of ``POST /ml/predict``."""

    model_id: str
    input_data: Any = None
    return_probabilities: bool | None = None
    explain_predictions: bool | None = None


class DataProcessingRequest(SchlepBaseModel):
    """Body of ``POST /data/process``.

    Either ``source_path`` or ``source_url`` identifies the input.
    """

    source_path: str | None = None
    source_url: str | None = None
    data_format: DataFormat | None = None
    processing_mode: str | None = None
    transformations: list[dict[str, Any]] | None = None
    output_format: DataFormat | None = None
    options: dict[str, Any] | None = None


class StreamConfig(SchlepBaseModel):
    """Event subscription settings for :meth:`SchlepClient.stream`."""

    event_types: list[str] = Field(default_factory=list)
    filters: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------


class UploadResponse(SchlepBaseModel):
    """Result of an upload."""

    job_id: str | None = None
    status: str | None = None
    message: str | None = None


class TrainResponse(SchlepBaseModel):
    """Result of starting a training run."""

    job_id: str | None = None
    model_id: str | None = None
    status: str | None = None
    message: str | None = None


class DeployResponse(SchlepBaseModel):
    """Result of deploying a model."""

    deployment_id: str | None = None
    endpoint_url: str | None = None
    status: str | None = None
    message: str | None = None


class StatusResponse(SchlepBaseModel):
    """Status of a job started through the top-level API.

    ``result`` holds arbitrary JSON produced by the job.
    """

    job_id: str | None = None
    status: str | None = None
    progress: float | None = None
    result: Any = None
    error: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class DataProcessingResult(SchlepBaseModel):
    """Result of a data processing job."""

    job_id: str | None = None
    status: str | None = None
    output_path: str | None = None
    records_processed: int | None = None
    metadata: dict[str, Any] | None = None


class FileUpload(SchlepBaseModel):
    """A file stored by the API."""

    file_id: str | None = None
    url: str | None = None
    filename: str | None = None
    content_type: str | None = None
    size: int | None = None


class JobInfo(SchlepBaseModel):
    """A data processing job."""

    job_id: str | None = None
    status: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None
    progress: int | None = None
    message: str | None = None
    metadata: dict[str, Any] | None = None


class TrainingJob(SchlepBaseModel):
    """A training job of an ML pipeline."""

    job_id: str | None = None
    pipeline_id: str | None = None
    model_id: str | None = None
    status: str | None = None
    progress: int | None = None
    created_at: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    metrics: dict[str, Any] | None = None
    message: str | None = None


class ModelInfo(SchlepBaseModel):
    """A trained model."""

    model_id: str | None = None
    name: str | None = None
    model_type: str | None = None
    task_type: MLTaskType | None = None
    version: str | None = None
    status: str | None = None
    created_at: datetime | None = None
    metrics: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
