"""Python client for the Schlep-engine data processing and ML API."""

from __future__ import annotations

from schlep_engine._version import __version__
from schlep_engine.client import SchlepClient
from schlep_engine.exceptions import (
    ApiError,
    ConfigurationError,
    ResponseDecodeError,
    SchlepError,
)
from schlep_engine.models import (
    DataFormat,
    DataProcessingRequest,
    DataProcessingResult,
    DeployResponse,
    FileUpload,
    JobInfo,
    MLTaskType,
    ModelInfo,
    StatusResponse,
    StreamConfig,
    TrainConfig,
    TrainingJob,
    TrainResponse,
    UploadResponse,
)


__all__ = [
    "ApiError",
    "ConfigurationError",
    "DataFormat",
    "DataProcessingRequest",
    "DataProcessingResult",
    "DeployResponse",
    "FileUpload",
    "JobInfo",
    "MLTaskType",
    "ModelInfo",
    "ResponseDecodeError",
    "SchlepClient",
    "SchlepError",
    "StatusResponse",
    "StreamConfig",
    "TrainConfig",
    "TrainResponse",
    "TrainingJob",
    "UploadResponse",
    "__version__",
]
