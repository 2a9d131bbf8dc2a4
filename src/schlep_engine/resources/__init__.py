"""Resource clients, one per API area."""

from __future__ import annotations

from schlep_engine.resources.admin import AdminClient
from schlep_engine.resources.analytics import AnalyticsClient
from schlep_engine.resources.data import DataProcessingClient
from schlep_engine.resources.document import DocumentClient
from schlep_engine.resources.ml import MLPipelineClient
from schlep_engine.resources.monitoring import MonitoringClient
from schlep_engine.resources.quality import QualityClient
from schlep_engine.resources.storage import StorageClient
from schlep_engine.resources.users import UsersClient


__all__ = [
    "AdminClient",
    "AnalyticsClient",
    "DataProcessingClient",
    "DocumentClient",
    "MLPipelineClient",
    "MonitoringClient",
    "QualityClient",
    "StorageClient",
    "UsersClient",
]
