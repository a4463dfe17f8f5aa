"""Event ingestion service with cache-backed job status tracking."""

from event_ingestion.app import create_app, open_service
from event_ingestion.cache import StatusCache, create_redis_client
from event_ingestion.completion import CompletionScheduler
from event_ingestion.config import EventIngestionConfig
from event_ingestion.ddl import EVENTS_TABLE_DDL
from event_ingestion.errors import (
    EventIngestionError,
    InvalidEventError,
    JobPersistenceError,
    RemoteHttpError,
)
from event_ingestion.fastapi_router import create_events_router
from event_ingestion.http_client import EventIngestionHttpClient
from event_ingestion.models import IngestResult, Job, JobStatus
from event_ingestion.service import EventIngestionService
from event_ingestion.store import InMemoryJobStore, JobStore, PostgresJobStore
from event_ingestion.tracker import JobStatusTracker

__version__ = "0.1.0"

__all__ = [
    "create_app",
    "open_service",
    "StatusCache",
    "create_redis_client",
    "CompletionScheduler",
    "EventIngestionConfig",
    "EVENTS_TABLE_DDL",
    "EventIngestionError",
    "InvalidEventError",
    "JobPersistenceError",
    "RemoteHttpError",
    "create_events_router",
    "EventIngestionHttpClient",
    "IngestResult",
    "Job",
    "JobStatus",
    "EventIngestionService",
    "InMemoryJobStore",
    "JobStore",
    "PostgresJobStore",
    "JobStatusTracker",
]
