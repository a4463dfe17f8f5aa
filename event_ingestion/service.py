"""High-level service layer behind the ingestion and status endpoints."""

import logging
from typing import Optional

from event_ingestion.completion import CompletionScheduler
from event_ingestion.errors import JobPersistenceError
from event_ingestion.models import IngestResult, JobStatus
from event_ingestion.tracker import JobStatusTracker

MSG_ACCEPTED = "Event received successfully"
MSG_MISSING_EVENT_ID = "No event id received"
MSG_PERSIST_FAILED = "Failed to persist event"


class EventIngestionService:
    """High-level API for ingesting events and reading job status."""

    def __init__(
        self,
        tracker: JobStatusTracker,
        completion_scheduler: CompletionScheduler,
        logger: Optional[logging.Logger] = None,
    ):
        self.tracker = tracker
        self.completion_scheduler = completion_scheduler
        self.logger = logger or logging.getLogger(__name__)

    async def ingest_event(
        self, *, event_id: str, payload: str, timestamp: int
    ) -> IngestResult:
        """
        Ingest a single event.

        Args:
            event_id: Caller-supplied event identifier
            payload: Opaque event payload
            timestamp: Event timestamp in seconds since epoch

        Returns:
            IngestResult: ``accepted`` is False, with an empty job id, when the
            event id is missing or the job could not be persisted
        """
        self.logger.info(
            f"Received event: id={event_id} payload={payload} timestamp={timestamp}"
        )

        if not event_id:
            return IngestResult(accepted=False, message=MSG_MISSING_EVENT_ID)

        try:
            job_id = await self.tracker.create(event_id, payload, timestamp)
        except JobPersistenceError:
            return IngestResult(accepted=False, message=MSG_PERSIST_FAILED)

        self.completion_scheduler.schedule(job_id)

        return IngestResult(accepted=True, message=MSG_ACCEPTED, job_id=job_id)

    async def get_status(self, job_id: str) -> JobStatus:
        """Get a job's status; unknown IDs yield ``JobStatus.NOT_FOUND``."""
        return await self.tracker.get_status(job_id)
