"""Data models for ingested events and their jobs."""

from enum import Enum
from typing import Any, Dict


class JobStatus(str, Enum):
    """Job status values.

    ``NOT_FOUND`` is only ever returned by lookups; it is never persisted.
    """

    PROCESSING = "processing"
    DONE = "done"
    NOT_FOUND = "not found"


class Job:
    """Represents a row of the events table."""

    def __init__(
        self,
        job_id: str,
        event_id: str,
        payload: str,
        event_timestamp: int,
        status: JobStatus = JobStatus.PROCESSING,
    ):
        self.job_id = job_id
        self.event_id = event_id
        self.payload = payload
        self.event_timestamp = event_timestamp
        self.status = JobStatus(status) if isinstance(status, str) else status


class IngestResult:
    """Outcome of a single ingestion attempt."""

    def __init__(self, accepted: bool, message: str, job_id: str = ""):
        self.accepted = accepted
        self.message = message
        self.job_id = job_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accepted": self.accepted,
            "message": self.message,
            "job_id": self.job_id,
        }
