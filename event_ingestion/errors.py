"""Exception types for the event ingestion service."""


class EventIngestionError(Exception):
    """Base exception for all event ingestion errors."""

    pass


class InvalidEventError(EventIngestionError):
    """Raised when an event is rejected before it reaches storage."""

    pass


class JobPersistenceError(EventIngestionError):
    """Raised when a new job cannot be recorded in the durable store."""

    def __init__(self, job_id: str, message: str = None):
        self.job_id = job_id
        if message is None:
            message = f"Failed to persist job {job_id}"
        super().__init__(message)


class RemoteHttpError(EventIngestionError):
    """Raised when an HTTP request to a remote event ingestion service fails."""

    def __init__(self, status_code: int, message: str, response_body: str = None):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(f"HTTP {status_code}: {message}")
