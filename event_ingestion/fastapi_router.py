"""FastAPI router for the event ingestion HTTP API."""

from typing import Callable

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from event_ingestion.service import EventIngestionService


class IngestEventRequest(BaseModel):
    """Request model for ingesting an event."""

    event_id: str
    payload: str
    timestamp: int  # seconds since epoch


class IngestEventResponse(BaseModel):
    """Response model for ingesting an event."""

    accepted: bool
    message: str
    job_id: str = ""


class StatusResponse(BaseModel):
    """Response model for a job status lookup."""

    status: str


def create_events_router(
    service_factory: Callable[[], EventIngestionService],
) -> APIRouter:
    """
    Create FastAPI router for the event ingestion API.

    Args:
        service_factory: Callable that returns an EventIngestionService instance

    Returns:
        APIRouter instance
    """
    router = APIRouter()

    async def get_service() -> EventIngestionService:
        """Dependency to get EventIngestionService instance."""
        return service_factory()

    @router.post("/events", response_model=IngestEventResponse)
    async def ingest_event(
        request: IngestEventRequest,
        service: EventIngestionService = Depends(get_service),
    ):
        """Ingest an event and start tracking its job."""
        result = await service.ingest_event(
            event_id=request.event_id,
            payload=request.payload,
            timestamp=request.timestamp,
        )
        return IngestEventResponse(**result.to_dict())

    @router.get("/jobs/{job_id}/status", response_model=StatusResponse)
    async def get_status(
        job_id: str,
        service: EventIngestionService = Depends(get_service),
    ):
        """Get a job's status."""
        status = await service.get_status(job_id)
        return StatusResponse(status=status.value)

    @router.get("/health")
    async def health():
        return {"status": "ok"}

    return router
