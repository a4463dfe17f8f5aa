"""HTTP client for the event ingestion service."""

from typing import Any, Dict

import aiohttp

from event_ingestion.errors import RemoteHttpError
from event_ingestion.models import IngestResult


class EventIngestionHttpClient:
    """HTTP client for calling the event ingestion service."""

    def __init__(self, base_url: str, timeout: float = 5.0):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL of the service (e.g., "http://localhost:50051")
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def ingest_event(
        self, *, event_id: str, payload: str, timestamp: int
    ) -> IngestResult:
        """
        Ingest an event via HTTP API.

        Returns:
            IngestResult as reported by the service

        Raises:
            RemoteHttpError: If the HTTP request fails
        """
        url = f"{self.base_url}/events"
        request_body = {
            "event_id": event_id,
            "payload": payload,
            "timestamp": timestamp,
        }

        response_data = await self._request("post", url, "ingest event", json=request_body)
        return IngestResult(
            accepted=response_data["accepted"],
            message=response_data["message"],
            job_id=response_data.get("job_id", ""),
        )

    async def get_status(self, job_id: str) -> str:
        """
        Get a job's status.

        Returns:
            Status string: "processing", "done" or "not found"

        Raises:
            RemoteHttpError: If the HTTP request fails
        """
        url = f"{self.base_url}/jobs/{job_id}/status"
        response_data = await self._request("get", url, "get status")
        return response_data["status"]

    async def _request(
        self, method: str, url: str, action: str, **kwargs: Any
    ) -> Dict[str, Any]:
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            try:
                async with getattr(session, method)(url, **kwargs) as resp:
                    response_body = await resp.text()

                    if resp.status >= 400:
                        raise RemoteHttpError(
                            status_code=resp.status,
                            message=f"Failed to {action}: {response_body}",
                            response_body=response_body,
                        )

                    return await resp.json()

            except aiohttp.ClientError as e:
                raise RemoteHttpError(
                    status_code=0,
                    message=f"Network error: {str(e)}",
                ) from e
