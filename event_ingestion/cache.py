"""Redis fast-path cache for job status lookups."""

import logging
from typing import Optional

import redis.asyncio as redis

from event_ingestion.models import JobStatus

logger = logging.getLogger(__name__)

DEFAULT_STATUS_TTL_SECONDS = 24 * 60 * 60


def create_redis_client(
    redis_url: str,
    socket_timeout: float = 5.0,
    socket_connect_timeout: float = 5.0,
) -> redis.Redis:
    """Create an asyncio Redis client that decodes responses to ``str``."""
    return redis.Redis.from_url(
        redis_url,
        decode_responses=True,
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_connect_timeout,
        health_check_interval=30,
    )


class StatusCache:
    """Maps job ids to status strings with a fixed time-to-live.

    Entries are best-effort: callers treat every error raised here as a cache
    miss, never as a failed operation.
    """

    def __init__(
        self,
        client: redis.Redis,
        ttl_seconds: int = DEFAULT_STATUS_TTL_SECONDS,
    ):
        self.client = client
        self.ttl_seconds = ttl_seconds

    async def get_status(self, job_id: str) -> Optional[JobStatus]:
        """Return the cached status, or None on a miss."""
        value = await self.client.get(job_id)
        if value is None:
            return None
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        try:
            return JobStatus(value)
        except ValueError:
            logger.warning(f"Ignoring unexpected cached status {value!r} for job {job_id}")
            return None

    async def set_status(
        self, job_id: str, status: JobStatus, only_if_absent: bool = False
    ) -> None:
        """Write a status, restarting the entry's time-to-live.

        With ``only_if_absent`` the write is skipped when the key already
        holds a value, so a fill from a stale read never replaces a newer
        status.
        """
        await self.client.set(
            job_id, status.value, ex=self.ttl_seconds, nx=only_if_absent
        )

    async def ping(self) -> bool:
        return await self.client.ping()
