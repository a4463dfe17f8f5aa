"""Job status tracking: creation, completion and the two-tier read path."""

import asyncio
import logging
from typing import Optional
from uuid import uuid4

from event_ingestion.cache import StatusCache
from event_ingestion.errors import InvalidEventError, JobPersistenceError
from event_ingestion.models import Job, JobStatus
from event_ingestion.store import JobStore


class JobStatusTracker:
    """Owns the lifecycle of every job.

    A job is created as ``processing`` and moved to ``done`` exactly once by
    :meth:`complete`. Writes go to the store first (when one is configured)
    and are mirrored to the cache. Reads check the cache, fall back to the
    store and backfill the cache on a store hit.

    Every store and cache call is bounded by ``operation_timeout`` seconds.
    """

    def __init__(
        self,
        store: Optional[JobStore] = None,
        cache: Optional[StatusCache] = None,
        operation_timeout: float = 5.0,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.cache = cache
        self.operation_timeout = operation_timeout
        self.logger = logger or logging.getLogger(__name__)

    async def create(self, event_id: str, payload: str, timestamp: int) -> str:
        """
        Create a new job for an ingested event.

        Args:
            event_id: Caller-supplied event identifier, must be non-empty
            payload: Opaque event payload, stored unmodified
            timestamp: Caller-supplied event timestamp, stored verbatim

        Returns:
            str: The new job ID

        Raises:
            InvalidEventError: If event_id is empty
            JobPersistenceError: If the store rejects the new job
        """
        if not event_id:
            raise InvalidEventError("No event id received")

        job_id = str(uuid4())
        job = Job(
            job_id=job_id,
            event_id=event_id,
            payload=payload,
            event_timestamp=timestamp,
            status=JobStatus.PROCESSING,
        )

        if self.store is not None:
            try:
                await self._bounded(self.store.insert_job(job))
            except Exception as e:
                self.logger.error(f"Failed to insert event {event_id}: {e}", exc_info=True)
                raise JobPersistenceError(job_id) from e

        await self._cache_set(job_id, JobStatus.PROCESSING, "processing status")

        self.logger.info(f"Created job {job_id} for event {event_id}")
        return job_id

    async def complete(self, job_id: str) -> None:
        """Mark a job as done. Failures are logged and never raised."""
        await self._cache_set(job_id, JobStatus.DONE, "done status")

        if self.store is None:
            return

        try:
            updated = await self._bounded(
                self.store.update_job_status(job_id, JobStatus.DONE)
            )
        except Exception as e:
            self.logger.error(
                f"Failed to update status in store for job {job_id}: {e}", exc_info=True
            )
            return

        if updated:
            self.logger.info(f"Job {job_id} done")
        else:
            self.logger.warning(f"Job {job_id} was not in processing state, left unchanged")

    async def get_status(self, job_id: str) -> JobStatus:
        """
        Look up a job's status.

        Returns:
            JobStatus: The job's status, or ``JobStatus.NOT_FOUND`` when
            neither the cache nor the store knows the job or both failed
        """
        if self.cache is not None:
            try:
                status = await self._bounded(self.cache.get_status(job_id))
            except Exception as e:
                self.logger.warning(f"Failed to read cached status for job {job_id}: {e}")
                status = None
            if status is not None:
                return status

        if self.store is None:
            return JobStatus.NOT_FOUND

        try:
            status = await self._bounded(self.store.get_job_status(job_id))
        except Exception as e:
            self.logger.error(f"Failed to read status from store for job {job_id}: {e}")
            return JobStatus.NOT_FOUND

        if status is None:
            return JobStatus.NOT_FOUND

        await self._cache_set(job_id, status, "backfill status", only_if_absent=True)
        return status

    async def _cache_set(
        self, job_id: str, status: JobStatus, what: str, only_if_absent: bool = False
    ) -> None:
        if self.cache is None:
            return
        try:
            await self._bounded(
                self.cache.set_status(job_id, status, only_if_absent=only_if_absent)
            )
        except Exception as e:
            self.logger.error(f"Failed to set {what} in cache for job {job_id}: {e}")

    async def _bounded(self, coro):
        return await asyncio.wait_for(coro, timeout=self.operation_timeout)
