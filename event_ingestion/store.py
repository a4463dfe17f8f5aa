"""Durable store layer for ingested event jobs."""

import asyncio
import copy
from typing import Dict, Optional

import asyncpg

from event_ingestion.ddl import EVENTS_TABLE_DDL
from event_ingestion.models import Job, JobStatus


class JobStore:
    """Capability interface shared by the job store backends."""

    async def insert_job(self, job: Job) -> None:
        """Record a newly created job."""
        raise NotImplementedError

    async def update_job_status(self, job_id: str, status: JobStatus) -> bool:
        """Move a job to ``status``. Returns False if no row changed."""
        raise NotImplementedError

    async def get_job_status(self, job_id: str) -> Optional[JobStatus]:
        """Read a job's status, or None if the job is unknown."""
        raise NotImplementedError


class PostgresJobStore(JobStore):
    """Postgres-backed job store using the ``events`` table."""

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    async def ensure_schema(self) -> None:
        """Create the events table if it does not exist yet."""
        async with self.db_pool.acquire() as conn:
            await conn.execute(EVENTS_TABLE_DDL)

    async def insert_job(self, job: Job) -> None:
        async with self.db_pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO events (job_id, event_id, payload, event_timestamp, status)
                VALUES ($1, $2, $3, $4, $5)
                """,
                job.job_id,
                job.event_id,
                job.payload,
                job.event_timestamp,
                job.status.value,
            )

    async def update_job_status(self, job_id: str, status: JobStatus) -> bool:
        # Only rows still processing may move, so a status never regresses.
        async with self.db_pool.acquire() as conn:
            result = await conn.execute(
                """
                UPDATE events
                SET status = $1, updated_at = NOW()
                WHERE job_id = $2 AND status = $3
                """,
                status.value,
                job_id,
                JobStatus.PROCESSING.value,
            )

        # Result string looks like "UPDATE 1"
        return bool(result) and int(result.split()[-1]) > 0

    async def get_job_status(self, job_id: str) -> Optional[JobStatus]:
        async with self.db_pool.acquire() as conn:
            status = await conn.fetchval(
                "SELECT status FROM events WHERE job_id = $1", job_id
            )

        if status is None:
            return None
        return JobStatus(status)


class InMemoryJobStore(JobStore):
    """Process-local job store for running without Postgres.

    Jobs live only as long as the process does. All access goes through a
    single lock so lookups never observe a half-applied insert.
    """

    def __init__(self):
        self._jobs: Dict[str, Job] = {}
        self._lock = asyncio.Lock()

    async def insert_job(self, job: Job) -> None:
        async with self._lock:
            if job.job_id in self._jobs:
                raise ValueError(f"Job {job.job_id} already exists")
            self._jobs[job.job_id] = copy.copy(job)

    async def update_job_status(self, job_id: str, status: JobStatus) -> bool:
        async with self._lock:
            job = self._jobs.get(job_id)
            if job is None or job.status != JobStatus.PROCESSING:
                return False
            job.status = status
            return True

    async def get_job_status(self, job_id: str) -> Optional[JobStatus]:
        async with self._lock:
            job = self._jobs.get(job_id)
            return job.status if job else None
