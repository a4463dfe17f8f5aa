"""Deferred completion of ingested jobs."""

import asyncio
import logging
from typing import Dict, List, Optional

from event_ingestion.tracker import JobStatusTracker


class CompletionScheduler:
    """
    Runs one delayed completion task per accepted job.

    Each task waits ``delay_seconds`` and then calls
    :meth:`JobStatusTracker.complete` with a fresh timeout budget, independent
    of the request that scheduled it. Tasks are owned here rather than left
    detached, so they can be fired early with :meth:`run_pending` or cancelled
    with :meth:`shutdown`.

    Example:
        ```python
        scheduler = CompletionScheduler(tracker, delay_seconds=3)
        scheduler.schedule(job_id)

        # Complete everything now instead of waiting out the delay
        await scheduler.run_pending()
        ```
    """

    def __init__(
        self,
        tracker: JobStatusTracker,
        delay_seconds: float = 3.0,
        logger: Optional[logging.Logger] = None,
    ):
        self.tracker = tracker
        self.delay_seconds = delay_seconds
        self.logger = logger or logging.getLogger(__name__)
        self._tasks: Dict[str, asyncio.Task] = {}
        self._triggers: Dict[str, asyncio.Event] = {}

    @property
    def pending_job_ids(self) -> List[str]:
        """Job IDs whose completion has not finished yet."""
        return list(self._tasks.keys())

    def schedule(self, job_id: str) -> asyncio.Task:
        """
        Schedule completion of a job after the fixed delay.

        Must be called from within a running event loop.

        Returns:
            asyncio.Task: The task that will complete the job
        """
        if job_id in self._tasks:
            return self._tasks[job_id]

        trigger = asyncio.Event()
        task = asyncio.create_task(self._run(job_id, trigger))
        self._tasks[job_id] = task
        self._triggers[job_id] = trigger
        task.add_done_callback(lambda _: self._forget(job_id))

        self.logger.debug(f"Scheduled completion of job {job_id} in {self.delay_seconds}s")
        return task

    async def run_pending(self) -> None:
        """Fire every pending completion now and wait for all of them."""
        for trigger in list(self._triggers.values()):
            trigger.set()
        await self.wait_idle()

    async def wait_idle(self) -> None:
        """Wait for every scheduled completion to finish."""
        tasks = list(self._tasks.values())
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel all pending completions."""
        tasks = list(self._tasks.values())
        if not tasks:
            return

        self.logger.info(f"Cancelling {len(tasks)} pending job completions")
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(self, job_id: str, trigger: asyncio.Event) -> None:
        try:
            await asyncio.wait_for(trigger.wait(), timeout=self.delay_seconds)
        except asyncio.TimeoutError:
            pass

        try:
            await self.tracker.complete(job_id)
        except Exception as e:
            self.logger.error(f"Completion of job {job_id} failed: {e}", exc_info=True)

    def _forget(self, job_id: str) -> None:
        self._tasks.pop(job_id, None)
        self._triggers.pop(job_id, None)
