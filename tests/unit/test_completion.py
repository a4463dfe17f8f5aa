"""Unit tests for the completion scheduler."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from event_ingestion.completion import CompletionScheduler
from event_ingestion.models import JobStatus
from event_ingestion.tracker import JobStatusTracker


@pytest.fixture
def mock_tracker():
    return AsyncMock(spec=JobStatusTracker)


@pytest.mark.asyncio
async def test_schedule_completes_after_delay(mock_tracker):
    scheduler = CompletionScheduler(mock_tracker, delay_seconds=0.01)

    task = scheduler.schedule("job-1")
    await task

    mock_tracker.complete.assert_awaited_once_with("job-1")
    assert scheduler.pending_job_ids == []


@pytest.mark.asyncio
async def test_schedule_does_not_complete_before_delay(mock_tracker):
    scheduler = CompletionScheduler(mock_tracker, delay_seconds=60)

    scheduler.schedule("job-1")
    await asyncio.sleep(0)

    mock_tracker.complete.assert_not_called()
    assert scheduler.pending_job_ids == ["job-1"]

    await scheduler.shutdown()


@pytest.mark.asyncio
async def test_schedule_same_job_twice_returns_same_task(mock_tracker):
    scheduler = CompletionScheduler(mock_tracker, delay_seconds=60)

    first = scheduler.schedule("job-1")
    second = scheduler.schedule("job-1")

    assert first is second
    await scheduler.shutdown()


@pytest.mark.asyncio
async def test_run_pending_fires_without_waiting(mock_tracker):
    scheduler = CompletionScheduler(mock_tracker, delay_seconds=60)
    scheduler.schedule("job-1")
    scheduler.schedule("job-2")

    await asyncio.wait_for(scheduler.run_pending(), timeout=1)

    completed = {call.args[0] for call in mock_tracker.complete.await_args_list}
    assert completed == {"job-1", "job-2"}
    assert scheduler.pending_job_ids == []


@pytest.mark.asyncio
async def test_shutdown_cancels_pending(mock_tracker):
    scheduler = CompletionScheduler(mock_tracker, delay_seconds=60)
    task = scheduler.schedule("job-1")

    await scheduler.shutdown()

    assert task.cancelled()
    mock_tracker.complete.assert_not_called()
    assert scheduler.pending_job_ids == []


@pytest.mark.asyncio
async def test_completion_failure_is_logged(mock_tracker, caplog):
    mock_tracker.complete.side_effect = RuntimeError("boom")
    scheduler = CompletionScheduler(mock_tracker, delay_seconds=60)
    task = scheduler.schedule("job-1")

    await scheduler.run_pending()

    assert not task.cancelled()
    assert task.exception() is None
    assert "Completion of job job-1 failed" in caplog.text


@pytest.mark.asyncio
async def test_completion_moves_job_to_done(memory_tracker):
    scheduler = CompletionScheduler(memory_tracker, delay_seconds=60)
    job_id = await memory_tracker.create("evt-123", "x", 0)
    scheduler.schedule(job_id)

    await scheduler.run_pending()

    assert await memory_tracker.get_status(job_id) == JobStatus.DONE
