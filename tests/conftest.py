"""Pytest configuration and fixtures."""

import logging
from unittest.mock import AsyncMock

import pytest

from event_ingestion.cache import StatusCache
from event_ingestion.completion import CompletionScheduler
from event_ingestion.service import EventIngestionService
from event_ingestion.store import InMemoryJobStore, JobStore
from event_ingestion.tracker import JobStatusTracker


@pytest.fixture
def sample_event():
    """Sample event from the manual test client."""
    return {
        "event_id": "evt-123",
        "payload": '{"type":"user_signup"}',
        "timestamp": 1700000000,
    }


@pytest.fixture
def logger():
    return logging.getLogger("tests")


@pytest.fixture
def mock_store():
    """Job store whose every call can be scripted."""
    store = AsyncMock(spec=JobStore)
    store.get_job_status.return_value = None
    store.update_job_status.return_value = True
    return store


@pytest.fixture
def mock_cache():
    """Status cache that misses by default."""
    cache = AsyncMock(spec=StatusCache)
    cache.get_status.return_value = None
    return cache


@pytest.fixture
def memory_store():
    return InMemoryJobStore()


@pytest.fixture
def memory_tracker(memory_store):
    """Tracker over the in-memory store with no cache."""
    return JobStatusTracker(store=memory_store, operation_timeout=1.0)


@pytest.fixture
def memory_service(memory_tracker):
    """Service over the in-memory store with a long completion delay."""
    scheduler = CompletionScheduler(memory_tracker, delay_seconds=60)
    return EventIngestionService(memory_tracker, scheduler)
