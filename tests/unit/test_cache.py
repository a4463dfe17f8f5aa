"""Unit tests for cache module."""

from unittest.mock import AsyncMock, patch

import pytest

from event_ingestion.cache import (
    DEFAULT_STATUS_TTL_SECONDS,
    StatusCache,
    create_redis_client,
)
from event_ingestion.models import JobStatus


@pytest.fixture
def mock_redis():
    return AsyncMock()


@pytest.fixture
def cache(mock_redis):
    return StatusCache(mock_redis)


def test_default_ttl_is_one_day():
    assert DEFAULT_STATUS_TTL_SECONDS == 24 * 60 * 60


@pytest.mark.asyncio
async def test_set_status_uses_ttl(cache, mock_redis):
    await cache.set_status("job-1", JobStatus.PROCESSING)

    mock_redis.set.assert_awaited_once_with(
        "job-1", "processing", ex=DEFAULT_STATUS_TTL_SECONDS, nx=False
    )


@pytest.mark.asyncio
async def test_set_status_custom_ttl(mock_redis):
    cache = StatusCache(mock_redis, ttl_seconds=60)

    await cache.set_status("job-1", JobStatus.DONE)

    mock_redis.set.assert_awaited_once_with("job-1", "done", ex=60, nx=False)


@pytest.mark.asyncio
async def test_set_status_only_if_absent_uses_nx(cache, mock_redis):
    await cache.set_status("job-1", JobStatus.PROCESSING, only_if_absent=True)

    mock_redis.set.assert_awaited_once_with(
        "job-1", "processing", ex=DEFAULT_STATUS_TTL_SECONDS, nx=True
    )

@pytest.mark.asyncio
async def test_get_status_hit(cache, mock_redis):
    mock_redis.get.return_value = "done"

    assert await cache.get_status("job-1") == JobStatus.DONE


@pytest.mark.asyncio
async def test_get_status_decodes_bytes(cache, mock_redis):
    mock_redis.get.return_value = b"processing"

    assert await cache.get_status("job-1") == JobStatus.PROCESSING


@pytest.mark.asyncio
async def test_get_status_miss(cache, mock_redis):
    mock_redis.get.return_value = None

    assert await cache.get_status("job-1") is None


@pytest.mark.asyncio
async def test_get_status_unexpected_value_is_a_miss(cache, mock_redis):
    mock_redis.get.return_value = "garbage"

    assert await cache.get_status("job-1") is None


@pytest.mark.asyncio
async def test_get_status_propagates_errors(cache, mock_redis):
    mock_redis.get.side_effect = ConnectionError("redis down")

    with pytest.raises(ConnectionError):
        await cache.get_status("job-1")


def test_create_redis_client_decodes_responses():
    with patch("event_ingestion.cache.redis.Redis.from_url") as mock_from_url:
        create_redis_client("redis://localhost:6379", socket_timeout=2)

    args, kwargs = mock_from_url.call_args
    assert args == ("redis://localhost:6379",)
    assert kwargs["decode_responses"] is True
    assert kwargs["socket_timeout"] == 2
