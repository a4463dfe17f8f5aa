"""Application wiring: connects storage, builds the service and the FastAPI app."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import asyncpg
from fastapi import FastAPI

from event_ingestion.cache import StatusCache, create_redis_client
from event_ingestion.completion import CompletionScheduler
from event_ingestion.config import EventIngestionConfig
from event_ingestion.fastapi_router import create_events_router
from event_ingestion.service import EventIngestionService
from event_ingestion.store import InMemoryJobStore, JobStore, PostgresJobStore
from event_ingestion.tracker import JobStatusTracker


async def create_db_pool(config: EventIngestionConfig) -> asyncpg.Pool:
    """Create database connection pool."""
    return await asyncpg.create_pool(
        config.db_dsn,
        min_size=2,
        max_size=10,
        timeout=config.operation_timeout_seconds,
    )


@asynccontextmanager
async def open_service(
    config: EventIngestionConfig,
    logger: Optional[logging.Logger] = None,
) -> AsyncIterator[EventIngestionService]:
    """
    Connect the configured backends and yield a ready EventIngestionService.

    Connection failures propagate: the service must not start against an
    unreachable store or cache. On exit pending completions are cancelled and
    all connections are closed.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    db_pool = None
    redis_client = None
    try:
        store: JobStore
        if config.uses_durable_store:
            logger.info("Creating database connection pool...")
            db_pool = await create_db_pool(config)
            async with db_pool.acquire() as conn:
                await conn.execute("SELECT 1")
            store = PostgresJobStore(db_pool)
            await store.ensure_schema()
        else:
            logger.info("Using in-memory job store")
            store = InMemoryJobStore()

        cache = None
        if config.cache_enabled:
            logger.info(f"Connecting to Redis at {config.redis_addr}...")
            redis_client = create_redis_client(
                config.redis_url,
                socket_timeout=config.operation_timeout_seconds,
                socket_connect_timeout=config.operation_timeout_seconds,
            )
            cache = StatusCache(redis_client, ttl_seconds=config.cache_ttl_seconds)
            await cache.ping()

        tracker = JobStatusTracker(
            store=store,
            cache=cache,
            operation_timeout=config.operation_timeout_seconds,
        )
        completion_scheduler = CompletionScheduler(
            tracker, delay_seconds=config.completion_delay_seconds
        )
        service = EventIngestionService(tracker, completion_scheduler)

        try:
            yield service
        finally:
            await completion_scheduler.shutdown()
    finally:
        if redis_client is not None:
            logger.info("Closing Redis connection...")
            await redis_client.aclose()
        if db_pool is not None:
            logger.info("Closing database connection pool...")
            await db_pool.close()


def create_app(config: Optional[EventIngestionConfig] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: EventIngestionConfig instance. If None, will load from environment.

    Returns:
        FastAPI instance whose lifespan owns the service and its connections
    """
    if config is None:
        config = EventIngestionConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with open_service(config) as service:
            app.state.service = service
            yield

    app = FastAPI(title="Event Ingestion", lifespan=lifespan)
    app.include_router(create_events_router(lambda: app.state.service))
    return app
