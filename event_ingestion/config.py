"""Configuration for the event ingestion service."""

import os
from typing import Optional

STORAGE_BACKENDS = ("postgres", "memory")


def _get_env(key: str, fallback: str) -> str:
    """Return an environment variable, treating empty values as unset."""
    value = os.getenv(key)
    if not value:
        return fallback
    return value


def _get_int_env(key: str, fallback: int) -> int:
    value = _get_env(key, str(fallback))
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Invalid integer in {key}: {value!r}") from e


def _get_bool_env(key: str, fallback: bool) -> bool:
    value = _get_env(key, "true" if fallback else "false")
    return value.strip().lower() in ("1", "true", "yes", "on")


class EventIngestionConfig:
    """Configuration object for the event ingestion service."""

    def __init__(
        self,
        postgres_host: str = "localhost",
        postgres_port: int = 5432,
        postgres_user: str = "postgres",
        postgres_password: str = "postgres",
        postgres_db: str = "event_ingestion",
        redis_addr: Optional[str] = "localhost:6379",
        storage_backend: str = "postgres",
        cache_enabled: bool = True,
        completion_delay_seconds: int = 3,
        cache_ttl_seconds: int = 24 * 60 * 60,
        operation_timeout_seconds: int = 5,
        host: str = "0.0.0.0",
        port: int = 50051,
    ):
        if storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend {storage_backend!r}, "
                f"expected one of {', '.join(STORAGE_BACKENDS)}"
            )

        self.postgres_host = postgres_host
        self.postgres_port = postgres_port
        self.postgres_user = postgres_user
        self.postgres_password = postgres_password
        self.postgres_db = postgres_db
        self.redis_addr = redis_addr
        self.storage_backend = storage_backend
        self.cache_enabled = cache_enabled and bool(redis_addr)
        self.completion_delay_seconds = completion_delay_seconds
        self.cache_ttl_seconds = cache_ttl_seconds
        self.operation_timeout_seconds = operation_timeout_seconds
        self.host = host
        self.port = port

    @classmethod
    def from_env(cls) -> "EventIngestionConfig":
        """Create config from environment variables."""
        return cls(
            postgres_host=_get_env("POSTGRES_HOST", "localhost"),
            postgres_port=_get_int_env("POSTGRES_PORT", 5432),
            postgres_user=_get_env("POSTGRES_USER", "postgres"),
            postgres_password=_get_env("POSTGRES_PASSWORD", "postgres"),
            postgres_db=_get_env("POSTGRES_DB", "event_ingestion"),
            redis_addr=_get_env("REDIS_ADDR", "localhost:6379"),
            storage_backend=_get_env("EVENT_INGESTION_STORAGE", "postgres").lower(),
            cache_enabled=_get_bool_env("EVENT_INGESTION_CACHE_ENABLED", True),
            completion_delay_seconds=_get_int_env(
                "EVENT_INGESTION_COMPLETION_DELAY_SECONDS", 3
            ),
            cache_ttl_seconds=_get_int_env(
                "EVENT_INGESTION_CACHE_TTL_SECONDS", 24 * 60 * 60
            ),
            operation_timeout_seconds=_get_int_env(
                "EVENT_INGESTION_OPERATION_TIMEOUT_SECONDS", 5
            ),
            host=_get_env("EVENT_INGESTION_HOST", "0.0.0.0"),
            port=_get_int_env("EVENT_INGESTION_PORT", 50051),
        )

    @property
    def db_dsn(self) -> str:
        """Postgres DSN assembled from the individual connection settings."""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def redis_url(self) -> Optional[str]:
        if not self.redis_addr:
            return None
        if "://" in self.redis_addr:
            return self.redis_addr
        return f"redis://{self.redis_addr}"

    @property
    def uses_durable_store(self) -> bool:
        return self.storage_backend == "postgres"
