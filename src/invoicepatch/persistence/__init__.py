"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from invoicepatch.core.config import AppSettings
from invoicepatch.core.protocols import IKeyValueStore
from invoicepatch.persistence.memory_backend import MemoryKeyValueStore
from invoicepatch.persistence.redis_backend import RedisKeyValueStore


def create_store(settings: AppSettings | None = None) -> IKeyValueStore:
    """Create the key/value store selected by application settings."""
    if settings is None:
        settings = AppSettings()

    if settings.store_backend == "redis":
        return RedisKeyValueStore(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
            key_prefix=settings.redis.key_prefix,
        )
    return MemoryKeyValueStore()
