"""Store Manager — process-wide InstanceStore selected from settings.

Invariants:
    - Exactly one store per process, created in the FastAPI lifespan
    - get_store() raises if the lifespan has not initialized the store
    - close_store() is idempotent

Design Decisions:
    - Singleton initialized on startup: no import-time connections
    - Backend chosen by STORE_BACKEND ("redis" | "memory") instead of auto-detection,
      so a misconfigured deployment fails loudly rather than silently going in-memory
"""

import logging

from instance_api.core.store_protocols import InstanceStore
from instance_api.infrastructure.memory_store import InMemoryInstanceStore
from instance_api.infrastructure.redis_store import RedisInstanceStore

logger = logging.getLogger(__name__)


def create_store(
    backend: str, redis_url: str = "", timeout_seconds: float = 5.0,
) -> InstanceStore:
    """Build the configured InstanceStore implementation."""
    if backend == "memory":
        logger.info("Instance store: InMemoryInstanceStore")
        return InMemoryInstanceStore()
    if backend == "redis":
        logger.info("Instance store: RedisInstanceStore")
        return RedisInstanceStore.from_url(redis_url, timeout_seconds)
    raise ValueError(f"unknown store backend: {backend!r}")


# Singleton (initialized on startup)
store: InstanceStore | None = None


def init_store(backend: str, **kwargs) -> InstanceStore:
    global store
    store = create_store(backend, **kwargs)
    return store


async def close_store() -> None:
    global store
    if store is not None:
        await store.close()
        store = None


def get_store() -> InstanceStore:
    """FastAPI dependency for the instance store."""
    if store is None:
        raise RuntimeError("Instance store not initialized")
    return store
