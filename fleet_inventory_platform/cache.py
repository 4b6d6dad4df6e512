"""
Redis connection handling and advisory locks for layout edits.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from datetime import datetime, timedelta, timezone
from uuid import uuid4
import asyncio

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError
from redis.exceptions import ConnectionError as RedisConnectionError

from .config import get_settings
from .utils.exceptions import CacheServiceError, LayoutLockError

logger = logging.getLogger(__name__)


class CacheKeyBuilder:
    """Helper class for building consistent cache keys."""

    @staticmethod
    def layout_lock(layout_kind: str, layout_id: str) -> str:
        """Build cache key for a layout edit lock."""
        return f"lock:layout:{layout_kind}:{layout_id}"


class RedisCache:
    """Redis connection manager."""

    def __init__(self):
        self.client: Optional[Redis] = None
        self.pool: Optional[redis.ConnectionPool] = None

    async def initialize(self) -> None:
        """Initialize Redis connection pool and client."""
        settings = get_settings()

        try:
            self.pool = redis.ConnectionPool.from_url(
                settings.redis_url,
                max_connections=settings.redis_max_connections,
                retry_on_timeout=True,
                socket_keepalive=True,
                health_check_interval=30
            )
            self.client = Redis(connection_pool=self.pool)

            await self.client.ping()
            logger.info("Redis cache initialized successfully")

        except RedisConnectionError as e:
            logger.error("Failed to connect to Redis: %s", e)
            raise

    async def close(self) -> None:
        """Close Redis connections."""
        if self.client:
            await self.client.close()
        if self.pool:
            await self.pool.disconnect()
        self.client = None
        self.pool = None
        logger.info("Redis cache connections closed")

    async def ping(self) -> bool:
        """Check whether Redis answers."""
        if not self.client:
            return False

        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.warning("Redis ping failed: %s", e)
            return False


class DistributedLock:
    """Distributed lock implementation using Redis."""

    def __init__(self, cache: RedisCache, key: str, timeout: int = 30):
        """
        Initialize distributed lock.

        Args:
            cache: Redis cache instance
            key: Lock key
            timeout: Lock timeout in seconds
        """
        self.cache = cache
        self.key = key
        self.timeout = timeout
        self.identifier = str(uuid4())

    async def acquire(self, blocking: bool = True, timeout: Optional[int] = None) -> bool:
        """
        Acquire the distributed lock.

        Args:
            blocking: Whether to block until lock is acquired
            timeout: Maximum time to wait for lock (seconds)

        Returns:
            True if lock acquired, False otherwise
        """
        if not self.cache.client:
            return False

        end_time = None
        if timeout:
            end_time = datetime.now(timezone.utc) + timedelta(seconds=timeout)

        while True:
            try:
                acquired = await self.cache.client.set(
                    self.key,
                    self.identifier,
                    nx=True,
                    ex=self.timeout
                )
            except RedisError as e:
                logger.warning("Failed to acquire lock %s: %s", self.key, e)
                return False

            if acquired:
                return True

            if not blocking:
                return False

            if end_time and datetime.now(timezone.utc) >= end_time:
                return False

            await asyncio.sleep(0.1)

    async def release(self) -> bool:
        """
        Release the distributed lock.

        Returns:
            True if lock released, False otherwise
        """
        if not self.cache.client:
            return False

        try:
            # Only delete the lock if we still own it
            lua_script = """
            if redis.call("GET", KEYS[1]) == ARGV[1] then
                return redis.call("DEL", KEYS[1])
            else
                return 0
            end
            """

            result = await self.cache.client.eval(
                lua_script, 1, self.key, self.identifier
            )
            return bool(result)

        except RedisError as e:
            logger.warning("Failed to release lock %s: %s", self.key, e)
            return False


# Global cache instance
cache = RedisCache()


async def init_cache() -> None:
    """Initialize the global cache instance."""
    await cache.initialize()


async def close_cache() -> None:
    """Close the global cache instance."""
    await cache.close()


def get_cache() -> RedisCache:
    """Get the global cache instance."""
    return cache


@asynccontextmanager
async def layout_lock(layout_kind: str, layout_id):
    """
    Serialize edits of a single layout across processes.

    A no-op unless ``enable_layout_locks`` is set.

    Args:
        layout_kind: "template" or "seat_diagram"
        layout_id: Layout identifier

    Raises:
        LayoutLockError: If the lock is not obtained within the configured timeout
        CacheServiceError: If locking is enabled but Redis is not connected
    """
    settings = get_settings()
    if not settings.enable_layout_locks:
        yield None
        return

    if not cache.client:
        raise CacheServiceError("Redis client not initialized")

    lock = DistributedLock(
        cache,
        CacheKeyBuilder.layout_lock(layout_kind, str(layout_id)),
        timeout=settings.layout_lock_timeout_seconds
    )
    if not await lock.acquire(blocking=True, timeout=settings.layout_lock_timeout_seconds):
        raise LayoutLockError(layout_kind, str(layout_id))

    try:
        yield lock
    finally:
        await lock.release()
