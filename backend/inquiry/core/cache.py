"""Time-bounded cache for dropdown filter values, with an optional Redis tier."""

from __future__ import annotations

import asyncio
import json
import time
from typing import Any, Callable, Dict, Optional, Tuple

import redis.asyncio as redis
from loguru import logger

from inquiry.core.config import settings


# Global Redis client (initialized on startup)
_redis_client: Optional[redis.Redis] = None
_redis_available: bool = False
_redis_warned: bool = False


async def get_redis_client() -> Optional[redis.Redis]:
    """Get or create the Redis client, or ``None`` when Redis is off or unreachable."""
    global _redis_client, _redis_available, _redis_warned

    if not settings.REDIS_ENABLED:
        return None

    # Only one connection attempt per process; after that we stay in memory
    if _redis_client is None and not _redis_available:
        try:
            _redis_client = redis.Redis(
                host=settings.REDIS_HOST,
                port=settings.REDIS_PORT,
                db=settings.REDIS_DB,
                password=settings.REDIS_PASSWORD,
                decode_responses=True,
                socket_connect_timeout=0.5,
                socket_timeout=0.5,
            )
            await asyncio.wait_for(_redis_client.ping(), timeout=0.5)
            _redis_available = True
            logger.info("redis_connected")
        except (redis.RedisError, OSError, asyncio.TimeoutError) as exc:
            _redis_client = None
            _redis_available = False
            if not _redis_warned:
                logger.bind(error=str(exc)).warning("redis_unavailable_using_memory_cache")
                _redis_warned = True

    return _redis_client if _redis_available else None


async def close_redis_client() -> None:
    """Close Redis client connection."""
    global _redis_client, _redis_available
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None
        _redis_available = False


class FilterValueCache:
    """One entry per filter field id, valid for ``ttl_seconds`` after it was set.

    Entries are never invalidated by writes elsewhere; stale master data can be
    served for up to one TTL. Expired entries are dropped lazily on access.
    """

    def __init__(
        self,
        ttl_seconds: int,
        *,
        namespace: str = "filter-values",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.namespace = namespace
        self._clock = clock
        # Structure: {field_id: (values, expiry_timestamp)}
        self._entries: Dict[str, Tuple[list[dict[str, Any]], float]] = {}

    def key(self, field_id: str) -> str:
        return f"{self.namespace}:{settings.GATEWAY_ENVIRONMENT}:{field_id}"

    def get(self, field_id: str) -> Optional[list[dict[str, Any]]]:
        entry = self._entries.get(field_id)
        if entry is None:
            return None
        values, expiry = entry
        if self._clock() >= expiry:
            del self._entries[field_id]
            return None
        return values

    def set(self, field_id: str, values: list[dict[str, Any]], ttl: int | None = None) -> None:
        ttl = self.ttl_seconds if ttl is None else ttl
        self._entries[field_id] = (list(values), self._clock() + ttl)

    def invalidate(self, field_id: str) -> bool:
        return self._entries.pop(field_id, None) is not None

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    async def aget(self, field_id: str) -> Optional[list[dict[str, Any]]]:
        """Memory first, then the shared Redis tier."""
        values = self.get(field_id)
        if values is not None:
            return values

        client = await get_redis_client()
        if client is None:
            return None
        try:
            key = self.key(field_id)
            raw = await asyncio.wait_for(client.get(key), timeout=0.1)
            if not raw:
                return None
            remaining = await asyncio.wait_for(client.ttl(key), timeout=0.1)
        except (redis.RedisError, asyncio.TimeoutError) as exc:
            logger.bind(field_id=field_id, error=str(exc)).debug("redis_get_failed")
            return None

        try:
            values = json.loads(raw)
        except ValueError as exc:
            logger.bind(field_id=field_id, error=str(exc)).warning("redis_value_corrupt")
            return None
        if not isinstance(values, list):
            logger.bind(field_id=field_id).warning("redis_value_corrupt")
            return None
        if remaining > 0:
            # Keep the memory copy no longer than Redis will
            self.set(field_id, values, ttl=remaining)
        return values

    async def aset(self, field_id: str, values: list[dict[str, Any]]) -> None:
        self.set(field_id, values)
        client = await get_redis_client()
        if client is None:
            return
        try:
            await client.setex(self.key(field_id), self.ttl_seconds, json.dumps(values))
        except (redis.RedisError, asyncio.TimeoutError) as exc:
            logger.bind(field_id=field_id, error=str(exc)).debug("redis_set_failed")

    async def ainvalidate(self, field_id: str | None = None) -> int:
        """Drop one field (or everything) from both tiers; returns memory entries removed."""
        if field_id is None:
            removed = self.clear()
            pattern = f"{self.namespace}:{settings.GATEWAY_ENVIRONMENT}:*"
        else:
            removed = int(self.invalidate(field_id))
            pattern = self.key(field_id)

        client = await get_redis_client()
        if client is not None:
            try:
                keys = [key async for key in client.scan_iter(match=pattern)]
                if keys:
                    await client.delete(*keys)
            except redis.RedisError as exc:
                logger.bind(pattern=pattern, error=str(exc)).debug("redis_delete_failed")
        return removed


filter_value_cache = FilterValueCache(settings.FILTER_CACHE_TTL_SECONDS)
