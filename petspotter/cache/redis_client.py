"""
Redis client - read-through cache for single pet posts.
Fails gracefully: a Redis outage only costs a store read.
"""

import json
import logging
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

# Async Redis clients per URL (connection pools managed by redis-py)
_clients: dict[str, Redis] = {}


async def get_redis(url: str) -> Redis:
    """Get the Redis connection for `url`, created on first use."""
    client = _clients.get(url)
    if client is None:
        client = Redis.from_url(url, encoding="utf-8", decode_responses=True)
        _clients[url] = client
    return client


async def close_redis() -> None:
    while _clients:
        _, client = _clients.popitem()
        await client.aclose()


async def cache_get(url: str, key: str) -> str | None:
    """Get value from cache. Returns None on miss or error."""
    try:
        client = await get_redis(url)
        return await client.get(key)
    except (RedisError, OSError) as e:
        logger.warning("cache_get failed: key=%s error=%s", key, e)
        return None


async def cache_set(url: str, key: str, value: str | dict[str, Any], ttl_seconds: int = 300) -> bool:
    """Set value in cache with TTL. Dict is JSON-serialized."""
    try:
        client = await get_redis(url)
        if isinstance(value, dict):
            value = json.dumps(value)
        await client.setex(key, ttl_seconds, value)
        return True
    except (RedisError, OSError) as e:
        logger.warning("cache_set failed: key=%s error=%s", key, e)
        return False


async def cache_delete(url: str, key: str) -> bool:
    """Invalidate cache key (after a pet post is deleted)."""
    try:
        client = await get_redis(url)
        await client.delete(key)
        return True
    except (RedisError, OSError) as e:
        logger.warning("cache_delete failed: key=%s error=%s", key, e)
        return False


class PetPostCache:
    """Namespaced view over the cache helpers for pet post documents."""

    prefix = "pet_post:"

    def __init__(self, redis_url: str, ttl_seconds: int = 300):
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds

    async def get(self, post_id: str) -> dict[str, Any] | None:
        cached = await cache_get(self.redis_url, self.prefix + post_id)
        return json.loads(cached) if cached else None

    async def set(self, post_id: str, doc: dict[str, Any]) -> bool:
        return await cache_set(self.redis_url, self.prefix + post_id, doc, self.ttl_seconds)

    async def delete(self, post_id: str) -> bool:
        return await cache_delete(self.redis_url, self.prefix + post_id)
