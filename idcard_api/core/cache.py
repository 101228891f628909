# idcard_api/core/cache.py
"""Redis caching implementation."""
import json
import logging
from datetime import timedelta
from typing import Any, Optional, Union

import redis.asyncio as redis
from fastapi import Request

logger = logging.getLogger(__name__)


class CacheManager:
    """Thin JSON cache over redis; every call is a no-op when no URL is configured."""

    def __init__(self, redis_url: Optional[str] = None, prefix: str = "idcard"):
        self.redis_url = redis_url
        self.prefix = prefix
        self.redis: Optional[redis.Redis] = None

    @property
    def enabled(self) -> bool:
        return bool(self.redis_url)

    def make_key(self, *parts: Any) -> str:
        return ":".join([self.prefix, *(str(p) for p in parts)])

    async def connect(self):
        """Initialize Redis connection."""
        if self.enabled and not self.redis:
            self.redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )

    async def close(self):
        """Close Redis connection."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache."""
        if not self.enabled:
            return None
        await self.connect()

        try:
            value = await self.redis.get(key)
            if value:
                return json.loads(value)
        except redis.RedisError as e:
            logger.warning(f"Cache get error for {key}: {e}")
        return None

    async def set(self, key: str, value: Any, expire: Optional[Union[int, timedelta]] = None) -> bool:
        """Set value in cache."""
        if not self.enabled:
            return False
        await self.connect()

        try:
            serialized = json.dumps(value, default=str)
            if expire:
                if isinstance(expire, timedelta):
                    expire = int(expire.total_seconds())
                return bool(await self.redis.setex(key, expire, serialized))
            return bool(await self.redis.set(key, serialized))
        except redis.RedisError as e:
            logger.warning(f"Cache set error for {key}: {e}")
            return False

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern."""
        if not self.enabled:
            return 0
        await self.connect()

        deleted = 0
        try:
            async for key in self.redis.scan_iter(match=pattern):
                deleted += await self.redis.delete(key)
        except redis.RedisError as e:
            logger.warning(f"Cache invalidation error for {pattern}: {e}")
        return deleted


async def get_cache(request: Request) -> CacheManager:
    """Dependency to get cache instance."""
    return request.app.state.cache
