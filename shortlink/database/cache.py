"""Redis read-through cache for slug lookups."""

import json
import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from .models import ShortLink


# Connection problems surface as RedisError or as plain socket errors
CACHE_ERRORS = (RedisError, OSError)


class RedisCache:
    """Cache of short links keyed by lower-cased slug.

    Rows never change after creation, so there is no invalidation; entries
    just expire. Any Redis failure is logged and treated as a miss, the
    store stays the source of truth.
    """

    KEY_PREFIX = "shortlink:slug:"

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = 3600,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0); None disables caching
            ttl_seconds: Expiry of cached entries
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.enabled = redis_url is not None
        self.client: Optional[redis.Redis] = None

    @property
    def active(self) -> bool:
        return self.enabled and self.client is not None

    async def connect(self) -> None:
        """Open the client and verify it with a ping; disables the cache on failure."""
        if not self.enabled:
            return

        self.client = redis.from_url(self.redis_url, encoding="utf-8", decode_responses=True)
        try:
            await self.client.ping()
        except CACHE_ERRORS as e:
            self.logger.error(f"Redis unavailable, caching disabled: {e}")
            await self.client.aclose()
            self.client = None
            self.enabled = False
            return

        self.logger.info(f"Redis cache connected (ttl={self.ttl_seconds}s)")

    def key_for(self, slug: str) -> str:
        return f"{self.KEY_PREFIX}{slug.lower()}"

    async def get_short_link(self, slug: str) -> Optional[ShortLink]:
        """Return the cached short link for a slug in any case, or None."""
        if not self.active:
            return None

        try:
            raw = await self.client.get(self.key_for(slug))
        except CACHE_ERRORS as e:
            self.logger.error(f"Cache read failed for {slug}: {e}")
            return None

        if not raw:
            return None

        try:
            return ShortLink.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            self.logger.warning(f"Discarding unreadable cache entry for {slug}: {e}")
            return None

    async def set_short_link(self, short_link: ShortLink) -> bool:
        """Store a short link; returns False if the cache is off or the write failed."""
        if not self.active:
            return False

        try:
            await self.client.setex(
                self.key_for(short_link.slug),
                self.ttl_seconds,
                json.dumps(short_link.to_dict()),
            )
        except CACHE_ERRORS as e:
            self.logger.error(f"Cache write failed for {short_link.slug}: {e}")
            return False

        return True

    async def ping(self) -> bool:
        if not self.active:
            return True

        try:
            await self.client.ping()
        except CACHE_ERRORS as e:
            self.logger.error(f"Cache ping failed: {e}")
            return False
        return True

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
