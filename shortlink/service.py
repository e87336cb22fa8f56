"""Business logic service for short links."""

import logging
from typing import Optional, Dict

from .allocator import SlugAllocator
from .normalizer import UrlNormalizer
from .database.base import ShortLinkDBBase
from .database.cache import RedisCache
from .database.models import ShortLink
from .common.validators import MAX_SLUG_LENGTH, validate_custom_slug
from .errors import ShortlinkNotFoundError


class ShortlinkService:
    """Service layer for creating and resolving short links."""

    def __init__(
        self,
        db: ShortLinkDBBase,
        normalizer: UrlNormalizer,
        allocator: SlugAllocator,
        cache: Optional[RedisCache] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize shortlink service.

        Args:
            db: Database instance
            normalizer: Destination normalizer
            allocator: Slug allocator writing to the same database
            cache: Optional cache instance
            logger: Optional logger
        """
        self.db = db
        self.normalizer = normalizer
        self.allocator = allocator
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)

    async def create(self, raw_url: Optional[str], slug: Optional[str] = None) -> ShortLink:
        """Create a new short link.

        A custom slug's format is checked first, then the destination is
        normalized and validated, and only then is a slug claimed, so a
        failure leaves nothing behind.

        Args:
            raw_url: Destination as entered by the user
            slug: Optional custom slug (blank means generate one)

        Returns:
            The created short link

        Raises:
            ShortlinkError: The first validation or allocation failure
        """
        custom_slug = slug.strip() if slug and slug.strip() else None
        if custom_slug is not None:
            validate_custom_slug(custom_slug)

        destination = await self.normalizer.normalize(raw_url)

        short_link = await self.allocator.allocate(destination, custom_slug=custom_slug)

        if self.cache:
            await self.cache.set_short_link(short_link)

        self.logger.info(f"Created short link: {short_link.slug} -> {short_link.destination}")
        return short_link

    async def resolve(self, slug: str) -> ShortLink:
        """Look up a short link by slug, ignoring case.

        Args:
            slug: The slug to lookup

        Returns:
            The short link

        Raises:
            ShortlinkNotFoundError: If no short link has this slug
        """
        if not slug or len(slug) > MAX_SLUG_LENGTH:
            raise ShortlinkNotFoundError("Shortlink not found")

        if self.cache:
            cached = await self.cache.get_short_link(slug)
            if cached:
                self.logger.debug(f"Cache hit for {slug}")
                return cached

        short_link = await self.db.find_by_slug(slug)

        if short_link is None:
            self.logger.warning(f"Slug not found: {slug}")
            raise ShortlinkNotFoundError("Shortlink not found")

        if self.cache:
            await self.cache.set_short_link(short_link)

        self.logger.debug(f"Resolved slug: {slug} -> {short_link.destination}")
        return short_link

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.db.health_check()

        cache_healthy = await self.cache.ping() if self.cache else True

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.db.close()
        if self.cache:
            await self.cache.close()
