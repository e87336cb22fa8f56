"""Wiring of the shortlink components from configuration."""

import logging
from typing import Optional

from .allocator import SlugAllocator, SlugStrategy
from .classifier import AddressClassifier
from .normalizer import UrlNormalizer
from .resolver import HostResolver
from .service import ShortlinkService
from .slug import SlugGenerator
from .database.base import ShortLinkDBBase
from .database.cache import RedisCache
from .database.memory import ShortLinkMemoryDB
from .database.postgres import ShortLinkPostgresDB


def build_database(config, logger: Optional[logging.Logger] = None) -> ShortLinkDBBase:
    """Create the configured store.

    Args:
        config: Configuration instance
        logger: Optional logger

    Returns:
        Database instance
    """
    logger = logger or logging.getLogger(__name__)

    if config.storage_backend == "memory":
        logger.info("Using in-memory storage (data is lost on restart)")
        return ShortLinkMemoryDB(logger=logger)

    db = ShortLinkPostgresDB(
        db_config=config.database_url,
        create_tables=config.create_tables,
        logger=logger,
    )
    logger.info(f"Using PostgreSQL storage at {db.safe_location}")
    return db


async def build_service(
    config,
    logger: Optional[logging.Logger] = None,
    db: Optional[ShortLinkDBBase] = None,
    resolver: Optional[HostResolver] = None,
) -> ShortlinkService:
    """Create a fully wired service.

    Args:
        config: Configuration instance
        logger: Optional logger
        db: Optional database instance (built from config if not specified)
        resolver: Optional hostname resolver (system resolver if not specified)

    Returns:
        Service instance
    """
    logger = logger or logging.getLogger(__name__)

    if db is None:
        db = build_database(config, logger=logger)

    cache = None
    if config.redis_url:
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    classifier = AddressClassifier(
        resolver=resolver,
        timeout_seconds=config.dns_timeout_seconds,
        logger=logger,
    )
    normalizer = UrlNormalizer(
        classifier=classifier,
        max_length=config.max_destination_length,
        logger=logger,
    )
    allocator = SlugAllocator(
        db=db,
        strategy=SlugStrategy(config.slug_strategy),
        generator=SlugGenerator(default_length=config.random_slug_length),
        random_length=config.random_slug_length,
        max_attempts=config.max_allocation_attempts,
        logger=logger,
    )

    return ShortlinkService(
        db=db,
        normalizer=normalizer,
        allocator=allocator,
        cache=cache,
        logger=logger,
    )
