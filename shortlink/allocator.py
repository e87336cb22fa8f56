"""Slug allocation with collision handling."""

import logging
from enum import Enum
from typing import Optional

from .slug import SlugGenerator
from .database.base import ShortLinkDBBase
from .database.models import ShortLink
from .common.validators import is_reserved_slug, validate_custom_slug
from .errors import AllocationExhaustedError, SlugTakenError


class SlugStrategy(str, Enum):
    """How automatic slugs are chosen."""

    RANDOM = "random"
    SEQUENTIAL = "sequential"


class SlugAllocator:
    """Claim a unique slug for a new short link.

    Every attempt is an insert into the store; the store's case-insensitive
    unique index decides races. Lookups done here only avoid inserts that
    are known to fail.
    """

    # Hard stop for sequential callers that keep losing to other writers
    MAX_CONTENDED_ROUNDS = 1000

    def __init__(
        self,
        db: ShortLinkDBBase,
        strategy: SlugStrategy = SlugStrategy.RANDOM,
        generator: Optional[SlugGenerator] = None,
        random_length: int = SlugGenerator.DEFAULT_RANDOM_LENGTH,
        max_attempts: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize slug allocator.

        Args:
            db: Store used to claim slugs
            strategy: Strategy for automatic slugs
            generator: Optional slug generator
            random_length: Length of random slugs
            max_attempts: Maximum insert attempts for automatic slugs
            logger: Optional logger
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.db = db
        self.strategy = SlugStrategy(strategy)
        self.generator = generator or SlugGenerator(default_length=random_length)
        self.random_length = random_length
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    async def allocate(self, destination: str, custom_slug: Optional[str] = None) -> ShortLink:
        """Allocate a slug and persist the short link.

        Args:
            destination: Normalized destination URL
            custom_slug: Optional caller-supplied slug

        Returns:
            The persisted short link

        Raises:
            InvalidSlugFormatError: If the custom slug has an invalid format
            ReservedSlugError: If the custom slug is reserved
            SlugTakenError: If the custom slug already exists (any case)
            AllocationExhaustedError: If no automatic slug could be claimed
        """
        if custom_slug is not None:
            return await self._allocate_custom(destination, custom_slug)

        if self.strategy == SlugStrategy.SEQUENTIAL:
            return await self._allocate_sequential(destination)

        return await self._allocate_random(destination)

    async def _allocate_custom(self, destination: str, slug: str) -> ShortLink:
        # A taken custom slug is never retried or replaced
        validate_custom_slug(slug)

        short_link = await self.db.insert(slug, destination, custom=True)
        if short_link is None:
            self.logger.info(f"Custom slug already taken: {slug}")
            raise SlugTakenError("Slug has already been taken")

        return short_link

    async def _allocate_random(self, destination: str) -> ShortLink:
        for attempt in range(1, self.max_attempts + 1):
            slug = self.generator.generate_random(self.random_length)

            if is_reserved_slug(slug):
                self.logger.debug(f"Skipping reserved random slug: {slug}")
                continue

            short_link = await self.db.insert(slug, destination, custom=False)
            if short_link is not None:
                if attempt > 1:
                    self.logger.debug(f"Allocated random slug after {attempt} attempts: {slug}")
                return short_link

            self.logger.warning(f"Random slug collision on attempt {attempt}: {slug}")

        raise self._exhausted()

    async def _allocate_sequential(self, destination: str) -> ShortLink:
        # A failed candidate only counts against max_attempts when no other
        # writer committed in the meantime; losing to a concurrent insert
        # means the store is advancing and the next read jumps past it.
        last_max = await self.db.max_assigned_id()
        candidate = last_max + 1
        attempts = 0
        contended = 0

        while attempts < self.max_attempts and contended < self.MAX_CONTENDED_ROUNDS:
            slug = self.generator.generate_sequential(candidate)

            # Custom slugs may already hold the encoding of a future identifier
            if is_reserved_slug(slug) or await self.db.find_by_slug(slug) is not None:
                self.logger.debug(f"Skipping unavailable sequential slug: {slug}")
            else:
                short_link = await self.db.insert(slug, destination, custom=False)
                if short_link is not None:
                    if attempts or contended:
                        self.logger.debug(
                            f"Allocated sequential slug {slug} after {attempts} failed "
                            f"and {contended} contended attempts"
                        )
                    return short_link

                self.logger.warning(f"Sequential slug lost insert race: {slug}")

            current_max = await self.db.max_assigned_id()
            if current_max > last_max:
                contended += 1
            else:
                attempts += 1
            last_max = current_max
            candidate = max(candidate + 1, current_max + 1)

        raise self._exhausted()

    def _exhausted(self) -> AllocationExhaustedError:
        self.logger.error(
            f"Unable to allocate a {self.strategy.value} slug after {self.max_attempts} attempts"
        )
        return AllocationExhaustedError(
            f"Unable to generate unique slug after {self.max_attempts} attempts"
        )
