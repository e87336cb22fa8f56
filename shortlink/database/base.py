"""Abstract base class for short link storage implementations."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime

from .models import ShortLink


class ShortLinkDBBase(ABC):
    """Abstract base class for short link database operations.

    Implementations must enforce slug uniqueness case-insensitively in the
    storage engine itself; ``insert`` is the arbiter for concurrent writers.
    """

    def __init__(self, db_config: str):
        """Initialize database connection.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def insert(
        self,
        slug: str,
        destination: str,
        custom: bool,
        created_at: Optional[datetime] = None,
    ) -> Optional[ShortLink]:
        """Insert a new short link.

        Args:
            slug: The slug to claim
            destination: The normalized destination URL
            custom: Whether the slug was supplied by the caller
            created_at: Optional creation timestamp (defaults to now)

        Returns:
            The created row, or None if the slug is already taken (any case)
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[ShortLink]:
        """Find a short link by slug, ignoring case.

        Args:
            slug: The slug to lookup

        Returns:
            The short link if found, None otherwise
        """
        pass

    @abstractmethod
    async def max_assigned_id(self) -> int:
        """Get the highest identifier assigned so far.

        Returns:
            Highest row identifier, or 0 if the store is empty
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close database connections."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if database is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass
