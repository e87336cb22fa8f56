"""In-process implementation of short link storage."""

import logging
import threading
from typing import Dict, Optional
from datetime import datetime, timezone

from .base import ShortLinkDBBase
from .models import ShortLink


class ShortLinkMemoryDB(ShortLinkDBBase):
    """Dictionary-backed store keyed by lower-cased slug.

    The check-and-insert runs under a lock, which gives the same
    case-insensitive unique insert semantics as the PostgreSQL index.
    Data lives only as long as the process.
    """

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._rows: Dict[str, ShortLink] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    async def insert(
        self,
        slug: str,
        destination: str,
        custom: bool,
        created_at: Optional[datetime] = None,
    ) -> Optional[ShortLink]:
        if created_at is None:
            created_at = datetime.now(timezone.utc)
        elif created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        key = slug.lower()
        with self._lock:
            if key in self._rows:
                self.logger.debug(f"Unique violation on slug: {slug}")
                return None

            self._last_id += 1
            row = ShortLink(
                id=self._last_id,
                slug=slug,
                destination=destination,
                custom=custom,
                created_at=created_at,
            )
            self._rows[key] = row

        self.logger.debug(f"Inserted short link {row.id}: {slug} -> {destination}")
        return row

    async def find_by_slug(self, slug: str) -> Optional[ShortLink]:
        return self._rows.get(slug.lower())

    async def max_assigned_id(self) -> int:
        return self._last_id

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._rows)
