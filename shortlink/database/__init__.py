"""Database layer for the shortlink service."""

from .base import ShortLinkDBBase
from .memory import ShortLinkMemoryDB
from .postgres import ShortLinkPostgresDB
from .models import ShortLink

__all__ = ["ShortLinkDBBase", "ShortLinkMemoryDB", "ShortLinkPostgresDB", "ShortLink"]
