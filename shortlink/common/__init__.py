"""Common utilities for the shortlink service."""

from .validators import validate_custom_slug, is_reserved_slug, RESERVED_SLUGS, MAX_SLUG_LENGTH
from .public_url import read_forwarded, public_base_url, short_url_for
from .logging_config import setup_logging, get_logger

__all__ = [
    "validate_custom_slug",
    "is_reserved_slug",
    "RESERVED_SLUGS",
    "MAX_SLUG_LENGTH",
    "read_forwarded",
    "public_base_url",
    "short_url_for",
    "setup_logging",
    "get_logger",
]
