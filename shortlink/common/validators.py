"""Validation utilities for custom slugs."""

import re
from typing import Callable, Optional, Sequence

from ..errors import InvalidSlugFormatError, ReservedSlugError


MAX_SLUG_LENGTH = 50

SLUG_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

# Slugs that would shadow the application's own routes
RESERVED_SLUGS = frozenset({
    "api", "admin", "up", "health", "static", "assets",
    "favicon", "robots", "sitemap",
})


def is_reserved_slug(slug: str) -> bool:
    """Check if a slug collides with a reserved word (case-insensitive)."""
    return slug.lower() in RESERVED_SLUGS


def check_slug_present(slug: Optional[str]) -> None:
    if not slug or not isinstance(slug, str):
        raise InvalidSlugFormatError("Slug can't be blank")


def check_slug_length(slug: str) -> None:
    if len(slug) > MAX_SLUG_LENGTH:
        raise InvalidSlugFormatError(f"Slug is too long (maximum is {MAX_SLUG_LENGTH} characters)")


def check_slug_charset(slug: str) -> None:
    if not SLUG_PATTERN.fullmatch(slug):
        raise InvalidSlugFormatError("Slug can only contain letters, numbers, hyphens, and underscores")


def check_slug_not_reserved(slug: str) -> None:
    if is_reserved_slug(slug):
        raise ReservedSlugError("Slug is reserved and cannot be used")


CUSTOM_SLUG_CHECKS: Sequence[Callable[[str], None]] = (
    check_slug_present,
    check_slug_length,
    check_slug_charset,
    check_slug_not_reserved,
)


def validate_custom_slug(slug: str) -> str:
    """Validate a caller-supplied slug.

    Checks run in order and the first failure is raised.

    Args:
        slug: The slug to validate

    Returns:
        The slug, unchanged

    Raises:
        InvalidSlugFormatError: If the slug is blank, too long or has invalid characters
        ReservedSlugError: If the slug is a reserved word
    """
    for check in CUSTOM_SLUG_CHECKS:
        check(slug)
    return slug
