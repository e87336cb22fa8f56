"""Error types raised by the shortlink core.

Every error derives from ``ShortlinkError`` (itself a ``ValueError``) and
carries an ``ErrorKind`` so callers can map failures to responses without
matching on message text.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Categories of shortlink failures."""

    MALFORMED_URL = "malformed_url"
    UNSAFE_SCHEME = "unsafe_scheme"
    UNSAFE_DESTINATION = "unsafe_destination"
    TOO_LONG = "too_long"
    INVALID_SLUG_FORMAT = "invalid_slug_format"
    RESERVED_SLUG = "reserved_slug"
    SLUG_TAKEN = "slug_taken"
    ALLOCATION_EXHAUSTED = "allocation_exhausted"
    NOT_FOUND = "not_found"
    INVALID_SLUG = "invalid_slug"


class ShortlinkError(ValueError):
    """Base class for all shortlink validation, allocation and lookup errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedUrlError(ShortlinkError):
    kind = ErrorKind.MALFORMED_URL


class UnsafeSchemeError(ShortlinkError):
    kind = ErrorKind.UNSAFE_SCHEME


class UnsafeDestinationError(ShortlinkError):
    kind = ErrorKind.UNSAFE_DESTINATION


class UrlTooLongError(ShortlinkError):
    kind = ErrorKind.TOO_LONG


class InvalidSlugFormatError(ShortlinkError):
    kind = ErrorKind.INVALID_SLUG_FORMAT


class ReservedSlugError(ShortlinkError):
    kind = ErrorKind.RESERVED_SLUG


class SlugTakenError(ShortlinkError):
    kind = ErrorKind.SLUG_TAKEN


class AllocationExhaustedError(ShortlinkError):
    kind = ErrorKind.ALLOCATION_EXHAUSTED


class ShortlinkNotFoundError(ShortlinkError):
    kind = ErrorKind.NOT_FOUND


class InvalidSlugError(ShortlinkError):
    """Raised when a slug cannot be decoded as a Base62 numeral."""

    kind = ErrorKind.INVALID_SLUG
