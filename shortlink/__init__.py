"""Core business logic for the shortlink service."""

from .base62 import Base62Codec
from .slug import SlugGenerator
from .allocator import SlugAllocator, SlugStrategy
from .classifier import AddressClassifier
from .normalizer import UrlNormalizer
from .resolver import HostResolver, SystemResolver, ResolutionError
from .service import ShortlinkService

__all__ = [
    "Base62Codec",
    "SlugGenerator",
    "SlugAllocator",
    "SlugStrategy",
    "AddressClassifier",
    "UrlNormalizer",
    "HostResolver",
    "SystemResolver",
    "ResolutionError",
    "ShortlinkService",
]
