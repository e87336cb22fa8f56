"""Slug generation utilities."""

import random
from typing import Optional

from .base62 import Base62Codec


class SlugGenerator:
    """Generate automatic slugs for short links."""

    DEFAULT_RANDOM_LENGTH = 7

    def __init__(self, default_length: int = DEFAULT_RANDOM_LENGTH):
        """Initialize slug generator.

        Args:
            default_length: Default length for random slugs
        """
        self.default_length = default_length

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random slug.

        Symbols are drawn uniformly, with replacement, from the Base62 alphabet.

        Args:
            length: Length of the slug (uses default if not specified)

        Returns:
            Random slug
        """
        length = length or self.default_length
        return ''.join(random.choices(Base62Codec.ALPHABET, k=length))

    def generate_sequential(self, identifier: int) -> str:
        """Generate slug from a sequential identifier.

        Args:
            identifier: Non-negative row identifier

        Returns:
            Base62 encoding of the identifier, without padding
        """
        return Base62Codec.encode(identifier)
