"""Base62 conversion between integers and slugs."""

import string

from .errors import InvalidSlugError


class Base62Codec:
    """Bijective mapping between non-negative integers and Base62 strings.

    The alphabet is ordered ``a-z``, ``A-Z``, ``0-9`` so that ``0`` encodes to
    ``"a"``. Encoded values carry no padding: the length grows by one symbol
    at every power of 62.
    """

    ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
    BASE = len(ALPHABET)

    _INDEX = {char: position for position, char in enumerate(ALPHABET)}

    @classmethod
    def encode(cls, num: int) -> str:
        """Convert integer to Base62 string.

        Args:
            num: Non-negative integer to convert

        Returns:
            Base62 string, most significant symbol first

        Raises:
            ValueError: If num is negative
        """
        if num < 0:
            raise ValueError(f"Cannot encode negative number: {num}")

        if num == 0:
            return cls.ALPHABET[0]

        result = []
        while num > 0:
            num, remainder = divmod(num, cls.BASE)
            result.append(cls.ALPHABET[remainder])

        return ''.join(reversed(result))

    @classmethod
    def decode(cls, slug: str) -> int:
        """Convert Base62 string to integer.

        Args:
            slug: Base62 string

        Returns:
            Integer value

        Raises:
            InvalidSlugError: If slug is empty or contains a symbol outside the alphabet
        """
        if not slug:
            raise InvalidSlugError("Slug is empty")

        result = 0
        for char in slug:
            position = cls._INDEX.get(char)
            if position is None:
                raise InvalidSlugError(f"Invalid Base62 character {char!r} in slug {slug!r}")
            result = result * cls.BASE + position

        return result
