"""Tests for Base62 conversion."""

import random

import pytest

from shortlink.base62 import Base62Codec
from shortlink.errors import ErrorKind, InvalidSlugError


class TestBase62Codec:
    """Test Base62 encoding and decoding."""
    
    def test_alphabet_order(self):
        """Alphabet is a-z, A-Z, 0-9."""
        assert len(Base62Codec.ALPHABET) == 62
        assert Base62Codec.ALPHABET[0] == "a"
        assert Base62Codec.ALPHABET[26] == "A"
        assert Base62Codec.ALPHABET[52] == "0"
        assert Base62Codec.ALPHABET[61] == "9"
    
    @pytest.mark.parametrize("number,slug", [
        (0, "a"),
        (1, "b"),
        (61, "9"),
        (62, "ba"),
        (123, "b9"),
        (3843, "99"),
        (238327, "999"),
    ])
    def test_known_values(self, number, slug):
        """Test fixed encodings in both directions."""
        assert Base62Codec.encode(number) == slug
        assert Base62Codec.decode(slug) == number
    
    def test_length_grows_at_powers_of_62(self):
        """Slugs gain one symbol exactly at each power of 62 (no padding)."""
        assert len(Base62Codec.encode(1)) == 1
        assert len(Base62Codec.encode(61)) == 1
        assert len(Base62Codec.encode(62)) == 2
        assert len(Base62Codec.encode(3843)) == 2
        assert len(Base62Codec.encode(3844)) == 3
        
        for exponent in range(1, 8):
            power = 62 ** exponent
            assert len(Base62Codec.encode(power - 1)) == exponent
            assert len(Base62Codec.encode(power)) == exponent + 1
    
    def test_round_trip_low_range(self):
        """Every identifier in a contiguous low range decodes back to itself."""
        for number in range(200_000):
            assert Base62Codec.decode(Base62Codec.encode(number)) == number
    
    def test_round_trip_up_to_ten_million(self):
        """Identifiers spread across 0..10^7 decode back to themselves."""
        rng = random.Random(62)
        numbers = list(range(0, 10 ** 7 + 1, 9973))
        numbers += [rng.randint(0, 10 ** 7) for _ in range(5000)]
        numbers.append(10 ** 7)
        
        for number in numbers:
            assert Base62Codec.decode(Base62Codec.encode(number)) == number
    
    def test_encodings_are_distinct(self):
        """Different identifiers never share an encoding."""
        encoded = {Base62Codec.encode(n) for n in range(10_000)}
        assert len(encoded) == 10_000
    
    def test_large_number(self):
        """Numbers beyond 64 bits still round-trip."""
        number = 2 ** 128 + 12345
        assert Base62Codec.decode(Base62Codec.encode(number)) == number
    
    def test_encode_negative(self):
        """Negative numbers are rejected."""
        with pytest.raises(ValueError):
            Base62Codec.encode(-1)
    
    @pytest.mark.parametrize("slug", ["", "abc-def", "abc_def", "a b", "é", "ab!"])
    def test_decode_invalid(self, slug):
        """Symbols outside the alphabet are rejected."""
        with pytest.raises(InvalidSlugError) as exc_info:
            Base62Codec.decode(slug)
        
        assert exc_info.value.kind == ErrorKind.INVALID_SLUG
    
    def test_decode_is_case_sensitive(self):
        """Upper and lower case symbols are different digits."""
        assert Base62Codec.decode("b") == 1
        assert Base62Codec.decode("B") == 27
