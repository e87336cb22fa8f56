"""Tests for slug generation."""

from shortlink.base62 import Base62Codec
from shortlink.slug import SlugGenerator


class TestSlugGenerator:
    """Test slug generation."""
    
    def test_generate_random(self):
        """Test random slug generation."""
        generator = SlugGenerator()
        
        slug = generator.generate_random()
        assert len(slug) == 7
        assert set(slug) <= set(Base62Codec.ALPHABET)
    
    def test_generate_random_custom_length(self):
        """Test random slug with custom length."""
        generator = SlugGenerator(default_length=7)
        
        slug = generator.generate_random(length=10)
        assert len(slug) == 10
        assert set(slug) <= set(Base62Codec.ALPHABET)
    
    def test_generate_random_varies(self):
        """Random slugs are not all the same."""
        generator = SlugGenerator()
        
        slugs = {generator.generate_random() for _ in range(50)}
        assert len(slugs) > 1
    
    def test_generate_random_uses_whole_alphabet(self):
        """Sampling covers lower case, upper case and digits."""
        generator = SlugGenerator()
        
        symbols = set("".join(generator.generate_random(length=50) for _ in range(200)))
        assert symbols == set(Base62Codec.ALPHABET)
    
    def test_generate_sequential(self):
        """Test sequential generation."""
        generator = SlugGenerator()
        
        assert generator.generate_sequential(0) == "a"
        assert generator.generate_sequential(123) == "b9"
        assert Base62Codec.decode(generator.generate_sequential(987654)) == 987654
    
