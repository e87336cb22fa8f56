"""Tests for common utilities."""

import json
import logging

import pytest

from shortlink.common.validators import (
    RESERVED_SLUGS,
    is_reserved_slug,
    validate_custom_slug,
)
from shortlink.common.public_url import ForwardedInfo, read_forwarded, public_base_url, short_url_for
from shortlink.common.logging_config import JsonFormatter, get_logger, setup_logging
from shortlink.errors import ErrorKind, InvalidSlugFormatError, ReservedSlugError


class TestValidators:
    """Test custom slug validation."""
    
    @pytest.mark.parametrize("slug", ["gh", "abc123", "test-code", "test_code", "valid-slug_123", "a", "a" * 50])
    def test_valid_slugs(self, slug):
        """Test valid slug validation."""
        assert validate_custom_slug(slug) == slug
    
    def test_blank_slug(self):
        """Blank slugs are rejected."""
        with pytest.raises(InvalidSlugFormatError, match="blank"):
            validate_custom_slug("")
    
    def test_too_long_slug(self):
        """Slugs longer than 50 characters are rejected."""
        with pytest.raises(InvalidSlugFormatError, match="too long"):
            validate_custom_slug("a" * 51)
    
    @pytest.mark.parametrize("slug", ["invalid slug", "abc@123", "abc#123", "a/b", "a.b", "ünï", "promo\n", "\npromo"])
    def test_invalid_characters(self, slug):
        """Only letters, numbers, hyphens and underscores are allowed."""
        with pytest.raises(InvalidSlugFormatError, match="can only contain") as exc_info:
            validate_custom_slug(slug)
        
        assert exc_info.value.kind == ErrorKind.INVALID_SLUG_FORMAT
    
    @pytest.mark.parametrize("slug", ["api", "API", "Admin", "admin", "up", "health"])
    def test_reserved_slugs(self, slug):
        """Reserved words are rejected regardless of case."""
        with pytest.raises(ReservedSlugError, match="reserved") as exc_info:
            validate_custom_slug(slug)
        
        assert exc_info.value.kind == ErrorKind.RESERVED_SLUG
    
    def test_checks_stop_at_first_failure(self):
        """Length is reported before the character set."""
        with pytest.raises(InvalidSlugFormatError, match="too long"):
            validate_custom_slug("!" * 51)
    
    def test_reserved_list_covers_routes(self):
        """Route segments of the app are reserved."""
        assert {"api", "admin", "up"} <= RESERVED_SLUGS
        assert is_reserved_slug("ApI")
        assert not is_reserved_slug("apis")


class TestPublicUrl:
    """Test public short URL construction."""
    
    def test_read_forwarded(self):
        result = read_forwarded({
            "X-Forwarded-Proto": "https",
            "x-forwarded-host": "sho.rt",
            "X-Forwarded-For": "203.0.113.9, 10.0.0.2",
        })
        
        assert result == ForwardedInfo(proto="https", host="sho.rt", client="203.0.113.9")
    
    def test_forwarded_headers_win(self):
        base_url = public_base_url(
            headers={"X-Forwarded-Proto": "https", "X-Forwarded-Host": "sho.rt"},
            fallback_base_url="http://localhost:9200",
            request_scheme="http",
            request_host="internal:9200",
        )
        
        assert base_url == "https://sho.rt"
    
    def test_chained_proxies_use_first_hop(self):
        base_url = public_base_url(
            headers={"X-Forwarded-Proto": "HTTPS, http", "X-Forwarded-Host": "sho.rt, lb.internal"},
            fallback_base_url="http://localhost:9200",
        )
        
        assert base_url == "https://sho.rt"
    
    def test_unusable_forwarded_proto_ignored(self):
        """Only http and https are trusted from proxy headers."""
        base_url = public_base_url(
            headers={"X-Forwarded-Proto": "javascript", "X-Forwarded-Host": "evil"},
            fallback_base_url="http://localhost:9200",
            request_scheme="http",
            request_host="testserver",
        )
        
        assert base_url == "http://testserver"
    
    def test_fallback(self):
        assert public_base_url(headers={}, fallback_base_url="http://localhost:9200/") == "http://localhost:9200"
    
    @pytest.mark.parametrize("base_url,prefix,expected", [
        ("https://sho.rt", "", "https://sho.rt/abc1234"),
        ("https://sho.rt/", "/s/", "https://sho.rt/s/abc1234"),
        ("https://sho.rt", "go", "https://sho.rt/go/abc1234"),
        ("https://sho.rt", "/", "https://sho.rt/abc1234"),
    ])
    def test_short_url_for(self, base_url, prefix, expected):
        assert short_url_for("abc1234", base_url, prefix) == expected


class TestLogging:
    """Test logging setup."""
    
    def test_get_logger_namespaces(self):
        assert get_logger().name == "shortlink"
        assert get_logger("web").name == "shortlink.web"
        assert get_logger("shortlink.web.api").name == "shortlink.web.api"
    
    def test_setup_replaces_handlers(self, tmp_path):
        log_file = tmp_path / "shortlink.log"
        
        setup_logging(level="INFO")
        logger = setup_logging(level="WARNING", log_file=str(log_file))
        
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 2
    
    def test_json_formatter(self):
        record = logging.LogRecord(
            name="shortlink.web", level=logging.INFO, pathname=__file__, lineno=1,
            msg='GET /"quoted" -> 302', args=(), exc_info=None,
        )
        record.request_id = "abc123"
        
        entry = json.loads(JsonFormatter().format(record))
        
        assert entry["message"] == 'GET /"quoted" -> 302'
        assert entry["level"] == "INFO"
        assert entry["logger"] == "shortlink.web"
        assert entry["request_id"] == "abc123"
