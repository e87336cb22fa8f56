"""Destination URL normalization and validation."""

import logging
import re
from typing import Optional
from urllib.parse import urlsplit

from .classifier import AddressClassifier
from .errors import MalformedUrlError, UnsafeSchemeError, UrlTooLongError


MAX_DESTINATION_LENGTH = 2048

ALLOWED_SCHEMES = ("http", "https")

_HTTP_PREFIX = re.compile(r'^https?://', re.IGNORECASE)
_EXPLICIT_SCHEME = re.compile(r'^([A-Za-z][A-Za-z0-9+.-]*):(.*)$', re.DOTALL)
# "example.com:8080/path" has no scheme, just a host and port
_PORT_SUFFIX = re.compile(r'^\d+(?:[/?#]|$)')


class UrlNormalizer:
    """Turn raw user input into a safe, absolute http(s) destination."""

    def __init__(
        self,
        classifier: AddressClassifier,
        max_length: int = MAX_DESTINATION_LENGTH,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize URL normalizer.

        Args:
            classifier: Classifier used to reject local and private hosts
            max_length: Maximum length of the normalized URL
            logger: Optional logger
        """
        self.classifier = classifier
        self.max_length = max_length
        self.logger = logger or logging.getLogger(__name__)

    async def normalize(self, raw_url: Optional[str]) -> str:
        """Normalize and validate a destination.

        Input without a scheme gets ``https://`` prepended. Input that already
        starts with ``http://`` or ``https://`` keeps its scheme.

        Args:
            raw_url: User supplied destination

        Returns:
            The normalized URL

        Raises:
            MalformedUrlError: If the input is blank or cannot be parsed
            UnsafeSchemeError: If the scheme is not http or https
            UrlTooLongError: If the normalized URL exceeds the maximum length
            UnsafeDestinationError: If the host is local, private or unresolvable
        """
        url = self.apply_default_scheme(raw_url)

        if len(url) > self.max_length:
            raise UrlTooLongError(f"Destination is too long (maximum is {self.max_length} characters)")

        try:
            parts = urlsplit(url)
            host = parts.hostname
            port = parts.port
        except ValueError as e:
            raise MalformedUrlError("Destination is not a valid URL") from e

        if parts.scheme not in ALLOWED_SCHEMES:
            raise UnsafeSchemeError("Destination must be a valid HTTP or HTTPS URL")

        if not host:
            raise MalformedUrlError("Destination is not a valid URL")

        await self.classifier.ensure_safe(host)

        self.logger.debug(f"Normalized destination {raw_url!r} -> {url} (host={host}, port={port})")
        return url

    @staticmethod
    def apply_default_scheme(raw_url: Optional[str]) -> str:
        """Prepend ``https://`` to schemeless input without any network checks.

        Raises:
            MalformedUrlError: If the input is blank or contains whitespace
            UnsafeSchemeError: If the input carries a scheme other than http(s)
        """
        if raw_url is None or not isinstance(raw_url, str) or not raw_url.strip():
            raise MalformedUrlError("Destination can't be blank")

        url = raw_url.strip()

        if any(c.isspace() or ord(c) < 32 or ord(c) == 127 for c in url):
            raise MalformedUrlError("Destination is not a valid URL")

        if _HTTP_PREFIX.match(url):
            return url

        match = _EXPLICIT_SCHEME.match(url)
        if match and not _PORT_SUFFIX.match(match.group(2)):
            if match.group(1).lower() in ALLOWED_SCHEMES:
                raise MalformedUrlError("Destination is not a valid URL")
            raise UnsafeSchemeError("Destination must be a valid HTTP or HTTPS URL")

        return f"https://{url}"
