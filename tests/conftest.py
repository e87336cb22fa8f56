"""Pytest configuration and fixtures."""

import asyncio
import ipaddress
from typing import Dict, Iterable, List, Optional

import httpx
import pytest

from config import Config
from shortlink.allocator import SlugAllocator, SlugStrategy
from shortlink.classifier import AddressClassifier
from shortlink.normalizer import UrlNormalizer
from shortlink.resolver import HostResolver, ResolutionError
from shortlink.service import ShortlinkService
from shortlink.slug import SlugGenerator
from shortlink.database.memory import ShortLinkMemoryDB
from shortlink.common.logging_config import setup_logging
from web_app import create_app


PUBLIC_RECORDS = {
    "example.com": ["93.184.216.34"],
    "example2.com": ["93.184.216.35"],
    "github.com": ["140.82.112.3"],
    "google.com": ["8.8.8.8"],
    "dual.example.org": ["93.184.216.36", "2606:2800:220:1:248:1893:25c8:1946"],
}


class FakeResolver(HostResolver):
    """Resolver answering from a fixed table; unknown names fail to resolve."""

    def __init__(self, records: Optional[Dict[str, Iterable[str]]] = None):
        self.records = {
            name.lower(): {ipaddress.ip_address(a) for a in addresses}
            for name, addresses in (records if records is not None else PUBLIC_RECORDS).items()
        }
        self.calls: List[str] = []

    def add(self, hostname: str, *addresses: str) -> None:
        self.records[hostname.lower()] = {ipaddress.ip_address(a) for a in addresses}

    async def resolve(self, hostname, timeout):
        self.calls.append(hostname)
        addresses = self.records.get(hostname.lower())
        if addresses is None:
            raise ResolutionError(f"NXDOMAIN: {hostname}")
        return set(addresses)


class ScriptedGenerator(SlugGenerator):
    """Slug generator that returns queued random slugs before falling back to real ones."""

    def __init__(self, random_slugs: Iterable[str] = ()):
        super().__init__()
        self.queue = list(random_slugs)

    def generate_random(self, length=None):
        if self.queue:
            return self.queue.pop(0)
        return super().generate_random(length)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def db(logger):
    return ShortLinkMemoryDB(logger=logger)


@pytest.fixture
def classifier(resolver, logger):
    return AddressClassifier(resolver=resolver, timeout_seconds=0.3, logger=logger)


@pytest.fixture
def normalizer(classifier, logger):
    return UrlNormalizer(classifier=classifier, logger=logger)


@pytest.fixture
def allocator(db, logger):
    return SlugAllocator(db=db, strategy=SlugStrategy.RANDOM, logger=logger)


@pytest.fixture
def sequential_allocator(db, logger):
    return SlugAllocator(db=db, strategy=SlugStrategy.SEQUENTIAL, logger=logger)


@pytest.fixture
def service(db, normalizer, allocator, logger) -> ShortlinkService:
    """Create service instance."""
    return ShortlinkService(
        db=db,
        normalizer=normalizer,
        allocator=allocator,
        cache=None,  # No cache for tests
        logger=logger,
    )


@pytest.fixture
def sequential_service(db, normalizer, sequential_allocator, logger) -> ShortlinkService:
    return ShortlinkService(
        db=db,
        normalizer=normalizer,
        allocator=sequential_allocator,
        logger=logger,
    )


@pytest.fixture
def test_config():
    return Config(
        storage_backend="memory",
        base_url="http://testserver",
    )


@pytest.fixture
def app(service, test_config):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=test_config)


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://google.com/search?q=shortlink",
    ]


@pytest.fixture
def scripted_generator():
    """Factory for generators with queued random slugs."""
    return ScriptedGenerator


class YieldingMemoryDB(ShortLinkMemoryDB):
    """Memory store that suspends on every read, like a networked database.

    Concurrent callers interleave between their lookups and their insert,
    so racing inserts of the same slug really happen.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.rejected_inserts = 0

    async def find_by_slug(self, slug):
        await asyncio.sleep(0)
        return await super().find_by_slug(slug)

    async def max_assigned_id(self):
        await asyncio.sleep(0)
        return await super().max_assigned_id()

    async def insert(self, slug, destination, custom, created_at=None):
        short_link = await super().insert(slug, destination, custom, created_at)
        if short_link is None:
            self.rejected_inserts += 1
        return short_link


@pytest.fixture
def yielding_db(logger):
    return YieldingMemoryDB(logger=logger)


@pytest.fixture
def contended_sequential_service(yielding_db, normalizer, logger) -> ShortlinkService:
    """Sequential service over a store where concurrent callers interleave."""
    return ShortlinkService(
        db=yielding_db,
        normalizer=normalizer,
        allocator=SlugAllocator(db=yielding_db, strategy=SlugStrategy.SEQUENTIAL, logger=logger),
        logger=logger,
    )
