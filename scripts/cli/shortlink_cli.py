#!/usr/bin/env python3
"""
Command-line interface for the shortlink service.

Usage:
    python shortlink_cli.py shorten <url> [--slug SLUG]
    python shortlink_cli.py resolve <slug>
    python shortlink_cli.py check-url <url>
    python shortlink_cli.py encode-id <number>
    python shortlink_cli.py decode-slug <slug>
    python shortlink_cli.py health
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import load_config
from shortlink.base62 import Base62Codec
from shortlink.errors import ShortlinkError
from shortlink.factory import build_service
from shortlink.common.logging_config import setup_logging


def _print_result(payload: dict, ok: bool = True) -> int:
    print(json.dumps(payload, indent=2), file=sys.stdout if ok else sys.stderr)
    return 0 if ok else 1


class ShortlinkCLI:
    """Command-line interface for the shortlink service."""
    
    def __init__(self, config, verbose: bool = False):
        """Initialize CLI."""
        self.config = config
        self.verbose = verbose
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.service = None
    
    async def initialize(self):
        """Initialize database and service."""
        self.logger.info("Initializing shortlink service...")
        self.service = await build_service(self.config, logger=self.logger)
        self.logger.info("Initialization complete")
    
    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()
    
    async def shorten(self, url: str, slug: Optional[str] = None):
        """Shorten a URL."""
        try:
            short_link = await self.service.create(url, slug)
        except ShortlinkError as e:
            return _print_result({"success": False, "error": e.kind.value, "message": e.message}, ok=False)
        
        return _print_result({
            "success": True,
            "slug": short_link.slug,
            "destination": short_link.destination,
            "custom": short_link.custom,
            "created_at": short_link.created_at.isoformat(),
        })
    
    async def resolve(self, slug: str):
        """Look up the destination of a slug."""
        try:
            short_link = await self.service.resolve(slug)
        except ShortlinkError as e:
            return _print_result({"success": False, "error": e.kind.value, "message": e.message}, ok=False)
        
        return _print_result({"success": True, **short_link.to_dict()})
    
    async def check_url(self, url: str):
        """Normalize and validate a destination without storing it."""
        try:
            destination = await self.service.normalizer.normalize(url)
        except ShortlinkError as e:
            return _print_result({"success": False, "error": e.kind.value, "message": e.message}, ok=False)
        
        return _print_result({"success": True, "destination": destination})
    
    async def health(self):
        """Check service health."""
        health_status = await self.service.health_check()
        return _print_result({"success": health_status["overall"], "health": health_status}, ok=health_status["overall"])


def encode_id(number: int) -> int:
    try:
        slug = Base62Codec.encode(number)
    except ValueError as e:
        return _print_result({"success": False, "error": str(e)}, ok=False)
    return _print_result({"success": True, "id": number, "slug": slug})


def decode_slug(slug: str) -> int:
    try:
        number = Base62Codec.decode(slug)
    except ShortlinkError as e:
        return _print_result({"success": False, "error": e.kind.value, "message": e.message}, ok=False)
    return _print_result({"success": True, "slug": slug, "id": number})


async def main():
    """Main entry point."""
    config = load_config()
    
    parser = argparse.ArgumentParser(
        description="Shortlink CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL (https:// is assumed)
  %(prog)s shorten example.com/long/url
  
  # Shorten with custom slug
  %(prog)s shorten https://example.com/long/url --slug mylink
  
  # Look up a slug (case-insensitive)
  %(prog)s resolve MyLink
  
  # Check whether a destination would be accepted
  %(prog)s check-url http://169.254.169.254/latest/meta-data
  
  # Base62 conversions
  %(prog)s encode-id 123
  %(prog)s decode-slug b9
        """
    )
    
    parser.add_argument(
        "--db-url",
        default=config.database_url,
        help="PostgreSQL connection URL (default: from DATABASE_URL env)"
    )
    
    parser.add_argument(
        "--storage",
        choices=["postgres", "memory"],
        default=config.storage_backend,
        help="Storage backend (default: from STORAGE_BACKEND env)"
    )
    
    parser.add_argument(
        "--redis-url",
        default=config.redis_url,
        help="Redis connection URL (optional, default: from REDIS_URL env)"
    )
    
    parser.add_argument(
        "--strategy",
        choices=["random", "sequential"],
        default=config.slug_strategy,
        help="Automatic slug strategy (default: from SLUG_STRATEGY env)"
    )
    
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )
    
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")
    
    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--slug", help="Custom slug")
    
    resolve_parser = subparsers.add_parser("resolve", help="Look up a slug")
    resolve_parser.add_argument("slug", help="Slug to lookup")
    
    check_parser = subparsers.add_parser("check-url", help="Validate a destination without storing it")
    check_parser.add_argument("url", help="Destination to check")
    
    encode_parser = subparsers.add_parser("encode-id", help="Convert a number to its Base62 slug")
    encode_parser.add_argument("number", type=int, help="Non-negative integer")
    
    decode_parser = subparsers.add_parser("decode-slug", help="Convert a Base62 slug to its number")
    decode_parser.add_argument("slug", help="Base62 slug")
    
    subparsers.add_parser("health", help="Check service health")
    
    args = parser.parse_args()
    
    if not args.command:
        parser.print_help()
        return 1
    
    # Codec commands need no storage
    if args.command == "encode-id":
        return encode_id(args.number)
    if args.command == "decode-slug":
        return decode_slug(args.slug)
    
    config = config.model_copy(update={
        "database_url": args.db_url,
        "storage_backend": args.storage,
        "redis_url": args.redis_url,
        "slug_strategy": args.strategy,
    })
    
    cli = ShortlinkCLI(config=config, verbose=args.verbose)
    
    try:
        await cli.initialize()
        
        if args.command == "shorten":
            return await cli.shorten(args.url, args.slug)
        elif args.command == "resolve":
            return await cli.resolve(args.slug)
        elif args.command == "check-url":
            return await cli.check_url(args.url)
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1
            
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
