#!/usr/bin/env python3
"""
Main entry point for the shortlink service.

Requests are served with async I/O (FastAPI + asyncpg pool + redis.asyncio).
With WORKERS > 1 uvicorn forks that many processes, each building its own
service in its own event loop; slug uniqueness across them is enforced by
the database's unique index on LOWER(slug).

Usage:
    python app.py
    shortlink-server

Environment variables:
    STORAGE_BACKEND - 'postgres' (default) or 'memory'
    DATABASE_URL - PostgreSQL connection URL
    CREATE_TABLES - Set to 'true' to create the table and slug index
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Base URL for short links
    SLUG_STRATEGY - 'random' (default) or 'sequential'
    DNS_TIMEOUT_SECONDS - Destination hostname resolution timeout
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlink.factory import build_service
from shortlink.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the service inside the server's event loop and close it on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info(f"Starting shortlink service (storage={config.storage_backend}, slugs={config.slug_strategy})")
    service = await build_service(config, logger=logger)
    app.state.service = service

    health = await service.health_check()
    if not health["overall"]:
        logger.warning(f"Service started degraded: {health}")

    try:
        yield
    finally:
        logger.info("Shutting down shortlink service")
        await service.close()


def build_server_app(config: Config) -> FastAPI:
    """Create the app for serving; the service is attached by the lifespan."""
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    app = create_app(service_instance=None, config=config, lifespan=lifespan)
    app.state.logger = logger
    return app


def create_server_app() -> FastAPI:
    """Application factory used by uvicorn worker processes."""
    return build_server_app(load_config())


def main():
    """Main entry point."""
    config = load_config()
    logger = setup_logging(level=config.log_level, log_file=config.log_file, json_format=config.log_json)
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    # Worker processes must import the app themselves
    if config.workers > 1:
        target = "app:create_server_app"
        factory = True
    else:
        target = build_server_app(config)
        factory = False

    logger.info(f"Starting server on {config.host}:{config.port} with {config.workers} worker(s)")
    uvicorn.run(
        target,
        factory=factory,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
