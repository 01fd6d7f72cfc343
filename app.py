#!/usr/bin/env python3
"""
Main entry point for the tinylinks URL shortener.

All short URLs live in one JSON snapshot file. The server runs as a single
process; within it, store access is serialized by an asyncio lock.

Usage:
    python app.py

Environment variables:
    PORT - Port to listen on (default 3000)
    HOST - Host to bind to
    BASE_URL - Base URL for short links when the request has no Host header
    DATA_FILE - Path of the JSON snapshot (default urls.json)
    STORAGE_STRICT - Set to 0 to treat a corrupt snapshot as empty
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from lib.database.json_store import JSONFileStore
from lib.service import URLShortenerService
from lib.shortcode import ShortCodeGenerator
from lib.common.logging_config import setup_logging
from web_app import create_app


def build_service(config: Config, logger) -> URLShortenerService:
    """Wire the store, code generator and service from configuration."""
    store = JSONFileStore(
        path=config.data_file,
        strict=config.storage_strict,
        logger=logger.getChild("store"),
    )
    generator = ShortCodeGenerator(default_length=config.short_code_length)
    return URLShortenerService(
        store=store,
        short_code_generator=generator,
        logger=logger,
        max_collision_retries=config.max_collision_retries,
        fallback_code_length=config.fallback_code_length,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting tinylinks...")

    # Initialize store
    service = build_service(config, logger)
    # Raises StoreCorruptedError (aborting startup) on a corrupt snapshot in strict mode
    await service.store.initialize()
    app.state.service = service

    logger.info(f"Service started, store at {service.store.path}")

    yield

    # Cleanup
    logger.info("Shutting down tinylinks...")
    await service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    # Load configuration
    config = load_config()

    # Setup logging
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("tinylinks URL shortener")
    logger.info(f"Configuration: {config.model_dump()}")

    # Create FastAPI app; the service is built in the lifespan
    app = create_app(service_instance=None, config=config, logger=logger)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    # Configure uvicorn
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
        lifespan="on",
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    # Run server
    try:
        logger.info(f"Server running on http://localhost:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)

    # uvicorn returns normally when lifespan startup fails
    if not server.started:
        logger.error("Server failed to start")
        sys.exit(1)


if __name__ == "__main__":
    main()
