#!/usr/bin/env python3
"""
Main entry point for the content shortener service.

Concurrency: requests are handled concurrently via async I/O (FastAPI +
redis.asyncio). Set WORKERS > 1 for multi-process scaling; this requires the
redis store backend, since in-memory stores are private to each process.

Usage:
    python app.py

Environment variables:
    STORE_BACKEND - auto, memory or redis
    REDIS_URL - Redis connection URL (optional)
    KEY_PREFIX - Namespace prefix for stored keys
    MAX_PAYLOAD_BYTES - Largest accepted payload
    BASE_URL - Base URL for share links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortener.addresser import ContentAddresser
from shortener.service import ShortenService
from shortener.store import create_store
from shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting content shortener service...")

    store = await create_store(
        backend=config.store_backend,
        redis_url=config.redis_url,
        logger=logger,
    )

    addresser = ContentAddresser(length=config.identifier_length)
    app.state.service = ShortenService(
        store=store,
        addresser=addresser,
        key_prefix=config.key_prefix,
        max_payload_bytes=config.max_payload_bytes,
        logger=logger,
    )

    logger.info(
        f"Service started: prefix={config.key_prefix!r}, "
        f"identifier={config.identifier_length} hex chars, "
        f"max payload={config.max_payload_bytes} bytes"
    )

    yield

    logger.info("Shutting down content shortener service...")
    await app.state.service.close()
    logger.info("Service stopped")


def build_app(config=None, logger=None) -> FastAPI:
    """Create the app with its service wired up at startup."""
    config = config or load_config()
    logger = logger or setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    app = create_app(service_instance=None, config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    return app


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Content Shortener Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'redis_url'})}")

    app = build_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
