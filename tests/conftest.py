"""Pytest configuration and fixtures."""

import pytest

from config import Config
from shortener.addresser import ContentAddresser
from shortener.service import ShortenService
from shortener.store.memory import MemoryKeyValueStore
from shortener.common.logging_config import setup_logging


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def memory_store():
    """Create an empty in-memory backing store."""
    return MemoryKeyValueStore()


@pytest.fixture
def addresser():
    """Create content addresser with the default identifier length."""
    return ContentAddresser()


@pytest.fixture
def service(memory_store, addresser, logger) -> ShortenService:
    """Create service instance over the in-memory store."""
    return ShortenService(
        store=memory_store,
        addresser=addresser,
        logger=logger,
    )


@pytest.fixture
def config():
    """Create test configuration."""
    return Config(
        store_backend="memory",
        base_url="http://testserver",
        path_prefix="/s",
    )


@pytest.fixture
def sample_payloads():
    """Sample payloads for testing."""
    return [
        "import { Effect } from \"effect\"\n\nEffect.runSync(Effect.succeed(1))",
        "hello world",
        "unicode: éèê ☃ \U0001f600",
    ]
