"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator

from httpx import ASGITransport, AsyncClient

from config import Config
from lib.database.json_store import JSONFileStore
from lib.service import URLShortenerService
from lib.shortcode import ShortCodeGenerator
from lib.common.logging_config import setup_logging
from web_app import create_app

TEST_BASE_URL = "http://localhost:3000"


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def data_file(tmp_path):
    """Path of a fresh snapshot file."""
    return tmp_path / "urls.json"


@pytest.fixture
async def store(data_file, logger) -> JSONFileStore:
    """Create an initialized store backed by a temp file."""
    store = JSONFileStore(path=str(data_file), logger=logger)
    await store.initialize()
    return store


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
async def service(store, short_code_generator, logger) -> AsyncGenerator[URLShortenerService, None]:
    """Create service instance."""
    service = URLShortenerService(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )
    yield service
    await service.close()


@pytest.fixture
def app(service, data_file, logger):
    """Create test FastAPI app."""
    config = Config(data_file=str(data_file), base_url=TEST_BASE_URL)
    return create_app(service_instance=service, config=config, logger=logger)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url=TEST_BASE_URL) as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "http://stackoverflow.com/questions/123456",
    ]
