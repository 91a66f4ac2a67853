"""Shared fixtures: readable log output and an in-process API client."""

import pytest
import structlog
from httpx import ASGITransport, AsyncClient

from autorecon.logger import configure_logging


@pytest.fixture(autouse=True, scope="session")
def console_logs():
    """Render logs as console lines so pytest shows them next to failures."""
    configure_logging(debug=True)
    # Let structlog.testing.capture_logs see loggers created at import time.
    structlog.configure(cache_logger_on_first_use=False)
    yield
    structlog.reset_defaults()


def _client_for_app(raise_app_exceptions: bool) -> AsyncClient:
    from autorecon.main import app

    transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
async def client():
    async with _client_for_app(raise_app_exceptions=True) as api:
        yield api


@pytest.fixture
async def lenient_client():
    """Client that returns the 500 response instead of re-raising the app error."""
    async with _client_for_app(raise_app_exceptions=False) as api:
        yield api
