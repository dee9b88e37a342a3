"""Global test configuration and fixtures."""
import logging
import pytest
from unittest.mock import AsyncMock, MagicMock
from sfrest.api.connection import Connection

@pytest.fixture(autouse=True)
def reset_sfrest_logger():
    """Drop handlers attached to the sfrest logger during a test"""
    yield
    sfrest_logger = logging.getLogger("sfrest")
    for handler in sfrest_logger.handlers[:]:
        sfrest_logger.removeHandler(handler)
        handler.close()
    sfrest_logger.setLevel(logging.NOTSET)

@pytest.fixture
def connection():
    """Connection against a stubbed API host"""
    return Connection("https://www.example.com", "apiuser", "secret")

@pytest.fixture
def make_response():
    """Build an async context manager standing in for an aiohttp response"""
    def _make(body, status=200, headers=None, charset=None):
        if isinstance(body, str):
            body = body.encode("utf-8")
        mock_response = MagicMock()
        mock_response.status = status
        mock_response.read = AsyncMock(return_value=body)
        mock_response.charset = charset
        mock_response.headers = headers or {"Content-Type": "application/json"}

        mock_cm = AsyncMock()
        mock_cm.__aenter__.return_value = mock_response
        mock_cm.__aexit__.return_value = None
        return mock_cm
    return _make
