"""
Pytest configuration and shared fixtures for synapse-register tests
"""
import pytest
import json
import os
import logging
from unittest.mock import AsyncMock, MagicMock

# Import components to test
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from synapse_register.core.types import RegistrationConfig


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def registration_config():
    """Configuration matching the end-to-end reference scenario"""
    return RegistrationConfig(
        homeserver_url="http://test-synapse:8008",
        shared_secret="k",
        username="bob",
        password="pw",
        display_name="Bob B",
        admin=False,
        timeout=10.0,
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every MATRIX_* registration variable from the environment"""
    for name in [
        "MATRIX_HOMESERVER_URL",
        "MATRIX_REGISTRATION_SHARED_SECRET",
        "MATRIX_USERNAME",
        "MATRIX_PASSWORD",
        "MATRIX_DISPLAY_NAME",
        "MATRIX_ADMIN",
        "MATRIX_REGISTER_TIMEOUT",
        "LOG_LEVEL",
    ]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ============================================================================
# Mock HTTP Session Fixtures
# ============================================================================

def make_mock_response(status: int, body):
    """Build an aiohttp response mock usable as an async context manager"""
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf8")
    response = MagicMock()
    response.status = status
    response.read = AsyncMock(return_value=body)
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


def make_mock_session(get_response=None, post_response=None):
    """Build an aiohttp ClientSession mock with canned GET/POST responses"""
    session = MagicMock()
    session.get = MagicMock(return_value=get_response)
    session.post = MagicMock(return_value=post_response)
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=None)
    return session


@pytest.fixture
def mock_session_factory():
    """Factory fixture: mock_session_factory((200, {...}), (200, {...}))"""
    def _factory(get=None, post=None):
        get_response = make_mock_response(*get) if get is not None else None
        post_response = make_mock_response(*post) if post is not None else None
        return make_mock_session(get_response, post_response)
    return _factory


# ============================================================================
# Matrix API Fixtures
# ============================================================================

@pytest.fixture
def mock_register_response():
    """Successful shared-secret registration body"""
    return {
        "access_token": "t",
        "user_id": "@bob:example.org",
        "home_server": "example.org",
        "device_id": "d1",
    }


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so they don't outlive capsys"""
    yield
    logger = logging.getLogger("synapse_register")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def capture_logs(caplog):
    """Capture synapse_register log output"""
    caplog.set_level(logging.DEBUG, logger="synapse_register")
    return caplog
