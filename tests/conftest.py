"""Shared pytest fixtures for the chat assistant test suite.

Provides reusable fixtures for:
- Flask test client for the completion service
- Session store and a controller wired to a mocked completion client
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from chat_assistant import create_app
from chat_assistant.api_clients.completion_client import CompletionClient
from chat_assistant.config import Settings
from chat_assistant.services.chat_controller import ChatController
from chat_assistant.services.session_store import SessionStore


@pytest.fixture
def settings():
    """Create test settings."""
    return Settings(LOG_LEVEL="WARNING", LOG_FORMAT="console")


@pytest.fixture
def app(settings):
    """Create a Flask application instance for testing."""
    app = create_app(settings)
    app.config["TESTING"] = True
    yield app


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def mock_client():
    """A CompletionClient whose send() is an AsyncMock."""
    completion_client = MagicMock(spec=CompletionClient)
    completion_client.send = AsyncMock(return_value="hi there")
    return completion_client


@pytest.fixture
def notices():
    """Collects out-of-band validation notices."""
    return []


@pytest.fixture
def controller(store, mock_client, notices):
    return ChatController(store, mock_client, notify=notices.append)
