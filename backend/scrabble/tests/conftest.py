import pytest

from scrabble.messaging.router import MessageRouter
from scrabble.server.app import create_app
from scrabble.server.settings import GameServerSettings
from scrabble.session.manager import SessionManager
from scrabble.session.registry import RoomRegistry
from scrabble.tests.mocks import MockConnection


@pytest.fixture
def settings():
    return GameServerSettings(max_rooms=5, cors_origins=["http://localhost:3000"])


@pytest.fixture
def registry(settings):
    return RoomRegistry(max_rooms=settings.max_rooms)


@pytest.fixture
def session_manager(registry):
    return SessionManager(registry)


@pytest.fixture
def message_router(session_manager):
    return MessageRouter(session_manager)


@pytest.fixture
def mock_connection():
    return MockConnection()


@pytest.fixture
def app(settings, session_manager, message_router):
    return create_app(
        settings=settings,
        session_manager=session_manager,
        message_router=message_router,
    )
