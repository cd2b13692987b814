import pytest

from scrabble.session.manager import SessionManager
from scrabble.session.registry import RoomRegistry


@pytest.fixture
def manager():
    return SessionManager(RoomRegistry(max_rooms=3))
