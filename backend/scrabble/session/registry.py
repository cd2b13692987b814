"""Room registry: the table of live sessions and their per-room locks."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from scrabble.logic.enums import GameErrorCode
from scrabble.logic.exceptions import CapacityError
from scrabble.logic.game import ScrabbleGame

if TYPE_CHECKING:
    from scrabble.logic.settings import GameSettings

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROOMS = 100


class RoomRegistry:
    """Own every live ScrabbleGame keyed by room id.

    Each room gets its own asyncio.Lock so operations on one room never
    wait on another. A room is dropped, together with its lock, the
    moment its roster becomes empty.
    """

    def __init__(self, max_rooms: int = DEFAULT_MAX_ROOMS, game_settings: GameSettings | None = None) -> None:
        self._max_rooms = max_rooms
        self._game_settings = game_settings
        self._rooms: dict[str, ScrabbleGame] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    @property
    def max_rooms(self) -> int:
        return self._max_rooms

    @property
    def room_count(self) -> int:
        return len(self._rooms)

    @property
    def room_ids(self) -> list[str]:
        return list(self._rooms)

    @property
    def player_count(self) -> int:
        return sum(game.player_count for game in self._rooms.values())

    def get(self, room_id: str) -> ScrabbleGame | None:
        return self._rooms.get(room_id)

    def lock_for(self, room_id: str) -> asyncio.Lock | None:
        return self._locks.get(room_id)

    def create_or_get(self, room_id: str) -> tuple[ScrabbleGame, bool]:
        """Return the room's session, creating it if absent.

        The boolean is True when a new session was created. Raises
        CapacityError when a new room would exceed max_rooms.
        """
        game = self._rooms.get(room_id)
        if game is not None:
            return game, False
        if len(self._rooms) >= self._max_rooms:
            raise CapacityError("Server is at room capacity", GameErrorCode.SERVER_FULL)
        game = ScrabbleGame(room_id, settings=self._game_settings)
        self._rooms[room_id] = game
        self._locks[room_id] = asyncio.Lock()
        logger.info("room created, rooms=%d", len(self._rooms))
        return game, True

    def remove(self, room_id: str) -> ScrabbleGame | None:
        self._locks.pop(room_id, None)
        game = self._rooms.pop(room_id, None)
        if game is not None:
            logger.info("room removed, rooms=%d", len(self._rooms))
        return game

    def discard_if_empty(self, room_id: str) -> bool:
        """Remove the room if nobody is left in it. Returns True if removed."""
        game = self._rooms.get(room_id)
        if game is None or not game.is_empty:
            return False
        self.remove(room_id)
        return True

    def rooms_with_player(self, player_id: str) -> list[str]:
        return [room_id for room_id, game in self._rooms.items() if game.has_player(player_id)]
