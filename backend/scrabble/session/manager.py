from __future__ import annotations

import contextlib
import time
from typing import TYPE_CHECKING

import structlog

from scrabble.logic.enums import GameAction, GameErrorCode
from scrabble.logic.exceptions import AuthorizationError, GameRuleError, GameStateError, RoomNotFoundError
from scrabble.messaging.types import (
    ErrorMessage,
    MoveCompletedMessage,
    PlayerPassedMessage,
    PongMessage,
    RoomLeftMessage,
    SessionChatMessage,
    SessionErrorCode,
    TilesExchangedMessage,
)
from scrabble.session import sync
from scrabble.session.broadcast import send_quietly
from scrabble.session.registry import RoomRegistry

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence

    from scrabble.logic.action_result import ActionResult
    from scrabble.logic.game import ScrabbleGame
    from scrabble.logic.move import Placement
    from scrabble.messaging.protocol import ConnectionProtocol

logger = structlog.get_logger()


class SessionManager:
    """
    Orchestrate every client operation against the room registry.

    Each operation resolves its room, runs the session mutation and the
    resulting dispatch under that room's lock, and reports a failure to
    the requester alone. A connection's id is its player id in every room.
    """

    def __init__(self, registry: RoomRegistry | None = None) -> None:
        self._registry = registry or RoomRegistry()
        self._connections: dict[str, ConnectionProtocol] = {}

    @property
    def registry(self) -> RoomRegistry:
        return self._registry

    @property
    def room_count(self) -> int:
        return self._registry.room_count

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def get_room(self, room_id: str) -> ScrabbleGame | None:
        return self._registry.get(room_id)

    def register_connection(self, connection: ConnectionProtocol) -> None:
        self._connections[connection.connection_id] = connection

    def unregister_connection(self, connection: ConnectionProtocol) -> None:
        self._connections.pop(connection.connection_id, None)

    async def _send_error(
        self,
        connection: ConnectionProtocol,
        code: SessionErrorCode | GameErrorCode,
        message: str,
    ) -> None:
        logger.warning("session error sent to client", error_code=code.value, error_message=message)
        await send_quietly(connection, ErrorMessage(code=code, message=message).model_dump())

    async def _send_failure(self, connection: ConnectionProtocol, result: ActionResult) -> None:
        await self._send_error(connection, result.code or GameErrorCode.GAME_ERROR, result.reason or "")

    @contextlib.asynccontextmanager
    async def _locked_room(self, room_id: str) -> AsyncIterator[ScrabbleGame | None]:
        """Hold the room's lock for the duration of the block.

        Yields None when the room does not exist, including when it was
        removed while this caller was waiting for the lock.
        """
        game = self._registry.get(room_id)
        lock = self._registry.lock_for(room_id)
        if game is None or lock is None:
            yield None
            return
        async with lock:
            yield game if self._registry.get(room_id) is game else None

    # --- Room membership ---

    async def create_room(self, connection: ConnectionProtocol, room_id: str, player_name: str) -> None:
        """Create the room if absent and add the caller to it."""
        structlog.contextvars.bind_contextvars(room_id=room_id)
        while True:
            try:
                _, created = self._registry.create_or_get(room_id)
            except GameRuleError as e:
                await self._send_error(connection, e.code, e.reason)
                return
            async with self._locked_room(room_id) as game:
                if game is None:
                    # emptied and removed while we waited; start over with a fresh room
                    continue
                if game.started:
                    await self._send_error(
                        connection,
                        GameErrorCode.GAME_ALREADY_STARTED,
                        "Game already started",
                    )
                    return
                await self._add_player(connection, game, player_name, created=created)
                return

    async def join_room(self, connection: ConnectionProtocol, room_id: str, player_name: str) -> None:
        structlog.contextvars.bind_contextvars(room_id=room_id)
        async with self._locked_room(room_id) as game:
            try:
                if game is None:
                    raise RoomNotFoundError("Room not found")
                if game.started:
                    raise GameStateError("Game already started", GameErrorCode.GAME_ALREADY_STARTED)
            except GameRuleError as e:
                await self._send_error(connection, e.code, e.reason)
                return
            await self._add_player(connection, game, player_name, created=False)

    async def _add_player(
        self,
        connection: ConnectionProtocol,
        game: ScrabbleGame,
        player_name: str,
        *,
        created: bool,
    ) -> None:
        """Add the caller to a game. Must be called under the room lock."""
        result = game.add_player(connection.connection_id, player_name)
        if not result.success:
            if created:
                self._registry.discard_if_empty(game.room_id)
            await self._send_failure(connection, result)
            return
        logger.info("player joined room", player_count=game.player_count, created=created)
        await sync.send_room_joined(game, connection)
        await sync.broadcast_game_state(game, self._connections)

    async def leave_room(self, connection: ConnectionProtocol, room_id: str, *, notify_player: bool = True) -> None:
        structlog.contextvars.bind_contextvars(room_id=room_id)
        async with self._locked_room(room_id) as game:
            if game is None or not game.has_player(connection.connection_id):
                if notify_player:
                    await self._send_error(connection, SessionErrorCode.NOT_IN_ROOM, "You are not in this room")
                return
            await self._remove_player(connection, game)
        if notify_player:
            await send_quietly(connection, RoomLeftMessage(room_id=room_id).model_dump())

    async def _remove_player(self, connection: ConnectionProtocol, game: ScrabbleGame) -> None:
        """Remove the caller and tell the rest of the room. Must be called under the room lock."""
        previous_host = game.host_id
        game.remove_player(connection.connection_id)
        logger.info("player left room", player_count=game.player_count)
        if self._registry.discard_if_empty(game.room_id):
            return
        if game.host_id != previous_host:
            logger.info("host promoted", host_id=game.host_id)
        await sync.broadcast_game_state(game, self._connections)

    async def disconnect(self, connection: ConnectionProtocol) -> None:
        """Remove the connection from every room it is in, then forget it."""
        for room_id in self._registry.rooms_with_player(connection.connection_id):
            structlog.contextvars.bind_contextvars(room_id=room_id)
            async with self._locked_room(room_id) as game:
                if game is not None and game.has_player(connection.connection_id):
                    await self._remove_player(connection, game)
        self.unregister_connection(connection)

    # --- Game lifecycle ---

    async def start_game(self, connection: ConnectionProtocol, room_id: str) -> None:
        """Start the room's game on behalf of its host.

        A non-host is told so; an already started room or a room short of
        players is left unchanged without a reply.
        """
        structlog.contextvars.bind_contextvars(room_id=room_id)
        async with self._locked_room(room_id) as game:
            if game is None:
                return
            if game.host_id != connection.connection_id:
                error = AuthorizationError("Only host can start the game", GameErrorCode.NOT_HOST)
                await self._send_error(connection, error.code, error.reason)
                return
            result = game.start_game()
            if not result.success:
                logger.info("start game ignored", reason=result.reason)
                return
            logger.info("game started", player_count=game.player_count)
            await sync.broadcast_game_started(game, self._connections)
            await sync.send_all_player_states(game, self._connections)

    # --- Turn actions ---

    async def play_move(self, connection: ConnectionProtocol, room_id: str, placements: Sequence[Placement]) -> None:
        structlog.contextvars.bind_contextvars(room_id=room_id, action=GameAction.PLAY_MOVE)
        async with self._locked_room(room_id) as game:
            if game is None:
                await self._send_error(connection, GameErrorCode.ROOM_NOT_FOUND, "Room not found")
                return
            result = game.play_move(connection.connection_id, placements)
            if not result.success:
                await self._send_failure(connection, result)
                return
            score = result.score.total if result.score is not None else 0
            logger.info("move played", score=score, tiles=len(placements))
            await sync.broadcast_game_state(game, self._connections)
            await sync.send_player_state(game, connection)
            await sync.broadcast_to_room(
                game,
                self._connections,
                MoveCompletedMessage(room_id=room_id, player_id=connection.connection_id, score=score).model_dump(),
            )

    async def pass_turn(self, connection: ConnectionProtocol, room_id: str) -> None:
        structlog.contextvars.bind_contextvars(room_id=room_id, action=GameAction.PASS_TURN)
        async with self._locked_room(room_id) as game:
            if game is None:
                await self._send_error(connection, GameErrorCode.ROOM_NOT_FOUND, "Room not found")
                return
            result = game.pass_turn(connection.connection_id)
            if not result.success:
                await self._send_failure(connection, result)
                return
            logger.info("turn passed")
            await sync.broadcast_game_state(game, self._connections)
            await sync.broadcast_to_room(
                game,
                self._connections,
                PlayerPassedMessage(room_id=room_id, player_id=connection.connection_id).model_dump(),
            )

    async def exchange_tiles(self, connection: ConnectionProtocol, room_id: str, tile_ids: Sequence[str]) -> None:
        structlog.contextvars.bind_contextvars(room_id=room_id, action=GameAction.EXCHANGE_TILES)
        async with self._locked_room(room_id) as game:
            if game is None:
                await self._send_error(connection, GameErrorCode.ROOM_NOT_FOUND, "Room not found")
                return
            result = game.exchange_tiles(connection.connection_id, tile_ids)
            if not result.success:
                await self._send_failure(connection, result)
                return
            logger.info("tiles exchanged", count=result.exchanged)
            await sync.broadcast_game_state(game, self._connections)
            await sync.send_player_state(game, connection)
            await sync.broadcast_to_room(
                game,
                self._connections,
                TilesExchangedMessage(
                    room_id=room_id,
                    player_id=connection.connection_id,
                    count=result.exchanged,
                ).model_dump(),
            )

    # --- Relay ---

    async def broadcast_chat(self, connection: ConnectionProtocol, room_id: str, text: str) -> None:
        structlog.contextvars.bind_contextvars(room_id=room_id)
        async with self._locked_room(room_id) as game:
            player = game.get_player(connection.connection_id) if game is not None else None
            if game is None or player is None:
                await self._send_error(connection, SessionErrorCode.NOT_IN_ROOM, "You must join the room first")
                return
            await sync.broadcast_to_room(
                game,
                self._connections,
                SessionChatMessage(
                    room_id=room_id,
                    player_name=player.name,
                    text=text,
                    timestamp=int(time.time() * 1000),
                ).model_dump(),
            )

    async def handle_ping(self, connection: ConnectionProtocol) -> None:
        await connection.send_message(PongMessage().model_dump())
