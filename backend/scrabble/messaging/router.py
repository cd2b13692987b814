from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from scrabble.logic.move import Placement
from scrabble.messaging.types import (
    ChatMessage,
    CreateRoomMessage,
    ErrorMessage,
    ExchangeTilesMessage,
    JoinRoomMessage,
    LeaveRoomMessage,
    PassTurnMessage,
    PingMessage,
    PlayMoveMessage,
    SessionErrorCode,
    StartGameMessage,
    parse_client_message,
)

if TYPE_CHECKING:
    from scrabble.messaging.protocol import ConnectionProtocol
    from scrabble.messaging.types import ClientMessage
    from scrabble.session.manager import SessionManager

logger = logging.getLogger(__name__)


class MessageRouter:
    """
    Routes incoming messages to appropriate handlers.

    This class contains pure business logic and can be tested
    without real WebSocket connections.
    """

    def __init__(self, session_manager: SessionManager) -> None:
        self._session_manager = session_manager

    async def handle_message(
        self,
        connection: ConnectionProtocol,
        raw_message: dict[str, Any],
    ) -> None:
        try:
            message = parse_client_message(raw_message)
        except (ValidationError, KeyError, TypeError, ValueError) as e:
            logger.warning("invalid message from %s: %s", connection.connection_id, e)
            await connection.send_message(
                ErrorMessage(code=SessionErrorCode.INVALID_MESSAGE, message=str(e)).model_dump(),
            )
            return

        try:
            await self._dispatch(connection, message)
        except Exception:
            logger.exception("unexpected error handling %s for %s", message.type, connection.connection_id)
            await connection.send_message(
                ErrorMessage(code=SessionErrorCode.ACTION_FAILED, message="Action failed").model_dump(),
            )

    async def _dispatch(self, connection: ConnectionProtocol, message: ClientMessage) -> None:
        manager = self._session_manager
        if isinstance(message, CreateRoomMessage):
            await manager.create_room(connection, message.room_id, message.player_name)
        elif isinstance(message, JoinRoomMessage):
            await manager.join_room(connection, message.room_id, message.player_name)
        elif isinstance(message, LeaveRoomMessage):
            await manager.leave_room(connection, message.room_id)
        elif isinstance(message, StartGameMessage):
            await manager.start_game(connection, message.room_id)
        elif isinstance(message, PlayMoveMessage):
            placements = [Placement(row=p.row, col=p.col, tile_id=p.tile_id) for p in message.placements]
            await manager.play_move(connection, message.room_id, placements)
        elif isinstance(message, PassTurnMessage):
            await manager.pass_turn(connection, message.room_id)
        elif isinstance(message, ExchangeTilesMessage):
            await manager.exchange_tiles(connection, message.room_id, message.tile_ids)
        elif isinstance(message, ChatMessage):
            await manager.broadcast_chat(connection, message.room_id, message.text)
        elif isinstance(message, PingMessage):
            await manager.handle_ping(connection)

    async def handle_connect(self, connection: ConnectionProtocol) -> None:
        self._session_manager.register_connection(connection)

    async def handle_disconnect(self, connection: ConnectionProtocol) -> None:
        await self._session_manager.disconnect(connection)
