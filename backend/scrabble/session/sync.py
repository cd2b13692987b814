"""
State synchronization: turn a session into the messages its observers see.

Every function here only reads session state. The public view goes to
every connected member of a room; a private view only ever goes to the
connection that owns the rack.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from scrabble.logic.views import build_private_view, build_public_view
from scrabble.messaging.types import (
    GameStartedMessage,
    GameStateMessage,
    PlayerStateMessage,
    RoomJoinedMessage,
)
from scrabble.session.broadcast import broadcast_to_connections, send_quietly

if TYPE_CHECKING:
    from collections.abc import Mapping

    from scrabble.logic.game import ScrabbleGame
    from scrabble.messaging.protocol import ConnectionProtocol


def room_connections(game: ScrabbleGame, connections: Mapping[str, ConnectionProtocol]) -> list[ConnectionProtocol]:
    """Connections of the room's players, in roster order."""
    return [connections[p.id] for p in game.players if p.id in connections]


async def broadcast_to_room(
    game: ScrabbleGame,
    connections: Mapping[str, ConnectionProtocol],
    message: dict[str, Any],
) -> None:
    await broadcast_to_connections(room_connections(game, connections), message)


async def broadcast_game_state(game: ScrabbleGame, connections: Mapping[str, ConnectionProtocol]) -> None:
    message = GameStateMessage(game_state=build_public_view(game)).model_dump()
    await broadcast_to_room(game, connections, message)


async def broadcast_game_started(game: ScrabbleGame, connections: Mapping[str, ConnectionProtocol]) -> None:
    message = GameStartedMessage(game_state=build_public_view(game)).model_dump()
    await broadcast_to_room(game, connections, message)


async def send_player_state(game: ScrabbleGame, connection: ConnectionProtocol) -> None:
    view = build_private_view(game, connection.connection_id)
    if view is None:
        return
    await send_quietly(
        connection,
        PlayerStateMessage(room_id=game.room_id, player_state=view).model_dump(),
    )


async def send_all_player_states(game: ScrabbleGame, connections: Mapping[str, ConnectionProtocol]) -> None:
    for connection in room_connections(game, connections):
        await send_player_state(game, connection)


async def send_room_joined(game: ScrabbleGame, connection: ConnectionProtocol) -> None:
    view = build_private_view(game, connection.connection_id)
    if view is None:
        return
    await send_quietly(
        connection,
        RoomJoinedMessage(
            room_id=game.room_id,
            player_id=connection.connection_id,
            game_state=build_public_view(game),
            player_state=view,
        ).model_dump(),
    )
