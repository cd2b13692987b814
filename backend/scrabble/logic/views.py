"""
Read-only projections of a session for its observers.

The public view is safe to broadcast to every member of a room: other
players' racks appear only as a tile count. The private view holds one
player's rack and must only ever be sent to that player.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from scrabble.logic.game import ScrabbleGame
    from scrabble.logic.tiles import Tile


class BoardTileView(BaseModel):
    """An occupied board cell as seen by every player."""

    letter: str
    value: int


class RackTileView(BaseModel):
    """A rack tile as seen by its owner."""

    id: str
    letter: str
    value: int


class PlayerSummary(BaseModel):
    id: str
    name: str
    score: int
    tile_count: int
    is_host: bool


class PublicView(BaseModel):
    room_id: str
    players: list[PlayerSummary]
    current_turn: int
    board: list[list[BoardTileView | None]]
    started: bool
    tiles_remaining: int
    host_id: str | None


class PrivateView(BaseModel):
    tiles: list[RackTileView]


def _board_cell(tile: Tile | None) -> BoardTileView | None:
    if tile is None:
        return None
    return BoardTileView(letter=tile.letter, value=tile.value)


def build_public_view(game: ScrabbleGame) -> PublicView:
    return PublicView(
        room_id=game.room_id,
        players=[
            PlayerSummary(
                id=p.id,
                name=p.name,
                score=p.score,
                tile_count=p.tile_count,
                is_host=p.is_host,
            )
            for p in game.players
        ],
        current_turn=game.current_turn,
        board=[[_board_cell(tile) for tile in row] for row in game.board.rows()],
        started=game.started,
        tiles_remaining=len(game.bag),
        host_id=game.host_id,
    )


def build_private_view(game: ScrabbleGame, player_id: str) -> PrivateView | None:
    """Return the player's rack, or None if they are not in the session."""
    player = game.get_player(player_id)
    if player is None:
        return None
    return PrivateView(tiles=[RackTileView(id=t.id, letter=t.letter, value=t.value) for t in player.rack])
