"""
Move validation and scoring.

All functions here are pure with respect to the board: they read the
pre-move occupancy and never write to it. ScrabbleGame commits a move
only after validate_move and calculate_score have both succeeded.

Validation order (first failure wins):
1. empty placement set
2. placement integrity: on board, distinct cells, empty cells, tiles from the rack
3. opening move must cover the center cell
4. single row or column
5. contiguity along that line (existing board tiles may fill gaps)
6. after the opening move, at least one tile adjacent to an existing tile
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from scrabble.logic.board import CENTER, on_board
from scrabble.logic.enums import GameErrorCode, PremiumKind
from scrabble.logic.exceptions import PlacementError
from scrabble.logic.tiles import Tile  # noqa: TC001 -- pydantic resolves field types at runtime

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from scrabble.logic.board import Board, Cell
    from scrabble.logic.player import Player

BINGO_TILE_COUNT = 7
BINGO_BONUS = 50

_LETTER_MULTIPLIERS = {PremiumKind.DOUBLE_LETTER: 2, PremiumKind.TRIPLE_LETTER: 3}
_WORD_MULTIPLIERS = {PremiumKind.DOUBLE_WORD: 2, PremiumKind.TRIPLE_WORD: 3}


class Placement(BaseModel):
    """A request to put one rack tile on one cell."""

    model_config = ConfigDict(frozen=True)

    row: int
    col: int
    tile_id: str


class PlacedTile(BaseModel):
    """A placement resolved against the mover's rack."""

    model_config = ConfigDict(frozen=True)

    row: int
    col: int
    tile: Tile

    @property
    def cell(self) -> Cell:
        return self.row, self.col


class MoveScore(BaseModel):
    """Score breakdown for one move."""

    model_config = ConfigDict(frozen=True)

    tile_points: int
    line_bonus: int
    word_multiplier: int
    bingo_bonus: int
    total: int


@dataclass(frozen=True)
class Line:
    """The row or column segment spanned by a move, inclusive on both ends."""

    horizontal: bool
    fixed: int
    start: int
    end: int

    def cells(self) -> Iterator[Cell]:
        for i in range(self.start, self.end + 1):
            yield (self.fixed, i) if self.horizontal else (i, self.fixed)


def line_of(placed: Sequence[PlacedTile]) -> Line:
    """Identify the line a move lies on.

    A single tile, or any set sharing one row, is treated as a row.
    Callers must have already rejected placements spanning several rows and columns.
    """
    rows = {p.row for p in placed}
    if len(rows) == 1:
        cols = [p.col for p in placed]
        return Line(horizontal=True, fixed=placed[0].row, start=min(cols), end=max(cols))
    return Line(horizontal=False, fixed=placed[0].col, start=min(rows), end=max(rows))


def resolve_placements(board: Board, player: Player, placements: Sequence[Placement]) -> list[PlacedTile]:
    """Check placement integrity and attach the actual rack tiles."""
    seen_cells: set[Cell] = set()
    seen_tiles: set[str] = set()
    placed: list[PlacedTile] = []
    for placement in placements:
        if not on_board(placement.row, placement.col):
            raise PlacementError("Position is off the board", GameErrorCode.OFF_BOARD)
        cell = (placement.row, placement.col)
        if cell in seen_cells or placement.tile_id in seen_tiles:
            raise PlacementError("Each cell and tile may be used once", GameErrorCode.DUPLICATE_PLACEMENT)
        if board.is_occupied(*cell):
            raise PlacementError("Cell is already occupied", GameErrorCode.CELL_OCCUPIED)
        tile = player.find_tile(placement.tile_id)
        if tile is None:
            raise PlacementError("Tile is not in your rack", GameErrorCode.TILE_NOT_IN_RACK)
        seen_cells.add(cell)
        seen_tiles.add(placement.tile_id)
        placed.append(PlacedTile(row=placement.row, col=placement.col, tile=tile))
    return placed


def validate_move(board: Board, placed: Sequence[PlacedTile], *, opening_move_played: bool) -> Line:
    """Validate move geometry against the pre-move board. Returns the move's line."""
    if not placed:
        raise PlacementError("No tiles played", GameErrorCode.NO_TILES_PLAYED)

    if not opening_move_played and not any(p.cell == CENTER for p in placed):
        raise PlacementError("First word must cross the center square", GameErrorCode.FIRST_MOVE_NOT_ON_CENTER)

    rows = {p.row for p in placed}
    cols = {p.col for p in placed}
    if len(rows) > 1 and len(cols) > 1:
        raise PlacementError("Tiles must be in a single row or column", GameErrorCode.NOT_IN_LINE)

    line = line_of(placed)
    new_cells = {p.cell for p in placed}
    for cell in line.cells():
        if cell not in new_cells and not board.is_occupied(*cell):
            raise PlacementError("Tiles must be contiguous", GameErrorCode.NOT_CONTIGUOUS)

    if opening_move_played and not any(board.has_adjacent_tile(p.row, p.col) for p in placed):
        raise PlacementError("New tiles must connect to existing tiles", GameErrorCode.NOT_CONNECTED)

    return line


def calculate_score(
    board: Board,
    placed: Sequence[PlacedTile],
    line: Line,
    *,
    bingo_tile_count: int = BINGO_TILE_COUNT,
    bingo_bonus: int = BINGO_BONUS,
) -> MoveScore:
    """
    Score a validated move before its tiles are written to the board.

    Premiums are read from the pre-move board, so a square already
    holding a tile never contributes. Existing tiles inside the move's
    line add their face value once; perpendicular words are not scored.
    """
    tile_points = 0
    word_multiplier = 1
    for p in placed:
        premium = board.effective_premium(p.row, p.col)
        tile_points += p.tile.value * _LETTER_MULTIPLIERS.get(premium, 1)
        word_multiplier *= _WORD_MULTIPLIERS.get(premium, 1)

    new_cells = {p.cell for p in placed}
    line_bonus = 0
    for cell in line.cells():
        existing = board.get(*cell)
        if cell not in new_cells and existing is not None:
            line_bonus += existing.value

    bonus = bingo_bonus if len(placed) == bingo_tile_count else 0
    total = (tile_points + line_bonus) * word_multiplier + bonus
    return MoveScore(
        tile_points=tile_points,
        line_bonus=line_bonus,
        word_multiplier=word_multiplier,
        bingo_bonus=bonus,
        total=total,
    )
