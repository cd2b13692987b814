"""
Board geometry and premium square layout.

The board is a 15x15 grid of optional tiles. Premium squares are a fixed
property of the coordinates; whether a premium still applies depends on
occupancy, since a square is spent by the first tile placed on it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scrabble.logic.enums import PremiumKind

if TYPE_CHECKING:
    from collections.abc import Iterator

    from scrabble.logic.tiles import Tile

BOARD_SIZE = 15
CENTER = (7, 7)

Cell = tuple[int, int]

TRIPLE_WORD_CELLS: frozenset[Cell] = frozenset(
    {(0, 0), (0, 7), (0, 14), (7, 0), (7, 14), (14, 0), (14, 7), (14, 14)},
)
# the center cell is part of the double word set
DOUBLE_WORD_CELLS: frozenset[Cell] = frozenset(
    {
        (1, 1), (2, 2), (3, 3), (4, 4), (1, 13), (2, 12), (3, 11), (4, 10),
        (13, 1), (12, 2), (11, 3), (10, 4), (13, 13), (12, 12), (11, 11), (10, 10),
        CENTER,
    },
)  # fmt: skip
TRIPLE_LETTER_CELLS: frozenset[Cell] = frozenset(
    {(1, 5), (1, 9), (5, 1), (5, 5), (5, 9), (5, 13), (9, 1), (9, 5), (9, 9), (9, 13), (13, 5), (13, 9)},
)
DOUBLE_LETTER_CELLS: frozenset[Cell] = frozenset(
    {
        (0, 3), (0, 11), (2, 6), (2, 8), (3, 0), (3, 7), (3, 14), (6, 2), (6, 6), (6, 8), (6, 12), (7, 3),
        (7, 11), (8, 2), (8, 6), (8, 8), (8, 12), (11, 0), (11, 7), (11, 14), (12, 6), (12, 8), (14, 3), (14, 11),
    },
)  # fmt: skip

_PREMIUM_LAYOUT: dict[Cell, PremiumKind] = {
    **dict.fromkeys(DOUBLE_LETTER_CELLS, PremiumKind.DOUBLE_LETTER),
    **dict.fromkeys(TRIPLE_LETTER_CELLS, PremiumKind.TRIPLE_LETTER),
    **dict.fromkeys(DOUBLE_WORD_CELLS, PremiumKind.DOUBLE_WORD),
    **dict.fromkeys(TRIPLE_WORD_CELLS, PremiumKind.TRIPLE_WORD),
}


def premium_kind(row: int, col: int) -> PremiumKind:
    """Return the printed premium of a cell, regardless of occupancy."""
    return _PREMIUM_LAYOUT.get((row, col), PremiumKind.NONE)


def is_center(row: int, col: int) -> bool:
    return (row, col) == CENTER


def on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def neighbors(row: int, col: int) -> Iterator[Cell]:
    """Yield the on-board cells 4-directionally adjacent to (row, col)."""
    for d_row, d_col in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        r, c = row + d_row, col + d_col
        if on_board(r, c):
            yield r, c


class Board:
    """Mutable 15x15 grid. Cells hold a Tile or None."""

    def __init__(self) -> None:
        self._cells: list[list[Tile | None]] = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    def get(self, row: int, col: int) -> Tile | None:
        return self._cells[row][col]

    def is_occupied(self, row: int, col: int) -> bool:
        return self._cells[row][col] is not None

    def place(self, row: int, col: int, tile: Tile) -> None:
        if self._cells[row][col] is not None:
            raise ValueError(f"cell ({row}, {col}) is already occupied")
        self._cells[row][col] = tile

    def effective_premium(self, row: int, col: int) -> PremiumKind:
        """Premium usable by a move: spent once the cell holds a tile."""
        if self.is_occupied(row, col):
            return PremiumKind.NONE
        return premium_kind(row, col)

    def has_adjacent_tile(self, row: int, col: int) -> bool:
        return any(self.is_occupied(r, c) for r, c in neighbors(row, col))

    def placed_tiles(self) -> list[Tile]:
        return [tile for row in self._cells for tile in row if tile is not None]

    @property
    def occupied_count(self) -> int:
        return sum(1 for row in self._cells for tile in row if tile is not None)

    @property
    def is_empty(self) -> bool:
        return self.occupied_count == 0

    def rows(self) -> list[list[Tile | None]]:
        """Snapshot of the grid (row-major). The inner lists are copies."""
        return [list(row) for row in self._cells]
