"""
Tile representation and the standard English tile set.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    import random
    from collections.abc import Iterable

BLANK = "_"

# copies of each letter in a fresh bag (100 tiles)
TILE_DISTRIBUTION: dict[str, int] = {
    "A": 9, "B": 2, "C": 2, "D": 4, "E": 12, "F": 2, "G": 3, "H": 2,
    "I": 9, "J": 1, "K": 1, "L": 4, "M": 2, "N": 6, "O": 8, "P": 2,
    "Q": 1, "R": 6, "S": 4, "T": 6, "U": 4, "V": 2, "W": 2, "X": 1,
    "Y": 2, "Z": 1, BLANK: 2,
}  # fmt: skip

TILE_VALUES: dict[str, int] = {
    "A": 1, "B": 3, "C": 3, "D": 2, "E": 1, "F": 4, "G": 2, "H": 4,
    "I": 1, "J": 8, "K": 5, "L": 1, "M": 3, "N": 1, "O": 1, "P": 3,
    "Q": 10, "R": 1, "S": 1, "T": 1, "U": 1, "V": 4, "W": 4, "X": 8,
    "Y": 4, "Z": 10, BLANK: 0,
}  # fmt: skip

NUM_TILES = sum(TILE_DISTRIBUTION.values())


class Tile(BaseModel):
    """A single letter tile. Immutable once minted."""

    model_config = ConfigDict(frozen=True)

    id: str
    letter: str
    value: int

    @property
    def is_blank(self) -> bool:
        return self.letter == BLANK


def create_tile_set(rng: random.Random) -> list[Tile]:
    """
    Mint the canonical 100-tile set in distribution order.

    Ids combine the letter, the copy index and a random suffix so they
    stay opaque to clients while remaining unique within a session.
    """
    tiles = []
    for letter, count in TILE_DISTRIBUTION.items():
        for copy in range(count):
            suffix = f"{rng.getrandbits(32):08x}"
            tiles.append(Tile(id=f"{letter}-{copy}-{suffix}", letter=letter, value=TILE_VALUES[letter]))
    return tiles


def letter_counts(tiles: Iterable[Tile]) -> Counter[str]:
    """Count tiles per letter, used to compare against TILE_DISTRIBUTION."""
    return Counter(tile.letter for tile in tiles)
