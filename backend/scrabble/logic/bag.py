"""
Tile bag: the ordered pool of undealt tiles.

Tiles are always drawn from the tail. Exchanged tiles are returned,
then the bag is shuffled, then replacements are drawn, so a player can
never draw back the exact tiles they just put in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scrabble.logic.rng import fisher_yates_shuffle
from scrabble.logic.tiles import create_tile_set

if TYPE_CHECKING:
    import random
    from collections.abc import Iterable

    from scrabble.logic.tiles import Tile


class TileBag:
    def __init__(self, tiles: Iterable[Tile], rng: random.Random) -> None:
        self._tiles: list[Tile] = list(tiles)
        self._rng = rng

    @classmethod
    def standard(cls, rng: random.Random) -> TileBag:
        """Create a shuffled bag holding the full 100-tile distribution."""
        bag = cls(create_tile_set(rng), rng)
        bag.shuffle()
        return bag

    def __len__(self) -> int:
        return len(self._tiles)

    @property
    def tiles(self) -> tuple[Tile, ...]:
        return tuple(self._tiles)

    def draw(self, count: int) -> list[Tile]:
        """Remove and return up to count tiles from the tail.

        Returns fewer tiles (possibly none) when the bag runs short.
        """
        drawn: list[Tile] = []
        while len(drawn) < count and self._tiles:
            drawn.append(self._tiles.pop())
        return drawn

    def return_tiles(self, tiles: Iterable[Tile]) -> None:
        self._tiles.extend(tiles)

    def shuffle(self) -> None:
        self._tiles = fisher_yates_shuffle(self._tiles, self._rng)
