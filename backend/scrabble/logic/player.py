from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from scrabble.logic.tiles import Tile


@dataclass
class Player:
    """A participant in one session.

    Lifecycle:
    - Created by ScrabbleGame.add_player (first player becomes host)
    - Rack filled on game start and refilled after moves and exchanges
    - Destroyed by ScrabbleGame.remove_player; the rack returns to the bag
    """

    id: str
    name: str
    score: int = 0
    rack: list[Tile] = field(default_factory=list)
    is_host: bool = False

    @property
    def tile_count(self) -> int:
        return len(self.rack)

    def find_tile(self, tile_id: str) -> Tile | None:
        return next((t for t in self.rack if t.id == tile_id), None)

    def take_tiles(self, tile_ids: Iterable[str]) -> list[Tile]:
        """Remove the rack tiles with the given ids and return them.

        Ids that are not on the rack are ignored.
        """
        wanted = set(tile_ids)
        taken = [t for t in self.rack if t.id in wanted]
        self.rack = [t for t in self.rack if t.id not in wanted]
        return taken

    def receive(self, tiles: Iterable[Tile]) -> None:
        self.rack.extend(tiles)
