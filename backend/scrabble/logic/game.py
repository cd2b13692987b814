"""
Per-room game state machine.

ScrabbleGame owns the board, the tile bag, the roster and the turn
cursor, and exposes every mutating operation. Operations validate
fully before they mutate anything, and report rule violations as a
failed ActionResult instead of raising.

Phases: LOBBY (not started) -> ACTIVE (started) -> EMPTY (roster drained).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from scrabble.logic.action_result import ActionResult
from scrabble.logic.bag import TileBag
from scrabble.logic.board import Board
from scrabble.logic.enums import GameErrorCode, GamePhase
from scrabble.logic.exceptions import (
    AuthorizationError,
    CapacityError,
    GameRuleError,
    GameStateError,
)
from scrabble.logic.move import calculate_score, resolve_placements, validate_move
from scrabble.logic.player import Player
from scrabble.logic.rng import create_rng
from scrabble.logic.settings import GameSettings
from scrabble.logic.tiles import TILE_DISTRIBUTION, letter_counts

if TYPE_CHECKING:
    from collections.abc import Sequence

    from scrabble.logic.move import Placement
    from scrabble.logic.tiles import Tile

logger = logging.getLogger(__name__)


class ScrabbleGame:
    def __init__(self, room_id: str, settings: GameSettings | None = None, seed: str | None = None) -> None:
        self.room_id = room_id
        self.settings = settings or GameSettings()
        self._rng = create_rng(seed)
        self.board = Board()
        self.bag = TileBag.standard(self._rng)
        self.players: list[Player] = []
        self.current_turn = 0
        self.started = False
        self.opening_move_played = False
        self.host_id: str | None = None

    # --- Queries ---

    @property
    def phase(self) -> GamePhase:
        if self.is_empty:
            return GamePhase.EMPTY
        return GamePhase.ACTIVE if self.started else GamePhase.LOBBY

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def is_empty(self) -> bool:
        return not self.players

    @property
    def is_full(self) -> bool:
        return self.player_count >= self.settings.max_players

    @property
    def current_player(self) -> Player | None:
        if not self.players:
            return None
        return self.players[self.current_turn]

    def get_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    def has_player(self, player_id: str) -> bool:
        return self.get_player(player_id) is not None

    def all_tiles(self) -> list[Tile]:
        """Every tile owned by this session: bag, then racks, then board."""
        tiles = list(self.bag.tiles)
        for player in self.players:
            tiles.extend(player.rack)
        tiles.extend(self.board.placed_tiles())
        return tiles

    def tiles_conserved(self) -> bool:
        """Check the bag, racks and board together hold exactly the canonical tile set."""
        tiles = self.all_tiles()
        unique_ids = len({t.id for t in tiles}) == len(tiles)
        return unique_ids and letter_counts(tiles) == TILE_DISTRIBUTION

    # --- Roster ---

    def add_player(self, player_id: str, name: str) -> ActionResult:
        try:
            if self.has_player(player_id):
                raise GameStateError("You are already in this room", GameErrorCode.ALREADY_IN_ROOM)
            if self.is_full:
                raise CapacityError("Room is full")
        except GameRuleError as e:
            return ActionResult.failure(e)

        is_host = self.is_empty
        player = Player(
            id=player_id,
            name=name.strip() or f"Player {self.player_count + 1}",
            is_host=is_host,
        )
        if is_host:
            self.host_id = player_id
        self.players.append(player)
        logger.info("player added, count=%d host=%s", self.player_count, is_host)
        return ActionResult.ok()

    def remove_player(self, player_id: str) -> bool:
        """Remove a player and return their rack to the bag.

        Promotes the next player in roster order when the host leaves and
        clamps the turn cursor to 0 when it falls off the end of the roster.
        Returns False if the player was not in this session.
        """
        player = self.get_player(player_id)
        if player is None:
            return False

        self.bag.return_tiles(player.rack)
        player.rack = []
        self.players.remove(player)

        if player.is_host:
            self.host_id = None
            if self.players:
                self.players[0].is_host = True
                self.host_id = self.players[0].id
                logger.info("host left, promoted next player")

        if self.current_turn >= self.player_count:
            self.current_turn = 0
        return True

    # --- Lifecycle ---

    def start_game(self) -> ActionResult:
        try:
            if self.started:
                raise GameStateError("Game already started", GameErrorCode.GAME_ALREADY_STARTED)
            if self.player_count < self.settings.min_players:
                raise GameStateError(
                    f"At least {self.settings.min_players} players are needed to start",
                    GameErrorCode.NOT_ENOUGH_PLAYERS,
                )
        except GameRuleError as e:
            return ActionResult.failure(e)

        self.started = True
        for player in self.players:
            player.receive(self.bag.draw(self.settings.rack_size))
        logger.info("game started, players=%d bag=%d", self.player_count, len(self.bag))
        return ActionResult.ok()

    # --- Turn actions ---

    def play_move(self, player_id: str, placements: Sequence[Placement]) -> ActionResult:
        try:
            player = self._require_turn(player_id)
            placed = resolve_placements(self.board, player, placements)
            line = validate_move(self.board, placed, opening_move_played=self.opening_move_played)
            # premiums must be read before the tiles land on the board
            score = calculate_score(
                self.board,
                placed,
                line,
                bingo_tile_count=self.settings.rack_size,
                bingo_bonus=self.settings.bingo_bonus,
            )
        except GameRuleError as e:
            logger.info("move rejected: %s", e.reason)
            return ActionResult.failure(e)

        for p in placed:
            self.board.place(p.row, p.col, p.tile)
        player.score += score.total
        player.take_tiles(p.tile.id for p in placed)
        player.receive(self.bag.draw(len(placed)))
        self.opening_move_played = True
        self._advance_turn()
        logger.info("move played, tiles=%d score=%d", len(placed), score.total)
        return ActionResult.ok(score=score)

    def pass_turn(self, player_id: str) -> ActionResult:
        try:
            self._require_turn(player_id)
        except GameRuleError as e:
            return ActionResult.failure(e)
        self._advance_turn()
        return ActionResult.ok()

    def exchange_tiles(self, player_id: str, tile_ids: Sequence[str]) -> ActionResult:
        """Swap rack tiles for fresh ones from the bag.

        Ids that are not on the player's rack are skipped; only the tiles
        actually removed are replaced.
        """
        try:
            player = self._require_turn(player_id)
            if len(self.bag) < len(tile_ids):
                raise GameStateError("Not enough tiles in bag to exchange", GameErrorCode.NOT_ENOUGH_TILES)
        except GameRuleError as e:
            return ActionResult.failure(e)

        returned = player.take_tiles(tile_ids)
        self.bag.return_tiles(returned)
        self.bag.shuffle()
        player.receive(self.bag.draw(len(returned)))
        self._advance_turn()
        logger.info("tiles exchanged, count=%d", len(returned))
        return ActionResult.ok(exchanged=len(returned))

    # --- Internal helpers ---

    def _require_turn(self, player_id: str) -> Player:
        player = self.get_player(player_id)
        if player is None:
            raise GameStateError("You are not in this game", GameErrorCode.NOT_IN_GAME)
        if not self.started:
            raise GameStateError("Game has not started yet", GameErrorCode.GAME_NOT_STARTED)
        if self.current_player is not player:
            raise AuthorizationError("Not your turn", GameErrorCode.NOT_YOUR_TURN)
        return player

    def _advance_turn(self) -> None:
        self.current_turn = (self.current_turn + 1) % self.player_count
