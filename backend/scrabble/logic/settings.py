"""Centralized game settings - the configurable gameplay rules."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from scrabble.logic.move import BINGO_BONUS, BINGO_TILE_COUNT

MAX_PLAYERS = 4
MIN_PLAYERS = 2


class GameSettings(BaseModel):
    """
    Configuration for a session's rules.

    Defaults match the standard game: 2-4 players, 7-tile racks,
    50 points for playing a full rack.
    """

    model_config = ConfigDict(frozen=True)

    max_players: int = Field(default=MAX_PLAYERS, ge=1, le=MAX_PLAYERS)
    min_players: int = Field(default=MIN_PLAYERS, ge=1)
    rack_size: int = Field(default=BINGO_TILE_COUNT, ge=1)
    bingo_bonus: int = Field(default=BINGO_BONUS, ge=0)

    @model_validator(mode="after")
    def _validate_player_bounds(self) -> Self:
        if self.min_players > self.max_players:
            raise ValueError(f"min_players ({self.min_players}) exceeds max_players ({self.max_players})")
        return self
