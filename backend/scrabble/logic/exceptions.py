"""Typed domain exceptions for game rule violations.

All domain-level rule violations use subclasses of GameRuleError
rather than raw ValueError. Each carries the GameErrorCode reported to
the client, so the session boundary (ScrabbleGame) can convert them
into ActionResult failures without inspecting the message text.
"""

from scrabble.logic.enums import GameErrorCode


class GameRuleError(Exception):
    """Base exception for game rule violations.

    Raised by domain logic (move.py, game.py) when a request violates
    game rules. Caught at the session boundary and converted to a
    failed ActionResult; never fatal to the session.
    """

    default_code = GameErrorCode.GAME_ERROR

    def __init__(self, reason: str, code: GameErrorCode | None = None) -> None:
        self.reason = reason
        self.code = code or self.default_code
        super().__init__(reason)


class CapacityError(GameRuleError):
    """Room cannot accept another player (or the server another room)."""

    default_code = GameErrorCode.ROOM_FULL


class RoomNotFoundError(GameRuleError):
    """Requested room id is not registered."""

    default_code = GameErrorCode.ROOM_NOT_FOUND


class AuthorizationError(GameRuleError):
    """Requester is not allowed to perform this action right now."""

    default_code = GameErrorCode.NOT_YOUR_TURN


class GameStateError(GameRuleError):
    """Action is not valid in the current lifecycle state."""

    default_code = GameErrorCode.INVALID_STATE


class PlacementError(GameRuleError):
    """Tile placement violates the geometric or rack rules."""

    default_code = GameErrorCode.INVALID_PLACEMENT
