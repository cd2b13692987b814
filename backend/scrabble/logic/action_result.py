"""Result type returned by every ScrabbleGame operation.

Rule violations never escape the session as exceptions: they are
converted into a failed ActionResult carrying the error code and a
human-readable reason for the requester.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from scrabble.logic.enums import GameErrorCode
    from scrabble.logic.exceptions import GameRuleError
    from scrabble.logic.move import MoveScore


class ActionResult(NamedTuple):
    """
    Outcome of a session operation.

    score is set for successful moves; exchanged is the number of tiles
    swapped by a successful exchange.
    """

    success: bool
    code: GameErrorCode | None = None
    reason: str | None = None
    score: MoveScore | None = None
    exchanged: int = 0

    @classmethod
    def ok(cls, *, score: MoveScore | None = None, exchanged: int = 0) -> ActionResult:
        return cls(success=True, score=score, exchanged=exchanged)

    @classmethod
    def failure(cls, error: GameRuleError) -> ActionResult:
        return cls(success=False, code=error.code, reason=error.reason)
