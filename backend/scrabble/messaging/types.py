from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from scrabble.logic.board import BOARD_SIZE
from scrabble.logic.enums import GameErrorCode
from scrabble.logic.views import PrivateView, PublicView

# ASCII control character boundaries for input validation
_SPACE_ORD = 0x20
_DEL_ORD = 0x7F

MAX_TILES_PER_ACTION = 7


def _reject_control_chars(v: str) -> str:
    if any((ord(c) < _SPACE_ORD and c not in ("\t", "\n", "\r")) or ord(c) == _DEL_ORD for c in v):
        raise ValueError("text must not contain control characters")
    return v


class ClientMessageType(StrEnum):
    CREATE_ROOM = "create_room"
    JOIN_ROOM = "join_room"
    LEAVE_ROOM = "leave_room"
    START_GAME = "start_game"
    PLAY_MOVE = "play_move"
    PASS_TURN = "pass_turn"
    EXCHANGE_TILES = "exchange_tiles"
    CHAT = "chat"
    PING = "ping"


class SessionMessageType(StrEnum):
    ROOM_JOINED = "room_joined"
    ROOM_LEFT = "room_left"
    GAME_STATE = "game_state"
    GAME_STARTED = "game_started"
    PLAYER_STATE = "player_state"
    MOVE_COMPLETED = "move_completed"
    PLAYER_PASSED = "player_passed"
    TILES_EXCHANGED = "tiles_exchanged"
    CHAT = "chat"
    ERROR = "session_error"
    PONG = "pong"


class SessionErrorCode(StrEnum):
    """Transport-level error codes. Rule violations use GameErrorCode."""

    INVALID_MESSAGE = "invalid_message"
    NOT_IN_ROOM = "not_in_room"
    ACTION_FAILED = "action_failed"


_ROOM_ID_FIELD = Field(min_length=1, max_length=50, pattern=r"^[a-zA-Z0-9_-]+$")
_TILE_ID_FIELD = Field(min_length=1, max_length=64)


class _RoomMessage(BaseModel):
    room_id: str = _ROOM_ID_FIELD


class _EnterRoomMessage(_RoomMessage):
    player_name: str = Field(default="", max_length=30)

    @field_validator("player_name")
    @classmethod
    def _validate_player_name(cls, v: str) -> str:
        return _reject_control_chars(v)


class CreateRoomMessage(_EnterRoomMessage):
    type: Literal[ClientMessageType.CREATE_ROOM] = ClientMessageType.CREATE_ROOM


class JoinRoomMessage(_EnterRoomMessage):
    type: Literal[ClientMessageType.JOIN_ROOM] = ClientMessageType.JOIN_ROOM


class LeaveRoomMessage(_RoomMessage):
    type: Literal[ClientMessageType.LEAVE_ROOM] = ClientMessageType.LEAVE_ROOM


class StartGameMessage(_RoomMessage):
    type: Literal[ClientMessageType.START_GAME] = ClientMessageType.START_GAME


class PlacementData(BaseModel):
    row: int = Field(ge=0, lt=BOARD_SIZE, strict=True)
    col: int = Field(ge=0, lt=BOARD_SIZE, strict=True)
    tile_id: str = _TILE_ID_FIELD


class PlayMoveMessage(_RoomMessage):
    type: Literal[ClientMessageType.PLAY_MOVE] = ClientMessageType.PLAY_MOVE
    placements: list[PlacementData] = Field(max_length=MAX_TILES_PER_ACTION)


class PassTurnMessage(_RoomMessage):
    type: Literal[ClientMessageType.PASS_TURN] = ClientMessageType.PASS_TURN


class ExchangeTilesMessage(_RoomMessage):
    type: Literal[ClientMessageType.EXCHANGE_TILES] = ClientMessageType.EXCHANGE_TILES
    tile_ids: list[Annotated[str, _TILE_ID_FIELD]] = Field(max_length=MAX_TILES_PER_ACTION)


class ChatMessage(_RoomMessage):
    type: Literal[ClientMessageType.CHAT] = ClientMessageType.CHAT
    text: str = Field(min_length=1, max_length=1000)

    @field_validator("text")
    @classmethod
    def _validate_text(cls, v: str) -> str:
        return _reject_control_chars(v)


class PingMessage(BaseModel):
    type: Literal[ClientMessageType.PING] = ClientMessageType.PING


ClientMessage = Annotated[
    CreateRoomMessage
    | JoinRoomMessage
    | LeaveRoomMessage
    | StartGameMessage
    | PlayMoveMessage
    | PassTurnMessage
    | ExchangeTilesMessage
    | ChatMessage
    | PingMessage,
    Field(discriminator="type"),
]

_client_message_adapter = TypeAdapter(ClientMessage)


def parse_client_message(data: dict[str, Any]) -> ClientMessage:
    """Parse a raw dict into a typed ClientMessage."""
    return _client_message_adapter.validate_python(data)


class RoomJoinedMessage(BaseModel):
    """Sent to a player who entered a room: who they are and the room as they see it."""

    type: Literal[SessionMessageType.ROOM_JOINED] = SessionMessageType.ROOM_JOINED
    room_id: str
    player_id: str
    game_state: PublicView
    player_state: PrivateView


class RoomLeftMessage(BaseModel):
    type: Literal[SessionMessageType.ROOM_LEFT] = SessionMessageType.ROOM_LEFT
    room_id: str


class GameStateMessage(BaseModel):
    type: Literal[SessionMessageType.GAME_STATE] = SessionMessageType.GAME_STATE
    game_state: PublicView


class GameStartedMessage(BaseModel):
    type: Literal[SessionMessageType.GAME_STARTED] = SessionMessageType.GAME_STARTED
    game_state: PublicView


class PlayerStateMessage(BaseModel):
    type: Literal[SessionMessageType.PLAYER_STATE] = SessionMessageType.PLAYER_STATE
    room_id: str
    player_state: PrivateView


class MoveCompletedMessage(BaseModel):
    type: Literal[SessionMessageType.MOVE_COMPLETED] = SessionMessageType.MOVE_COMPLETED
    room_id: str
    player_id: str
    score: int


class PlayerPassedMessage(BaseModel):
    type: Literal[SessionMessageType.PLAYER_PASSED] = SessionMessageType.PLAYER_PASSED
    room_id: str
    player_id: str


class TilesExchangedMessage(BaseModel):
    type: Literal[SessionMessageType.TILES_EXCHANGED] = SessionMessageType.TILES_EXCHANGED
    room_id: str
    player_id: str
    count: int = Field(ge=0, le=MAX_TILES_PER_ACTION)


class SessionChatMessage(BaseModel):
    type: Literal[SessionMessageType.CHAT] = SessionMessageType.CHAT
    room_id: str
    player_name: str
    text: str
    timestamp: int  # epoch milliseconds


class ErrorMessage(BaseModel):
    type: Literal[SessionMessageType.ERROR] = SessionMessageType.ERROR
    code: SessionErrorCode | GameErrorCode
    message: str


class PongMessage(BaseModel):
    type: Literal[SessionMessageType.PONG] = SessionMessageType.PONG


__all__ = [
    "ChatMessage",
    "ClientMessage",
    "ClientMessageType",
    "CreateRoomMessage",
    "ErrorMessage",
    "ExchangeTilesMessage",
    "GameStartedMessage",
    "GameStateMessage",
    "JoinRoomMessage",
    "LeaveRoomMessage",
    "MoveCompletedMessage",
    "PassTurnMessage",
    "PingMessage",
    "PlacementData",
    "PlayMoveMessage",
    "PlayerPassedMessage",
    "PlayerStateMessage",
    "PongMessage",
    "RoomJoinedMessage",
    "RoomLeftMessage",
    "SessionChatMessage",
    "SessionErrorCode",
    "SessionMessageType",
    "StartGameMessage",
    "TilesExchangedMessage",
    "parse_client_message",
]
