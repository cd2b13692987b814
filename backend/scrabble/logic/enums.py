"""
String enum definitions for word-tile game concepts.
"""

from enum import Enum


class PremiumKind(str, Enum):
    """Score multiplier granted by a board cell while it is still empty."""

    TRIPLE_WORD = "tw"
    DOUBLE_WORD = "dw"
    TRIPLE_LETTER = "tl"
    DOUBLE_LETTER = "dl"
    NONE = "none"


class GamePhase(str, Enum):
    """Lifecycle phase of a session."""

    LOBBY = "lobby"
    ACTIVE = "active"
    EMPTY = "empty"


class GameAction(str, Enum):
    """Turn actions dispatched from client to the session."""

    PLAY_MOVE = "play_move"
    PASS_TURN = "pass_turn"
    EXCHANGE_TILES = "exchange_tiles"


class GameErrorCode(str, Enum):
    """Error codes sent to clients for rejected operations."""

    # capacity
    ROOM_FULL = "room_full"
    SERVER_FULL = "server_full"
    # lookup
    ROOM_NOT_FOUND = "room_not_found"
    NOT_IN_GAME = "not_in_game"
    # authorization
    NOT_YOUR_TURN = "not_your_turn"
    NOT_HOST = "not_host"
    # state
    GAME_ALREADY_STARTED = "game_already_started"
    GAME_NOT_STARTED = "game_not_started"
    NOT_ENOUGH_PLAYERS = "not_enough_players"
    NOT_ENOUGH_TILES = "not_enough_tiles"
    ALREADY_IN_ROOM = "already_in_room"
    INVALID_STATE = "invalid_state"
    # geometry
    NO_TILES_PLAYED = "no_tiles_played"
    FIRST_MOVE_NOT_ON_CENTER = "first_move_not_on_center"
    NOT_IN_LINE = "not_in_line"
    NOT_CONTIGUOUS = "not_contiguous"
    NOT_CONNECTED = "not_connected"
    # placement integrity
    CELL_OCCUPIED = "cell_occupied"
    DUPLICATE_PLACEMENT = "duplicate_placement"
    TILE_NOT_IN_RACK = "tile_not_in_rack"
    OFF_BOARD = "off_board"
    INVALID_PLACEMENT = "invalid_placement"
    GAME_ERROR = "game_error"
