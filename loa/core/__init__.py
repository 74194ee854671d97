"""Core game logic for Lines of Action."""

from .geometry import (
    ALL_SQUARES,
    BOARD_SIZE,
    CENTER_SQUARES,
    DIRECTIONS,
    NUM_SQUARES,
    Square,
    center_distance,
    parse_square,
    sq,
)
from .state import GameResult, IllegalMoveError, Move, MoveLimitError, Piece
from .regions import Regions, analyze_regions
from .board import (
    ACTION_VECTOR_SIZE,
    DEFAULT_MOVE_LIMIT,
    INITIAL_PIECES,
    Board,
    decode_move,
    encode_move,
    layout_from_text,
)

__all__ = [
    "ALL_SQUARES",
    "BOARD_SIZE",
    "CENTER_SQUARES",
    "DIRECTIONS",
    "NUM_SQUARES",
    "Square",
    "center_distance",
    "parse_square",
    "sq",
    "GameResult",
    "IllegalMoveError",
    "Move",
    "MoveLimitError",
    "Piece",
    "Regions",
    "analyze_regions",
    "ACTION_VECTOR_SIZE",
    "DEFAULT_MOVE_LIMIT",
    "INITIAL_PIECES",
    "Board",
    "decode_move",
    "encode_move",
    "layout_from_text",
]
