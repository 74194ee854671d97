from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Optional

from .geometry import Square, parse_square


class Piece(IntEnum):
    EMPTY = 0
    WHITE = 1
    BLACK = 2

    @property
    def opposite(self) -> "Piece":
        if self == Piece.WHITE:
            return Piece.BLACK
        if self == Piece.BLACK:
            return Piece.WHITE
        raise ValueError("EMPTY has no opposite.")

    @property
    def abbrev(self) -> str:
        return {Piece.EMPTY: "-", Piece.WHITE: "w", Piece.BLACK: "b"}[self]

    @property
    def full_name(self) -> str:
        return self.name.lower()

    @property
    def sense(self) -> int:
        """+1 for the side maximising heuristic values, -1 for the other."""
        if self == Piece.EMPTY:
            raise ValueError("EMPTY has no search sense.")
        return 1 if self == Piece.WHITE else -1

    @staticmethod
    def from_abbrev(char: str) -> "Piece":
        for piece in Piece:
            if piece.abbrev == char:
                return piece
        raise ValueError(f"Unknown piece designator: {char!r}")


class GameResult(Enum):
    ONGOING = "ongoing"
    WHITE_WIN = "white_win"
    BLACK_WIN = "black_win"
    DRAW = "draw"

    @property
    def winner(self) -> Optional["Piece"]:
        """Winning Piece, Piece.EMPTY for a draw, None while the game continues."""
        return {
            GameResult.ONGOING: None,
            GameResult.WHITE_WIN: Piece.WHITE,
            GameResult.BLACK_WIN: Piece.BLACK,
            GameResult.DRAW: Piece.EMPTY,
        }[self]

    @staticmethod
    def win_for(side: Piece) -> "GameResult":
        return GameResult.WHITE_WIN if side == Piece.WHITE else GameResult.BLACK_WIN


class IllegalMoveError(ValueError):
    pass


class MoveLimitError(ValueError):
    pass


@dataclass(frozen=True)
class Move:
    from_sq: Square
    to_sq: Square
    capture: bool = field(default=False, compare=False)

    def capture_move(self) -> "Move":
        return replace(self, capture=True)

    @property
    def length(self) -> int:
        return self.from_sq.distance(self.to_sq)

    @staticmethod
    def parse(text: str) -> "Move":
        parts = text.strip().split("-")
        if len(parts) != 2:
            raise ValueError(f"Invalid move designator: {text!r}")
        return Move(parse_square(parts[0]), parse_square(parts[1]))

    def __str__(self) -> str:
        return f"{self.from_sq}-{self.to_sq}"
