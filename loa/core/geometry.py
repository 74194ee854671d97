from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

BOARD_SIZE = 8
NUM_SQUARES = BOARD_SIZE * BOARD_SIZE

# (dcol, drow), clockwise from north. Direction d and (d + 4) % 8 are opposite.
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
)

SQUARE_PATTERN = re.compile(r"^[a-h][1-8]$")


@dataclass(frozen=True)
class Square:
    col: int
    row: int

    @property
    def index(self) -> int:
        return self.row * BOARD_SIZE + self.col

    @property
    def is_edge(self) -> bool:
        return self.col in (0, BOARD_SIZE - 1) or self.row in (0, BOARD_SIZE - 1)

    @property
    def is_corner(self) -> bool:
        return self.col in (0, BOARD_SIZE - 1) and self.row in (0, BOARD_SIZE - 1)

    def distance(self, other: "Square") -> int:
        """Number of king steps between the two squares."""
        return max(abs(self.col - other.col), abs(self.row - other.row))

    def is_valid_move(self, other: "Square") -> bool:
        """True iff OTHER lies on a row, column or diagonal through this square."""
        if self == other:
            return False
        dc = other.col - self.col
        dr = other.row - self.row
        return dc == 0 or dr == 0 or abs(dc) == abs(dr)

    def direction(self, other: "Square") -> int:
        """Index into DIRECTIONS pointing from this square towards OTHER."""
        if not self.is_valid_move(other):
            raise ValueError(f"{other} is not on a line through {self}.")
        dc = other.col - self.col
        dr = other.row - self.row
        step = ((dc > 0) - (dc < 0), (dr > 0) - (dr < 0))
        return DIRECTIONS.index(step)

    def move_dest(self, direction: int, steps: int) -> Optional["Square"]:
        dc, dr = DIRECTIONS[direction % len(DIRECTIONS)]
        col = self.col + dc * steps
        row = self.row + dr * steps
        if not in_bounds(col, row):
            return None
        return sq(col, row)

    def ray(self, direction: int) -> Tuple["Square", ...]:
        """Squares from this one (exclusive) to the board edge along DIRECTION."""
        return _RAYS[self.index][direction % len(DIRECTIONS)]

    def adjacent(self) -> Tuple["Square", ...]:
        return _ADJACENT[self.index]

    def __str__(self) -> str:
        return f"{chr(ord('a') + self.col)}{self.row + 1}"


def in_bounds(col: int, row: int) -> bool:
    return 0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE


ALL_SQUARES: Tuple[Square, ...] = tuple(
    Square(index % BOARD_SIZE, index // BOARD_SIZE) for index in range(NUM_SQUARES)
)

# Squares nearest the middle of the board.
CENTER_SQUARES: Tuple[Square, ...] = (
    ALL_SQUARES[3 * BOARD_SIZE + 3],
    ALL_SQUARES[4 * BOARD_SIZE + 4],
    ALL_SQUARES[3 * BOARD_SIZE + 4],
    ALL_SQUARES[4 * BOARD_SIZE + 3],
)


def sq(col: int, row: int) -> Square:
    if not in_bounds(col, row):
        raise ValueError(f"Square ({col}, {row}) is off the board.")
    return ALL_SQUARES[row * BOARD_SIZE + col]


def parse_square(text: str) -> Square:
    if not SQUARE_PATTERN.match(text):
        raise ValueError(f"Invalid square designator: {text!r}")
    return sq(ord(text[0]) - ord("a"), int(text[1]) - 1)


def center_distance(square: Square) -> int:
    return min(square.distance(center) for center in CENTER_SQUARES)


def _build_rays() -> List[Tuple[Tuple[Square, ...], ...]]:
    rays = []
    for square in ALL_SQUARES:
        per_direction = []
        for dc, dr in DIRECTIONS:
            line = []
            col, row = square.col + dc, square.row + dr
            while in_bounds(col, row):
                line.append(ALL_SQUARES[row * BOARD_SIZE + col])
                col += dc
                row += dr
            per_direction.append(tuple(line))
        rays.append(tuple(per_direction))
    return rays


_RAYS = _build_rays()
_ADJACENT: List[Tuple[Square, ...]] = [
    tuple(ray[0] for ray in _RAYS[square.index] if ray) for square in ALL_SQUARES
]
