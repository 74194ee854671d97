from __future__ import annotations

from typing import Dict, Hashable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .geometry import ALL_SQUARES, BOARD_SIZE, NUM_SQUARES, Square
from .regions import Regions, analyze_regions
from .state import GameResult, IllegalMoveError, Move, MoveLimitError, Piece

DEFAULT_MOVE_LIMIT = 30
ACTION_VECTOR_SIZE = NUM_SQUARES * NUM_SQUARES

_E, _W, _B = Piece.EMPTY, Piece.WHITE, Piece.BLACK

# Standard opening layout, bottom row (row 0) first: contents[row][col].
INITIAL_PIECES: Tuple[Tuple[Piece, ...], ...] = (
    (_E, _B, _B, _B, _B, _B, _B, _E),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_W, _E, _E, _E, _E, _E, _E, _W),
    (_E, _B, _B, _B, _B, _B, _B, _E),
)

Layout = Sequence[Sequence[Piece]]


def encode_move(move: Move) -> int:
    return move.from_sq.index * NUM_SQUARES + move.to_sq.index


def decode_move(index: int) -> Move:
    if not 0 <= index < ACTION_VECTOR_SIZE:
        raise ValueError("Action index out of range.")
    return Move(ALL_SQUARES[index // NUM_SQUARES], ALL_SQUARES[index % NUM_SQUARES])


def layout_from_text(text: str) -> List[List[Piece]]:
    """Parse rows of w/b/- (top row first, as printed) into bottom-first contents."""
    rows: List[List[Piece]] = []
    for line in text.splitlines():
        cells = "".join(line.split())
        if not cells or any(char not in "wb-" for char in cells):
            continue
        if len(cells) != BOARD_SIZE:
            raise ValueError(f"Row {line.strip()!r} does not have {BOARD_SIZE} squares.")
        rows.append([Piece.from_abbrev(char) for char in cells])
    if len(rows) != BOARD_SIZE:
        raise ValueError(f"Expected {BOARD_SIZE} rows, found {len(rows)}.")
    rows.reverse()
    return rows


class Board:
    """State of a game of Lines of Action.

    The grid is an (8, 8) int8 array indexed [row, col] with row 0 at the
    bottom. Moves are applied with make_move and undone with retract; region
    analysis and the game result are derived lazily and dropped whenever the
    grid changes.
    """

    def __init__(
        self,
        contents: Optional[Layout] = None,
        turn: Piece = Piece.BLACK,
        *,
        move_limit: int = DEFAULT_MOVE_LIMIT,
    ) -> None:
        self._grid = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        self._history: List[Move] = []
        self._partial_scores: Dict[Piece, Dict[Hashable, float]] = {_W: {}, _B: {}}
        self.initialize(INITIAL_PIECES if contents is None else contents, turn, move_limit=move_limit)

    @classmethod
    def from_text(cls, text: str, turn: Optional[Piece] = None, **kwargs) -> "Board":
        if turn is None:
            turn = Piece.BLACK
            for line in text.splitlines():
                if line.strip().startswith("Next move:"):
                    turn = Piece[line.split(":", 1)[1].strip().upper()]
        return cls(layout_from_text(text), turn, **kwargs)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def initialize(
        self,
        contents: Layout,
        side: Piece,
        *,
        move_limit: int = DEFAULT_MOVE_LIMIT,
    ) -> None:
        grid = np.array([[int(piece) for piece in row] for row in contents], dtype=np.int8)
        if grid.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"Board layout must be {BOARD_SIZE}x{BOARD_SIZE}.")
        if side == Piece.EMPTY:
            raise ValueError("The side to move must be WHITE or BLACK.")
        self._grid[:, :] = grid
        self._turn = Piece(side)
        self._move_limit = move_limit
        self._history.clear()
        self._invalidate()

    def clear(self) -> None:
        self.initialize(INITIAL_PIECES, Piece.BLACK)

    def copy_from(self, board: "Board") -> None:
        if board is self:
            return
        self._grid[:, :] = board._grid
        self._turn = board._turn
        self._move_limit = board._move_limit
        self._history = list(board._history)
        self._invalidate()

    def copy(self) -> "Board":
        board = Board()
        board.copy_from(self)
        return board

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, square: Square) -> Piece:
        return Piece(int(self._grid[square.row, square.col]))

    @property
    def grid(self) -> np.ndarray:
        return self._grid.copy()

    @property
    def turn(self) -> Piece:
        return self._turn

    @property
    def move_limit(self) -> int:
        return self._move_limit

    @property
    def moves_made(self) -> int:
        return len(self._history)

    @property
    def history(self) -> Tuple[Move, ...]:
        return tuple(self._history)

    def piece_count(self, side: Piece) -> int:
        return int(np.count_nonzero(self._grid == int(side)))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def set(self, square: Square, piece: Piece, next_turn: Optional[Piece] = None) -> None:
        """Put PIECE on SQUARE and, if NEXT_TURN is given, hand it the move."""
        if next_turn is not None:
            self._turn = next_turn
        self._grid[square.row, square.col] = int(piece)
        self._invalidate()

    def set_move_limit(self, limit: int) -> None:
        """Set the per-side move limit; requires 2 * LIMIT > moves_made."""
        if 2 * limit <= self.moves_made:
            raise MoveLimitError(
                f"Move limit {limit} is already exceeded by {self.moves_made} moves made."
            )
        self._move_limit = limit
        self._result = None

    def make_move(self, move: Move) -> None:
        if not self.is_legal(move):
            raise IllegalMoveError(f"Illegal move {move} for {self._turn.full_name}.")
        if self.get(move.to_sq) != Piece.EMPTY:
            move = move.capture_move()
        elif move.capture:
            move = Move(move.from_sq, move.to_sq)
        mover = self._turn
        self.set(move.to_sq, mover, mover.opposite)
        self.set(move.from_sq, Piece.EMPTY)
        self._history.append(move)

    def retract(self) -> Move:
        """Undo the last move and return it."""
        if not self._history:
            raise RuntimeError("No moves to retract.")
        last = self._history.pop()
        mover = self._turn.opposite
        self.set(last.from_sq, mover, mover)
        if last.capture:
            self.set(last.to_sq, mover.opposite)
        else:
            self.set(last.to_sq, Piece.EMPTY)
        return last

    # ------------------------------------------------------------------
    # Move legality
    # ------------------------------------------------------------------
    def is_legal(self, move: Union[Move, Square], to_sq: Optional[Square] = None) -> bool:
        """True iff the move is legal for the side to move.

        Accepts either a Move or a (from, to) pair of squares; the capture
        flag of a Move is ignored.
        """
        if isinstance(move, Move):
            from_sq, to_sq = move.from_sq, move.to_sq
        else:
            from_sq = move
            if to_sq is None:
                raise TypeError("is_legal needs a Move or two squares.")
        return self._is_legal_for(from_sq, to_sq, self._turn)

    def legal_moves(self, side: Optional[Piece] = None) -> List[Move]:
        """All legal moves for SIDE (default: side to move) in square order."""
        if side is None:
            side = self._turn
        grid = self._grid
        moves: List[Move] = []
        for from_sq in ALL_SQUARES:
            if grid[from_sq.row, from_sq.col] != side:
                continue
            targets: List[Square] = []
            for direction in range(4):
                count = self.line_count(from_sq, direction)
                for heading in (direction, direction + 4):
                    ray = from_sq.ray(heading)
                    if len(ray) >= count and not self._blocked_along(ray, count, side):
                        targets.append(ray[count - 1])
            targets.sort(key=lambda square: square.index)
            moves.extend(Move(from_sq, to_sq) for to_sq in targets)
        return moves

    def line_count(self, square: Square, direction: int) -> int:
        """Pieces on the whole line through SQUARE along DIRECTION, both ways."""
        grid = self._grid
        count = 1 if grid[square.row, square.col] != Piece.EMPTY else 0
        for heading in (direction, direction + 4):
            for other in square.ray(heading):
                if grid[other.row, other.col] != Piece.EMPTY:
                    count += 1
        return count

    def is_blocked(self, from_sq: Square, to_sq: Square, side: Optional[Piece] = None) -> bool:
        """True if a SIDE piece moving FROM_SQ -> TO_SQ would be blocked.

        Blocked means the target holds a SIDE piece or an opposing piece
        sits strictly between the two squares.
        """
        if side is None:
            side = self._turn
        ray = from_sq.ray(from_sq.direction(to_sq))
        return self._blocked_along(ray, from_sq.distance(to_sq), side)

    def _is_legal_for(self, from_sq: Square, to_sq: Square, side: Piece) -> bool:
        if self._grid[from_sq.row, from_sq.col] != side:
            return False
        if not from_sq.is_valid_move(to_sq):
            return False
        direction = from_sq.direction(to_sq)
        distance = from_sq.distance(to_sq)
        if self.line_count(from_sq, direction) != distance:
            return False
        return not self._blocked_along(from_sq.ray(direction), distance, side)

    def _blocked_along(self, ray: Tuple[Square, ...], steps: int, side: Piece) -> bool:
        grid = self._grid
        target = ray[steps - 1]
        if grid[target.row, target.col] == side:
            return True
        opponent = side.opposite
        return any(grid[s.row, s.col] == opponent for s in ray[: steps - 1])

    # ------------------------------------------------------------------
    # Regions and results
    # ------------------------------------------------------------------
    def regions(self, side: Piece) -> Regions:
        if not self._regions_valid:
            self._regions = {
                _W: analyze_regions(self._grid, _W),
                _B: analyze_regions(self._grid, _B),
            }
            self._regions_valid = True
        return self._regions[side]

    def region_sizes(self, side: Piece) -> Tuple[int, ...]:
        return self.regions(side).sizes

    def pieces_contiguous(self, side: Piece) -> bool:
        return self.regions(side).contiguous

    def center_of_mass(self, side: Piece) -> Optional[Square]:
        return self.regions(side).center_of_mass

    @property
    def result(self) -> GameResult:
        if self._result is None:
            self._result = self._compute_result()
        return self._result

    def winner(self) -> Optional[Piece]:
        """Winning side, Piece.EMPTY for a draw, or None if the game continues."""
        return self.result.winner

    def game_over(self) -> bool:
        return self.result != GameResult.ONGOING

    def repeated_move(self) -> bool:
        """True if the last move returned to the square left three plies ago."""
        if len(self._history) < 3:
            return False
        return self._history[-1].to_sq == self._history[-3].from_sq

    def partial_scores(self, side: Piece) -> Dict[Hashable, float]:
        """Per-side memo of region-keyed heuristic scores owned by this board."""
        return self._partial_scores[side]

    def _compute_result(self) -> GameResult:
        white = self.pieces_contiguous(_W)
        black = self.pieces_contiguous(_B)
        if white and black:
            # Both connected at once: the side that just moved wins.
            return GameResult.win_for(self._turn.opposite)
        if white:
            return GameResult.WHITE_WIN
        if black:
            return GameResult.BLACK_WIN
        if 2 * self._move_limit <= self.moves_made:
            return GameResult.DRAW
        return GameResult.ONGOING

    def _invalidate(self) -> None:
        self._regions_valid = False
        self._regions: Dict[Piece, Regions] = {}
        self._result: Optional[GameResult] = None

    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._turn == other._turn and np.array_equal(self._grid, other._grid)

    def __hash__(self) -> int:
        return hash((self._grid.tobytes(), int(self._turn)))

    def __str__(self) -> str:
        lines = ["==="]
        for row in range(BOARD_SIZE - 1, -1, -1):
            lines.append("    " + " ".join(Piece(int(v)).abbrev for v in self._grid[row]))
        lines.append(f"Next move: {self._turn.full_name}")
        lines.append("===")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Board(turn={self._turn.name}, moves_made={self.moves_made}, result={self.result.value})"
