from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from loa.core import Board, GameResult, Move
from loa.heuristics import Evaluator

logger = logging.getLogger(__name__)

# A magnitude greater than any heuristic value.
INFINITY = 2**31 - 1
# Scores beyond this magnitude mean a forced win was found.
WINNING_VALUE = INFINITY - 20
# Depth returned by choose_depth when the move should be picked at random.
RANDOM_OPENING = -1

EvaluationFn = Callable[[Board], int]


class NoLegalMoveError(ValueError):
    pass


@dataclass
class SearchConfig:
    base_depth: int = 4
    max_depth: int = 8
    opening_moves: int = 2
    early_game_moves: int = 15
    early_game_depth: int = 3
    deepening_start: int = 30
    branching_threshold: int = 20
    near_limit_window: int = 10
    near_limit_min_depth: int = 5
    fixed_depth: Optional[int] = None


@dataclass
class SearchResult:
    move: Move
    value: int
    depth: int
    nodes: int
    elapsed: float
    random_opening: bool = False

    @property
    def forced_win(self) -> bool:
        return abs(self.value) > WINNING_VALUE


class SearchEngine:
    """Iterative-deepening alpha-beta search over a private copy of the board.

    Values are always expressed from White's point of view; ``sense`` is +1
    when the side being searched for maximises them (White) and -1 otherwise.
    """

    def __init__(
        self,
        evaluator: Optional[EvaluationFn] = None,
        config: Optional[SearchConfig] = None,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.evaluator = evaluator or Evaluator()
        self.config = config or SearchConfig()
        self.rng = rng or np.random.default_rng()
        self._depth = self.config.base_depth
        self._found_move: Optional[Move] = None
        self._nodes = 0
        self.total_time = 0.0
        self.searches = 0
        self.last_result: Optional[SearchResult] = None

    @property
    def current_depth(self) -> int:
        return self._depth

    @property
    def average_time(self) -> float:
        return self.total_time / max(1, self.searches)

    def reset(self) -> None:
        """Return the adaptive depth to its base value for a new game."""
        self._depth = self.config.base_depth
        self._found_move = None

    # ------------------------------------------------------------------
    def search_for_move(self, board: Board) -> Move:
        return self.search(board).move

    def search(self, board: Board) -> SearchResult:
        if board.game_over():
            raise ValueError("Cannot search for a move in a finished game.")
        legal = board.legal_moves()
        if not legal:
            raise NoLegalMoveError(f"{board.turn.full_name} has no legal move.")

        started = time.perf_counter()
        work = board.copy()
        self._found_move = None
        self._nodes = 0
        max_depth = self.choose_depth(board)
        sense = board.turn.sense
        logger.debug(
            "Searching for %s at move %d, depth %d", board.turn.full_name, board.moves_made, max_depth
        )

        if max_depth < 1:
            move = legal[int(self.rng.integers(len(legal)))]
            work.make_move(move)
            value = self.evaluator(work)
            completed = 0
        else:
            value = 0
            completed = 0
            for depth in range(1, max_depth + 1):
                value = self.find_move(work, depth, True, sense, -INFINITY, INFINITY)
                completed = depth
                logger.debug(
                    "depth %d: best %s value %d after %d nodes", depth, self._found_move, value, self._nodes
                )
                if sense * value > WINNING_VALUE:
                    break
            move = self._found_move

        elapsed = time.perf_counter() - started
        self.total_time += elapsed
        self.searches += 1
        result = SearchResult(
            move=move,
            value=value,
            depth=completed,
            nodes=self._nodes,
            elapsed=elapsed,
            random_opening=max_depth < 1,
        )
        self.last_result = result
        logger.info(
            "%s plays %s (depth %d, value %d, %d nodes, %.3fs)",
            board.turn.full_name,
            move,
            completed,
            value,
            self._nodes,
            elapsed,
        )
        return result

    def find_move(
        self,
        board: Board,
        depth: int,
        save_move: bool,
        sense: int,
        alpha: int,
        beta: int,
    ) -> int:
        """Return the minimax value of BOARD searched DEPTH plies deep.

        The chosen move is recorded for the caller only when SAVE_MOVE is set.
        Finished games score +-INFINITY for a win and 0 for a draw; a side
        with no legal move is scored statically.
        """
        self._nodes += 1
        result = board.result
        if result != GameResult.ONGOING:
            if result == GameResult.DRAW:
                return 0
            return INFINITY if result == GameResult.WHITE_WIN else -INFINITY
        if depth == 0:
            return self.evaluator(board)

        legal = board.legal_moves()
        if not legal:
            return self.evaluator(board)

        best_value = -INFINITY
        best_move = legal[0]
        for move in legal:
            board.make_move(move)
            current = sense * self.find_move(board, depth - 1, False, -sense, alpha, beta)
            board.retract()

            if current >= best_value:
                best_move = move
                best_value = current
                if sense == -1:
                    beta = min(beta, -current)
                else:
                    alpha = max(alpha, current)
                if beta <= alpha:
                    break
        if save_move:
            self._found_move = best_move
        return sense * best_value

    def choose_depth(self, board: Board) -> int:
        """Search depth for BOARD, or RANDOM_OPENING for an unsearched move."""
        cfg = self.config
        if cfg.fixed_depth is not None:
            return cfg.fixed_depth
        made = board.moves_made
        remaining = 2 * board.move_limit - made
        if self._depth >= remaining:
            return remaining
        if made < cfg.opening_moves:
            return RANDOM_OPENING
        if made < cfg.early_game_moves:
            return cfg.early_game_depth
        if remaining < cfg.near_limit_window:
            return max(self._depth, cfg.near_limit_min_depth)
        if made >= cfg.deepening_start and self._depth < cfg.max_depth:
            if board.repeated_move() or len(board.legal_moves()) <= cfg.branching_threshold:
                self._depth += 1
        return self._depth
