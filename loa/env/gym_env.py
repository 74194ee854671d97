from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from loa.core import (
    ACTION_VECTOR_SIZE,
    BOARD_SIZE,
    DEFAULT_MOVE_LIMIT,
    Board,
    GameResult,
    IllegalMoveError,
    Piece,
    decode_move,
    encode_move,
)
from loa.search import SearchEngine

BOARD_CHANNELS = 2  # white pieces, black pieces
AUX_VECTOR_SIZE = 2  # side to move one-hot


def build_board_tensor(board: Board) -> np.ndarray:
    """Return piece planes with shape (2, 8, 8), indexed [channel, row, col]."""
    grid = board.grid
    tensor = np.zeros((BOARD_CHANNELS, BOARD_SIZE, BOARD_SIZE), dtype=np.float32)
    tensor[0] = grid == int(Piece.WHITE)
    tensor[1] = grid == int(Piece.BLACK)
    return tensor


def build_aux_vector(board: Board) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[int(board.turn) - 1] = 1.0
    return aux


class LinesOfActionEnv(gym.Env):
    """Game controller surface over an authoritative Board.

    Actions are move indices as produced by ``encode_move``. Rewards are
    +1 when White wins, -1 when Black wins and 0 otherwise.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        move_limit: int = DEFAULT_MOVE_LIMIT,
        engine: Optional[SearchEngine] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._move_limit = move_limit
        self._engine = engine
        self.render_mode = render_mode

        board_shape = (BOARD_CHANNELS, BOARD_SIZE, BOARD_SIZE)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(ACTION_VECTOR_SIZE)

        self._board = Board(move_limit=move_limit)

    @property
    def board(self) -> Board:
        return self._board.copy()

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        move_limit = options.get("move_limit", self._move_limit) if options else self._move_limit
        self._board = Board(move_limit=move_limit)
        if self._engine is not None:
            self._engine.reset()
            if seed is not None:
                self._engine.rng = np.random.default_rng(seed)
        return self._build_observation(), self._build_info()

    def step(self, action_index: int):
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")
        if self._board.game_over():
            raise ValueError("Cannot apply an action to a finished game.")

        move = decode_move(int(action_index))
        if not self._board.is_legal(move):
            raise IllegalMoveError(f"Illegal move {move} for {self._board.turn.full_name}.")
        self._board.make_move(move)

        result = self._board.result
        terminated = result != GameResult.ONGOING
        return self._build_observation(), self._compute_reward(result), terminated, False, self._build_info()

    def undo(self):
        """Retract the most recent move."""
        self._board.retract()
        return self._build_observation(), self._build_info()

    def set_move_limit(self, limit: int) -> None:
        self._board.set_move_limit(limit)
        self._move_limit = limit

    def best_action(self) -> int:
        if self._engine is None:
            self._engine = SearchEngine()
        return encode_move(self._engine.search_for_move(self._board))

    def legal_action_mask(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        for move in self._board.legal_moves():
            mask[encode_move(move)] = 1
        return mask

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return str(self._board)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_observation(self) -> Dict[str, np.ndarray]:
        return {"board": build_board_tensor(self._board), "aux": build_aux_vector(self._board)}

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "turn": self._board.turn,
            "moves_made": self._board.moves_made,
            "result": self._board.result,
        }

    def _compute_reward(self, result: GameResult) -> float:
        if result == GameResult.WHITE_WIN:
            return 1.0
        if result == GameResult.BLACK_WIN:
            return -1.0
        return 0.0
