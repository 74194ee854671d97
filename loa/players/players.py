from __future__ import annotations

from copy import deepcopy
from typing import Optional

import numpy as np

from loa.core import Board, Move
from loa.search import NoLegalMoveError, SearchEngine


class Player:
    """Chooses moves for the side to move on a board."""

    def choose_move(self, board: Board) -> Move:
        raise NotImplementedError

    def spawn(self, seed: Optional[int] = None) -> "Player":
        """Return a fresh copy of this player, e.g. for a new game."""
        return self


class RandomPlayer(Player):
    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def choose_move(self, board: Board) -> Move:
        legal = board.legal_moves()
        if not legal:
            raise NoLegalMoveError(f"{board.turn.full_name} has no legal move.")
        return legal[int(self.rng.integers(len(legal)))]

    def spawn(self, seed: Optional[int] = None) -> "RandomPlayer":
        return RandomPlayer(np.random.default_rng(seed))


class MachinePlayer(Player):
    def __init__(self, engine: Optional[SearchEngine] = None) -> None:
        self.engine = engine or SearchEngine()

    def choose_move(self, board: Board) -> Move:
        return self.engine.search_for_move(board)

    def spawn(self, seed: Optional[int] = None) -> "MachinePlayer":
        engine = SearchEngine(
            self.engine.evaluator,
            config=deepcopy(self.engine.config),
            rng=np.random.default_rng(seed),
        )
        return MachinePlayer(engine)
