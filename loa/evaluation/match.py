from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from loa.core import DEFAULT_MOVE_LIMIT, Board, GameResult, Move, Piece
from loa.players import Player

logger = logging.getLogger(__name__)


@dataclass
class GameRecord:
    result: GameResult
    moves: List[Move] = field(default_factory=list)
    stalemate: bool = False

    @property
    def length(self) -> int:
        return len(self.moves)


@dataclass
class MatchResult:
    games_played: int
    white_wins: int
    black_wins: int
    draws: int
    average_length: float
    records: List[GameRecord] = field(default_factory=list)

    def winrate_white(self) -> float:
        return self.white_wins / max(1, self.games_played)

    def winrate_black(self) -> float:
        return self.black_wins / max(1, self.games_played)


def play_game(
    white: Player,
    black: Player,
    *,
    board: Optional[Board] = None,
    move_limit: int = DEFAULT_MOVE_LIMIT,
) -> GameRecord:
    """Play one game to completion, starting from BOARD or the standard layout.

    A side left without a legal move ends the game as a draw.
    """
    board = board.copy() if board is not None else Board(move_limit=move_limit)
    players = {Piece.WHITE: white, Piece.BLACK: black}
    while not board.game_over():
        if not board.legal_moves():
            logger.warning("%s has no legal move at move %d", board.turn.full_name, board.moves_made)
            return GameRecord(GameResult.DRAW, list(board.history), stalemate=True)
        move = players[board.turn].choose_move(board)
        board.make_move(move)
    return GameRecord(board.result, list(board.history))


def play_match(
    white: Player,
    black: Player,
    *,
    games: int,
    move_limit: int = DEFAULT_MOVE_LIMIT,
    seed: Optional[int] = None,
) -> MatchResult:
    white_wins = 0
    black_wins = 0
    draws = 0
    total_moves = 0
    records: List[GameRecord] = []

    for game_index in range(games):
        game_seed = None if seed is None else seed + 2 * game_index
        record = play_game(
            white.spawn(game_seed),
            black.spawn(None if game_seed is None else game_seed + 1),
            move_limit=move_limit,
        )
        records.append(record)
        total_moves += record.length
        if record.result == GameResult.WHITE_WIN:
            white_wins += 1
        elif record.result == GameResult.BLACK_WIN:
            black_wins += 1
        else:
            draws += 1
        logger.info("game %d: %s after %d moves", game_index + 1, record.result.value, record.length)

    return MatchResult(
        games_played=games,
        white_wins=white_wins,
        black_wins=black_wins,
        draws=draws,
        average_length=total_moves / max(1, games),
        records=records,
    )
