import numpy as np
import pytest

from loa.core import Board, Move, Piece, sq
from loa.heuristics import Evaluator
from loa.search import (
    INFINITY,
    RANDOM_OPENING,
    NoLegalMoveError,
    SearchConfig,
    SearchEngine,
)


def board_with(white=(), black=(), turn=Piece.WHITE, move_limit=30) -> Board:
    board = Board([[Piece.EMPTY] * 8 for _ in range(8)], turn, move_limit=move_limit)
    for square in white:
        board.set(square, Piece.WHITE)
    for square in black:
        board.set(square, Piece.BLACK)
    return board


def fixed_engine(depth: int, seed: int = 0) -> SearchEngine:
    return SearchEngine(config=SearchConfig(fixed_depth=depth), rng=np.random.default_rng(seed))


def test_depth_one_search_matches_static_evaluation():
    board = Board()
    evaluator = Evaluator()
    values = []
    for move in board.legal_moves():
        board.make_move(move)
        values.append(evaluator(board))
        board.retract()
    best = min(values)
    # Ties go to the later move.
    expected = board.legal_moves()[len(values) - 1 - values[::-1].index(best)]

    engine = SearchEngine(evaluator, SearchConfig(fixed_depth=1))
    result = engine.search(board)
    assert result.value == best
    assert result.move == expected
    assert result.depth == 1
    assert not result.random_opening


def test_search_leaves_the_board_untouched():
    board = Board()
    board.make_move(Move.parse("b1-b3"))
    snapshot = board.copy()
    fixed_engine(2).search(board)
    assert board == snapshot
    assert board.history == snapshot.history


def test_white_finds_connecting_move():
    board = board_with(
        white=[sq(0, 0), sq(2, 0)],
        black=[sq(7, 7), sq(7, 4)],
        turn=Piece.WHITE,
        move_limit=1,
    )
    result = fixed_engine(3).search(board)
    assert str(result.move) == "a1-b2"
    assert result.value == INFINITY
    assert result.forced_win
    # Deepening stops as soon as a win is proven.
    assert result.depth == 1


def test_black_finds_connecting_move():
    board = board_with(
        white=[sq(7, 7), sq(7, 4)],
        black=[sq(0, 0), sq(2, 0)],
        turn=Piece.BLACK,
    )
    result = fixed_engine(2).search(board)
    assert str(result.move) == "a1-b2"
    assert result.value == -INFINITY
    assert result.forced_win


def test_search_rejects_finished_games():
    board = board_with(white=[sq(0, 0), sq(0, 1)], black=[sq(7, 7), sq(5, 5)])
    with pytest.raises(ValueError):
        fixed_engine(1).search(board)


def test_search_without_legal_moves_raises():
    board = board_with(
        white=[sq(0, 0), sq(7, 7)],
        black=[sq(0, 1), sq(1, 0), sq(1, 1), sq(6, 7), sq(7, 6), sq(6, 6)],
    )
    assert board.legal_moves() == []
    assert not board.game_over()
    with pytest.raises(NoLegalMoveError):
        fixed_engine(1).search(board)


def test_opening_moves_are_random_but_seeded():
    board = Board()
    first = SearchEngine(rng=np.random.default_rng(3)).search(board)
    second = SearchEngine(rng=np.random.default_rng(3)).search(board)
    assert first.random_opening
    assert first.depth == 0
    assert first.move == second.move
    assert board.is_legal(first.move)


def test_choose_depth_opening_and_early_game():
    engine = SearchEngine()
    board = Board()
    assert engine.choose_depth(board) == RANDOM_OPENING
    board.make_move(Move.parse("b1-b3"))
    board.make_move(Move.parse("a2-c2"))
    assert engine.choose_depth(board) == 3


def test_choose_depth_clamps_to_remaining_plies():
    board = Board()
    board.set_move_limit(1)
    assert SearchEngine().choose_depth(board) == 2


def test_choose_depth_near_the_limit():
    engine = SearchEngine(config=SearchConfig(opening_moves=0, early_game_moves=0))
    board = Board(move_limit=4)
    assert engine.choose_depth(board) == 5


def test_choose_depth_deepens_when_branching_is_low():
    engine = SearchEngine(
        config=SearchConfig(
            opening_moves=0,
            early_game_moves=0,
            deepening_start=0,
            branching_threshold=40,
        )
    )
    board = Board()
    depths = [engine.choose_depth(board) for _ in range(5)]
    assert depths == [5, 6, 7, 8, 8]
    assert engine.current_depth == 8


def test_choose_depth_keeps_base_depth_with_wide_branching():
    engine = SearchEngine(
        config=SearchConfig(opening_moves=0, early_game_moves=0, deepening_start=0)
    )
    assert engine.choose_depth(Board()) == 4


def test_fixed_depth_overrides_schedule():
    engine = fixed_engine(2)
    assert engine.choose_depth(Board()) == 2


def test_search_statistics_accumulate():
    engine = fixed_engine(1)
    board = Board()
    engine.search(board)
    engine.search(board)
    assert engine.searches == 2
    assert engine.total_time >= 0.0
    assert engine.average_time == pytest.approx(engine.total_time / 2)
    assert engine.last_result is not None
    assert engine.last_result.nodes > 1


def test_choose_depth_deepens_after_a_repeated_move():
    config = SearchConfig(opening_moves=0, early_game_moves=0, deepening_start=3)
    board = Board()
    for text in ("b1-b3", "a2-c2", "b3-b1"):
        board.make_move(Move.parse(text))
    assert board.repeated_move()
    assert len(board.legal_moves()) > config.branching_threshold
    assert SearchEngine(config=config).choose_depth(board) == 5

    board.retract()
    board.make_move(Move.parse("b3-b5"))
    assert not board.repeated_move()
    assert len(board.legal_moves()) > config.branching_threshold
    assert SearchEngine(config=config).choose_depth(board) == 4


def test_reset_restores_base_depth():
    engine = SearchEngine(
        config=SearchConfig(opening_moves=0, early_game_moves=0, deepening_start=0, branching_threshold=40)
    )
    engine.choose_depth(Board())
    engine.choose_depth(Board())
    assert engine.current_depth == 6
    engine.reset()
    assert engine.current_depth == 4
