import numpy as np
import pytest

from loa.core import INITIAL_PIECES, Board, Piece, sq
from loa.heuristics import (
    Evaluator,
    HeuristicWeights,
    board_position,
    center_of_mass_distance,
    concentration,
    connections,
    distribution,
    heuristic_value,
    mobility,
    potential,
    stronghold,
    walled,
)


def board_with(white=(), black=(), turn=Piece.WHITE) -> Board:
    board = Board([[Piece.EMPTY] * 8 for _ in range(8)], turn)
    for square in white:
        board.set(square, Piece.WHITE)
    for square in black:
        board.set(square, Piece.BLACK)
    return board


def test_initial_position_is_symmetric():
    assert heuristic_value(Board()) == -1
    assert heuristic_value(Board(INITIAL_PIECES, Piece.WHITE)) == 1


def test_initial_mobility():
    board = Board()
    assert mobility(board, Piece.BLACK) == pytest.approx(31.0)
    assert mobility(board, Piece.WHITE) == pytest.approx(31.0)


def test_initial_white_terms():
    regions = Board().regions(Piece.WHITE)
    assert concentration(regions) == pytest.approx(1 / 28)
    assert board_position(regions) == pytest.approx(-20.0)
    assert center_of_mass_distance(regions) == 0
    assert connections(regions) == pytest.approx(20 / 12)
    assert distribution(regions) == 16
    assert stronghold(regions) == 0


def test_stronghold_counts_each_pairing_once():
    board = board_with(white=[sq(3, 3), sq(4, 3), sq(3, 4), sq(4, 4)])
    assert stronghold(board.regions(Piece.WHITE)) == 5


def test_stronghold_ignores_small_clusters():
    board = board_with(white=[sq(3, 3), sq(4, 4)])
    assert stronghold(board.regions(Piece.WHITE)) == 0


def test_centroid_on_edge_is_penalised():
    board = board_with(white=[sq(0, 0), sq(0, 1)])
    assert center_of_mass_distance(board.regions(Piece.WHITE)) == 10


def test_walled_corner_piece():
    board = board_with(white=[sq(1, 1), sq(0, 1)], black=[sq(0, 0)])
    assert walled(board, board.regions(Piece.BLACK)) == 5
    assert walled(board, board.regions(Piece.WHITE)) == 0


def test_walled_edge_piece_needs_two_neighbours():
    board = board_with(white=[sq(2, 1)], black=[sq(3, 0)])
    assert walled(board, board.regions(Piece.BLACK)) == 0
    board.set(sq(3, 1), Piece.WHITE)
    # One diagonal and one frontal neighbour.
    assert walled(board, board.regions(Piece.BLACK)) == 3


def test_potential_measures_distance_to_largest_cluster():
    board = board_with(white=[sq(0, 0), sq(1, 0), sq(7, 7)])
    assert potential(board, board.regions(Piece.WHITE)) == pytest.approx(6.5)
    board.set(sq(4, 4), Piece.BLACK)
    assert potential(board, board.regions(Piece.WHITE)) == pytest.approx(7.75)


def test_potential_is_zero_for_a_single_cluster():
    board = board_with(white=[sq(0, 0), sq(1, 0)])
    assert potential(board, board.regions(Piece.WHITE)) == 0.0


def test_partial_scores_are_memoised_per_partition():
    board = Board()
    evaluator = Evaluator()
    first = evaluator.partial_score(board, Piece.WHITE)
    cache = board.partial_scores(Piece.WHITE)
    assert len(cache) == 1
    assert evaluator.partial_score(board, Piece.WHITE) == first

    Evaluator(HeuristicWeights(connections=0.0)).partial_score(board, Piece.WHITE)
    assert len(cache) == 2


def test_weights_change_the_value():
    board = Board()
    board.set(sq(1, 1), Piece.WHITE)
    default = Evaluator()(board)
    no_position = Evaluator(HeuristicWeights(board_position=0.0))(board)
    assert isinstance(default, int)
    assert default != no_position


def test_value_is_truncated_to_int():
    board = board_with(white=[sq(3, 3), sq(5, 5)], black=[sq(0, 7), sq(7, 0)])
    value = heuristic_value(board)
    assert isinstance(value, int)


def test_breakdown_reports_every_term():
    breakdown = Evaluator().breakdown(Board(), Piece.BLACK)
    assert set(breakdown) == {
        "mobility",
        "concentration",
        "board_position",
        "center_of_mass",
        "walled",
        "stronghold",
        "connections",
        "distribution",
        "potential",
    }
    assert breakdown["mobility"] == pytest.approx(31.0)
    assert all(np.isfinite(value) for value in breakdown.values())


def test_concentration_peaks_for_a_gathered_side():
    board = board_with(white=[sq(3, 3)])
    assert concentration(board.regions(Piece.WHITE)) == 1.0
    board = board_with(white=[sq(3, 3), sq(4, 4)])
    assert concentration(board.regions(Piece.WHITE)) == 1.0
