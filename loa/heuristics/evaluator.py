from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from loa.core import NUM_SQUARES, Board, Piece, Regions, Square, center_distance

PARTIAL_CACHE_LIMIT = 4096
EDGE_CENTROID_PENALTY = 10
POTENTIAL_BLOCK_PENALTY = 5
CONCENTRATION_FREE_PIECES = 9


@dataclass(frozen=True)
class HeuristicWeights:
    turn: float = 1.0
    mobility: float = 20.0
    concentration: float = 50000.0
    board_position: float = 5.0
    center_of_mass: float = 1.0
    walled: float = 2.0
    stronghold: float = 8.0
    connections: float = 2.5
    distribution: float = 0.0
    potential: float = 0.0


def mobility(board: Board, side: Piece) -> float:
    """Weighted count of SIDE's legal moves.

    Captures count double; moves onto the edge count half, and a quarter
    when they also start on the edge.
    """
    opponent = side.opposite
    total = 0.0
    for move in board.legal_moves(side):
        weight = 1.0
        if board.get(move.to_sq) == opponent:
            weight *= 2
        if move.to_sq.is_edge:
            weight *= 0.5
            if move.from_sq.is_edge:
                weight *= 0.5
        total += weight
    return total


def concentration(regions: Regions) -> float:
    squares = regions.squares()
    if not squares:
        return 0.0
    com = regions.center_of_mass
    pieces = len(squares)
    distance = sum(square.distance(com) for square in squares)
    outer = max(pieces - CONCENTRATION_FREE_PIECES, 0)
    distance -= pieces - 1 + outer
    return 1.0 / max(distance, 1)


def board_position(regions: Regions) -> float:
    squares = regions.squares()
    if not squares:
        return 0.0
    score = 0
    for square in squares:
        if square.is_corner:
            score -= 8
        elif square.is_edge:
            score -= 2
        else:
            score += {0: 5, 1: 3}.get(center_distance(square), 1)
    return score * 10 / len(squares)


def center_of_mass_distance(regions: Regions) -> int:
    com = regions.center_of_mass
    if com is None:
        return 0
    if com.is_edge:
        return EDGE_CENTROID_PENALTY
    return center_distance(com)


def stronghold(regions: Regions) -> int:
    """Credit adjacent pairs and triplets around pieces near the centroid.

    Each (piece, neighbour) pairing is credited at most once.
    """
    com = regions.center_of_mass
    if com is None:
        return 0
    consumed = np.zeros((NUM_SQUARES, NUM_SQUARES), dtype=bool)
    score = 0
    for cluster in regions.clusters:
        if len(cluster) <= 2:
            continue
        for square in sorted(cluster, key=lambda s: s.index):
            if square.distance(com) > 2:
                continue
            for direction in range(0, 8, 2):
                triple = [square.move_dest(direction + k, 1) for k in range(3)]
                if any(neighbour is None for neighbour in triple):
                    continue
                if any(consumed[square.index, neighbour.index] for neighbour in triple):
                    continue
                members = [neighbour for neighbour in triple if neighbour in cluster]
                if len(members) == 3:
                    score += 5
                elif len(members) == 2:
                    score += 3
                else:
                    continue
                for neighbour in members:
                    consumed[square.index, neighbour.index] = True
                    consumed[neighbour.index, square.index] = True
    return score


def connections(regions: Regions) -> float:
    score = 0
    pieces = 0
    for cluster in regions.clusters:
        if len(cluster) > 2:
            score += sum(1 for square in cluster for other in square.adjacent() if other in cluster)
        elif len(cluster) == 2:
            score += 2
        pieces += len(cluster)
    return score / pieces if pieces else 0.0


def walled(board: Board, regions: Regions) -> int:
    """Score opposing pieces pressing against SIDE's corner and edge pieces."""
    opponent = regions.side.opposite
    score = 0
    for square in regions.squares():
        if square.is_corner:
            for adj in square.adjacent():
                if board.get(adj) == opponent:
                    score += 4 if _is_diagonal(square, adj) else 1
        elif square.is_edge:
            diagonal = front = along_edge = 0
            for adj in square.adjacent():
                if board.get(adj) != opponent:
                    continue
                if _is_diagonal(square, adj):
                    diagonal += 1
                elif not adj.is_edge:
                    front += 1
                else:
                    along_edge += 1
            if diagonal + front + along_edge > 1:
                score += diagonal + front
                score += 6 if diagonal + along_edge == 4 else diagonal + along_edge
    return score


def distribution(regions: Regions) -> int:
    squares = regions.squares()
    if not squares:
        return 0
    coords = np.array([(s.col, s.row) for s in squares], dtype=np.int64)
    span = coords.max(axis=0) - coords.min(axis=0) + 1
    return NUM_SQUARES - int(span[0] * span[1])


def potential(board: Board, regions: Regions) -> float:
    """Average effort to bring the smaller clusters next to the largest one."""
    if len(regions.clusters) < 2:
        return 0.0
    side = regions.side
    largest = regions.clusters[0]
    approach = {adj for square in largest for adj in square.adjacent() if board.get(adj) != side}
    if not approach:
        return 0.0
    total = 0.0
    for start in sorted(approach, key=lambda s: s.index):
        for cluster in regions.clusters[1:]:
            effort = 0.0
            for target in cluster:
                effort += start.distance(target)
                if start.is_valid_move(target) and _obstructed(board, start, target, side):
                    effort += POTENTIAL_BLOCK_PENALTY
            total += effort / (len(approach) * len(cluster))
    return total


def _is_diagonal(a: Square, b: Square) -> bool:
    return a.row != b.row and a.col != b.col


def _obstructed(board: Board, start: Square, target: Square, side: Piece) -> bool:
    opponent = side.opposite
    between = start.ray(start.direction(target))[: start.distance(target) - 1]
    return any(board.get(square) == opponent for square in between)


class Evaluator:
    """Static position evaluation, positive values favouring White.

    Terms that depend only on one side's own clusters are memoised on the
    board, keyed by that side's region partition.
    """

    def __init__(self, weights: Optional[HeuristicWeights] = None) -> None:
        self.weights = weights or HeuristicWeights()

    def __call__(self, board: Board) -> int:
        return self.heuristic_value(board)

    def heuristic_value(self, board: Board) -> int:
        w = self.weights
        white = board.regions(Piece.WHITE)
        black = board.regions(Piece.BLACK)
        value = w.turn * board.turn.sense
        value += self.partial_score(board, Piece.WHITE) - self.partial_score(board, Piece.BLACK)
        value += w.mobility * (mobility(board, Piece.WHITE) - mobility(board, Piece.BLACK))
        value += w.walled * (walled(board, black) - walled(board, white))
        if w.potential:
            value -= w.potential * (potential(board, white) - potential(board, black))
        return int(value)

    def partial_score(self, board: Board, side: Piece) -> float:
        regions = board.regions(side)
        cache = board.partial_scores(side)
        key = (regions.key, self.weights)
        cached = cache.get(key)
        if cached is not None:
            return cached
        if len(cache) >= PARTIAL_CACHE_LIMIT:
            cache.clear()
        score = self._own_terms(regions)
        cache[key] = score
        return score

    def breakdown(self, board: Board, side: Piece) -> Dict[str, float]:
        """Unweighted value of every term for SIDE."""
        regions = board.regions(side)
        return {
            "mobility": mobility(board, side),
            "concentration": concentration(regions),
            "board_position": board_position(regions),
            "center_of_mass": float(center_of_mass_distance(regions)),
            "walled": float(walled(board, regions)),
            "stronghold": float(stronghold(regions)),
            "connections": connections(regions),
            "distribution": float(distribution(regions)),
            "potential": potential(board, regions),
        }

    def _own_terms(self, regions: Regions) -> float:
        w = self.weights
        score = w.concentration * concentration(regions)
        score += w.board_position * board_position(regions)
        score -= w.center_of_mass * center_of_mass_distance(regions)
        score += w.stronghold * stronghold(regions)
        score += w.connections * connections(regions)
        if w.distribution:
            score += w.distribution * distribution(regions)
        return score


def heuristic_value(board: Board, weights: Optional[HeuristicWeights] = None) -> int:
    return Evaluator(weights).heuristic_value(board)
