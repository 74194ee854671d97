from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

import numpy as np

from .geometry import ALL_SQUARES, BOARD_SIZE, Square, sq
from .state import Piece

Cluster = FrozenSet[Square]


@dataclass(frozen=True)
class Regions:
    """Connected clusters of one side's pieces, largest first.

    Clusters of equal size are ordered by their lowest square index.
    """

    side: Piece
    clusters: Tuple[Cluster, ...]

    @property
    def sizes(self) -> Tuple[int, ...]:
        return tuple(len(cluster) for cluster in self.clusters)

    @property
    def piece_count(self) -> int:
        return sum(len(cluster) for cluster in self.clusters)

    @property
    def contiguous(self) -> bool:
        return len(self.clusters) == 1

    @property
    def key(self) -> Tuple[Tuple[int, ...], ...]:
        """Hashable identity of the partition, used to memoise scores."""
        return tuple(tuple(sorted(s.index for s in cluster)) for cluster in self.clusters)

    def squares(self) -> List[Square]:
        return [square for cluster in self.clusters for square in cluster]

    @property
    def center_of_mass(self) -> Optional[Square]:
        """Square at the truncated mean column and row, None without pieces."""
        count = self.piece_count
        if count == 0:
            return None
        coords = np.array([(s.col, s.row) for s in self.squares()], dtype=np.int64)
        col, row = coords.sum(axis=0) // count
        return sq(int(col), int(row))


def analyze_regions(grid: np.ndarray, side: Piece) -> Regions:
    """Partition SIDE's pieces on GRID (indexed [row, col]) into clusters."""
    visited = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=bool)
    clusters: List[Cluster] = []
    for start in ALL_SQUARES:
        if visited[start.row, start.col] or grid[start.row, start.col] != side:
            continue
        visited[start.row, start.col] = True
        stack = [start]
        members = []
        while stack:
            square = stack.pop()
            members.append(square)
            for neighbour in square.adjacent():
                if visited[neighbour.row, neighbour.col]:
                    continue
                if grid[neighbour.row, neighbour.col] == side:
                    visited[neighbour.row, neighbour.col] = True
                    stack.append(neighbour)
        clusters.append(frozenset(members))
    clusters.sort(key=lambda cluster: (-len(cluster), min(s.index for s in cluster)))
    return Regions(side=side, clusters=tuple(clusters))
