"""Game-tree search for automated players."""

from .alphabeta import (
    INFINITY,
    RANDOM_OPENING,
    WINNING_VALUE,
    NoLegalMoveError,
    SearchConfig,
    SearchEngine,
    SearchResult,
)

__all__ = [
    "INFINITY",
    "RANDOM_OPENING",
    "WINNING_VALUE",
    "NoLegalMoveError",
    "SearchConfig",
    "SearchEngine",
    "SearchResult",
]
