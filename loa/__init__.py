"""Lines of Action game engine."""

from . import core, env, evaluation, heuristics, players, search
from .core import (
    Board,
    GameResult,
    IllegalMoveError,
    Move,
    MoveLimitError,
    Piece,
    Square,
    parse_square,
    sq,
)
from .config import EngineConfig, config_from_dict, load_config
from .env import LinesOfActionEnv
from .evaluation import GameRecord, MatchResult, play_game, play_match
from .heuristics import Evaluator, HeuristicWeights, heuristic_value
from .players import MachinePlayer, Player, RandomPlayer
from .search import NoLegalMoveError, SearchConfig, SearchEngine, SearchResult

__all__ = [
    "core",
    "env",
    "evaluation",
    "heuristics",
    "players",
    "search",
    "Board",
    "GameResult",
    "IllegalMoveError",
    "Move",
    "MoveLimitError",
    "Piece",
    "Square",
    "parse_square",
    "sq",
    "EngineConfig",
    "config_from_dict",
    "load_config",
    "LinesOfActionEnv",
    "GameRecord",
    "MatchResult",
    "play_game",
    "play_match",
    "Evaluator",
    "HeuristicWeights",
    "heuristic_value",
    "MachinePlayer",
    "Player",
    "RandomPlayer",
    "NoLegalMoveError",
    "SearchConfig",
    "SearchEngine",
    "SearchResult",
]
