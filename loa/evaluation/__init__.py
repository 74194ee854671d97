"""Automated games between players."""

from .match import GameRecord, MatchResult, play_game, play_match

__all__ = ["GameRecord", "MatchResult", "play_game", "play_match"]
