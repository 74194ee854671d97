"""Automated players."""

from .players import MachinePlayer, Player, RandomPlayer

__all__ = ["MachinePlayer", "Player", "RandomPlayer"]
