"""Gymnasium environment wrapping the game controller surface."""

from .gym_env import (
    AUX_VECTOR_SIZE,
    BOARD_CHANNELS,
    LinesOfActionEnv,
    build_aux_vector,
    build_board_tensor,
)

__all__ = [
    "AUX_VECTOR_SIZE",
    "BOARD_CHANNELS",
    "LinesOfActionEnv",
    "build_aux_vector",
    "build_board_tensor",
]
