"""Static evaluation of Lines of Action positions."""

from .evaluator import (
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

__all__ = [
    "Evaluator",
    "HeuristicWeights",
    "board_position",
    "center_of_mass_distance",
    "concentration",
    "connections",
    "distribution",
    "heuristic_value",
    "mobility",
    "potential",
    "stronghold",
    "walled",
]
