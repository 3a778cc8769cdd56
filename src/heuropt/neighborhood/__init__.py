"""
Neighborhood-based local search for heuropt.
"""

from .base import Move, Neighborhood
from .explorers import FirstImprovement, BestImprovement, Finite
from .local_search import (
    LocalSearch,
    HillWalking,
    HillClimbing,
    SteepestAscent,
    LocalSearchSolver,
    go_to_local_optima,
)

__all__ = [
    "Move",
    "Neighborhood",
    "FirstImprovement",
    "BestImprovement",
    "Finite",
    "LocalSearch",
    "HillWalking",
    "HillClimbing",
    "SteepestAscent",
    "LocalSearchSolver",
    "go_to_local_optima",
]
