"""
heuropt: a generic optimization framework.

Describe a problem (solution space plus scoring function) and search for good
solutions with neighborhood-based local search or the BRKGA genetic
metaheuristic, under composable stop criteria.
"""

from .core import (
    Objective,
    Comparison,
    Evaluation,
    Problem,
    compare_values,
    StopCriterion,
    IterCriterion,
    TimeCriterion,
    QualityCriterion,
    ImprovementCriterion,
    CriterionCombiner,
    Solver,
    IterHook,
    EmptyHook,
    LoggingHook,
    EliteSet,
)
from .neighborhood import (
    Move,
    Neighborhood,
    FirstImprovement,
    BestImprovement,
    Finite,
    LocalSearch,
    HillWalking,
    HillClimbing,
    SteepestAscent,
    LocalSearchSolver,
)
from .genetic import Decoder, Member, Population, Brkga, BrkgaParams

__version__ = "0.1.0"

__all__ = [
    "Objective",
    "Comparison",
    "Evaluation",
    "Problem",
    "compare_values",
    "StopCriterion",
    "IterCriterion",
    "TimeCriterion",
    "QualityCriterion",
    "ImprovementCriterion",
    "CriterionCombiner",
    "Solver",
    "IterHook",
    "EmptyHook",
    "LoggingHook",
    "EliteSet",
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
    "Decoder",
    "Member",
    "Population",
    "Brkga",
    "BrkgaParams",
]
