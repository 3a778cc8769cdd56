"""
Core abstractions of heuropt.

This package defines the problem and evaluation model, stop criteria, the
generic solver loop with its hooks, and the elite set.
"""

from .problem import (
    Objective,
    Comparison,
    Evaluation,
    Problem,
    compare_values,
)

from .stop_criterion import (
    StopCriterion,
    IterCriterion,
    TimeCriterion,
    QualityCriterion,
    ImprovementCriterion,
    CriterionCombiner,
)

from .solver import (
    Solver,
    IterHook,
    EmptyHook,
    LoggingHook,
)

from .elite_set import EliteSet

__all__ = [
    # Evaluation model
    "Objective",
    "Comparison",
    "Evaluation",
    "Problem",
    "compare_values",

    # Stop criteria
    "StopCriterion",
    "IterCriterion",
    "TimeCriterion",
    "QualityCriterion",
    "ImprovementCriterion",
    "CriterionCombiner",

    # Solver loop
    "Solver",
    "IterHook",
    "EmptyHook",
    "LoggingHook",

    # Components
    "EliteSet",
]
