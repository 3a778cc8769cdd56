"""
Problem abstraction and evaluation model for heuropt.

This module defines the objective direction of a problem, the three-way
Comparison used everywhere a "better" decision is made, and the Evaluation
class, which associates a solution with its value.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

S = TypeVar("S")
V = TypeVar("V")


class Objective(Enum):
    """Whether a problem seeks to minimize or maximize its scoring function."""

    MIN = "min"
    MAX = "max"


class Comparison(Enum):
    """Quality based comparison of a value against another one."""

    BETTER = "better"
    EQUAL = "equal"
    WORSE = "worse"


def compare_values(objective: Objective, a: Any, b: Any) -> Comparison:
    """
    Compare two raw values according to the objective direction.

    For minimization a smaller value is better; for maximization a larger one is.
    Values must be totally ordered (no NaN).

    Args:
        objective: Direction of the problem
        a: The value being judged
        b: The reference value

    Returns:
        Comparison of `a` relative to `b`
    """
    if a == b:
        return Comparison.EQUAL

    if objective is Objective.MIN:
        return Comparison.BETTER if a < b else Comparison.WORSE

    return Comparison.BETTER if a > b else Comparison.WORSE


@dataclass(frozen=True)
class Evaluation(Generic[S, V]):
    """
    Association of a solution with its value for a particular problem.

    Evaluations are immutable. They are produced by `Problem.evaluate` or by a
    move which computes the new value incrementally, in which case the move
    must stay consistent with the problem's scoring function.

    Attributes:
        solution: The candidate solution
        value: Its score
        objective: Direction used when comparing against other evaluations
    """

    solution: S
    value: V
    objective: Objective = field(compare=False)

    def compare(self, other: "Evaluation") -> Comparison:
        """Define if `self` is better, equal or worse than `other`."""
        return compare_values(self.objective, self.value, other.value)

    def compare_value(self, other: V) -> Comparison:
        """Compare `self` with the raw value `other`."""
        return compare_values(self.objective, self.value, other)

    def with_value(self, solution: S, value: V) -> "Evaluation":
        """Build a new evaluation sharing this one's objective."""
        return Evaluation(solution, value, self.objective)

    def __repr__(self) -> str:
        return f"Evaluation(value={self.value!r}, solution={self.solution!r})"


class Problem(ABC, Generic[S, V]):
    """
    Base class for every optimization problem.

    Subclasses set the class attribute `objective` and implement `score`.

    Example:
        ```python
        class Knapsack(Problem):
            objective = Objective.MAX

            def __init__(self, values, weights, capacity):
                ...

            def score(self, solution):
                return sum(v for v, chosen in zip(self.values, solution) if chosen)
        ```
    """

    objective: Objective = Objective.MIN

    @abstractmethod
    def score(self, solution: S) -> V:
        """
        Associate a value to a solution.

        Args:
            solution: Candidate solution to score

        Returns:
            The solution's value, which must be totally ordered
        """

    def evaluate(self, solution: S) -> Evaluation[S, V]:
        """Score `solution` and wrap it into an Evaluation."""
        return Evaluation(solution, self.score(solution), self.objective)

    def compare(self, a: V, b: V) -> Comparison:
        """Compare two raw values with this problem's objective."""
        return compare_values(self.objective, a, b)
