"""
Move and Neighborhood abstractions for local search.

A Neighborhood represents the surroundings of the current solution and acts
like a stateful generator of Moves to neighbors inside it.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..core.problem import Comparison, Evaluation, Problem, compare_values


class Move(ABC):
    """A candidate transformation of a solution together with its resulting value."""

    @abstractmethod
    def apply(self, problem: Problem, evaluation: Evaluation) -> Evaluation:
        """
        Apply the move, producing the evaluation of the neighbor.

        Args:
            problem: Problem being solved
            evaluation: Current evaluation, handed over to the move

        Returns:
            The neighbor's evaluation, whose value must match what `value`
            reports for the same input
        """

    @abstractmethod
    def value(self, problem: Problem, evaluation: Evaluation) -> Any:
        """Value the neighbor would have, without changing anything."""

    def compare(self, problem: Problem, evaluation: Evaluation) -> Comparison:
        """Compare the neighbor's value with the current evaluation's."""
        return compare_values(problem.objective, self.value(problem, evaluation), evaluation.value)


class Neighborhood(ABC):
    """Generator of candidate moves around a current evaluation."""

    @abstractmethod
    def next_neighbor(self, problem: Problem, evaluation: Evaluation) -> Optional[Move]:
        """
        Yield the next candidate move.

        Args:
            problem: Problem being solved
            evaluation: Current evaluation

        Returns:
            A move, or None once the neighborhood is exhausted
        """

    def solution_changed(self, evaluation: Evaluation) -> None:
        """Called whenever the reference evaluation changes."""
