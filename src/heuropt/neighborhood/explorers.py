"""
Neighborhood explorers.

Explorers wrap another neighborhood and decide which of its moves to hand out:
- FirstImprovement: the first improving move.
- BestImprovement: the best of all probed moves, if it improves.
- Finite: bounds an infinite or stochastic neighborhood to N probes.
"""

import logging
from typing import Optional

from ..core.problem import Comparison, Evaluation, Problem, compare_values
from .base import Move, Neighborhood

logger = logging.getLogger(__name__)


class FirstImprovement(Neighborhood):
    """Returns the first probed move which improves the current evaluation."""

    def __init__(self, neighborhood: Neighborhood):
        self.neighborhood = neighborhood

    def next_neighbor(self, problem: Problem, evaluation: Evaluation) -> Optional[Move]:
        while True:
            move = self.neighborhood.next_neighbor(problem, evaluation)
            if move is None:
                return None

            if move.compare(problem, evaluation) is Comparison.BETTER:
                return move

    def solution_changed(self, evaluation: Evaluation) -> None:
        self.neighborhood.solution_changed(evaluation)


class BestImprovement(Neighborhood):
    """
    Exhausts the wrapped neighborhood and returns its best move.

    The best move is only returned when it is strictly better than the current
    evaluation. Returning None signals that a local optimum was reached. The
    wrapped neighborhood must be finite (see Finite).
    """

    def __init__(self, neighborhood: Neighborhood):
        self.neighborhood = neighborhood

    def next_neighbor(self, problem: Problem, evaluation: Evaluation) -> Optional[Move]:
        best = self.neighborhood.next_neighbor(problem, evaluation)
        if best is None:
            return None

        best_value = best.value(problem, evaluation)
        probes = 1

        while True:
            move = self.neighborhood.next_neighbor(problem, evaluation)
            if move is None:
                break

            probes += 1
            value = move.value(problem, evaluation)
            if compare_values(problem.objective, value, best_value) is Comparison.BETTER:
                best, best_value = move, value

        # At a local optimum the best neighbor isn't better than the current solution
        if compare_values(problem.objective, best_value, evaluation.value) is Comparison.BETTER:
            return best

        logger.debug(f"No improving move among {probes} probes (best value {best_value})")
        return None

    def solution_changed(self, evaluation: Evaluation) -> None:
        self.neighborhood.solution_changed(evaluation)


class Finite(Neighborhood):
    """
    Gives bounds to an infinite neighborhood.

    At most `limit` probes are forwarded to the wrapped neighborhood until the
    next `solution_changed`, which resets the counter. Usually wraps stochastic
    neighborhoods, i.e. those generating their moves randomly.
    """

    def __init__(self, neighborhood: Neighborhood, limit: int):
        if limit <= 0:
            raise ValueError(f"limit must be greater than zero, got {limit}")

        self.neighborhood = neighborhood
        self.limit = limit
        self.current = 0

    def next_neighbor(self, problem: Problem, evaluation: Evaluation) -> Optional[Move]:
        if self.current == self.limit:
            return None

        self.current += 1
        return self.neighborhood.next_neighbor(problem, evaluation)

    def solution_changed(self, evaluation: Evaluation) -> None:
        self.current = 0
        self.neighborhood.solution_changed(evaluation)
