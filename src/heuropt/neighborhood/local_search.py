"""
Local search drivers.

Local searches explore the surroundings of the current evaluation in order to
reach better solutions:
- HillWalking applies the first move yielded by its neighborhood.
- HillClimbing applies first-improving moves.
- SteepestAscent applies best-improving moves (minimization works too).

LocalSearchSolver exposes a neighborhood step by step through the Solver
interface so it can run under `Solver.solve` with hooks.
"""

import logging
from abc import ABC
from typing import Optional

from ..core.problem import Evaluation, Problem
from ..core.solver import Solver
from ..core.stop_criterion import StopCriterion
from .base import Neighborhood
from .explorers import BestImprovement, FirstImprovement

logger = logging.getLogger(__name__)


def go_to_local_optima(
    problem: Problem,
    evaluation: Evaluation,
    stop_criterion: StopCriterion,
    neighborhood: Neighborhood,
) -> Evaluation:
    """
    Apply moves from `neighborhood` until the stop criterion is met.

    The criterion is updated every iteration, whether or not a move was applied,
    so time and iteration limits still end the search at a local optimum.

    Args:
        problem: Problem being solved
        evaluation: Starting evaluation
        stop_criterion: Decides when to stop
        neighborhood: Source of moves

    Returns:
        The last evaluation reached
    """
    moves = 0

    while not stop_criterion.should_stop():
        move = neighborhood.next_neighbor(problem, evaluation)
        if move is not None:
            evaluation = move.apply(problem, evaluation)
            neighborhood.solution_changed(evaluation)
            moves += 1

        stop_criterion.update(evaluation.value)

    logger.debug(
        f"Local search applied {moves} moves in {stop_criterion.current_iter} iterations, "
        f"final value {evaluation.value}"
    )
    return evaluation


class LocalSearch(ABC):
    """Base class for local searches driven by a neighborhood."""

    def __init__(self, neighborhood: Neighborhood):
        self.neighborhood = neighborhood

    def reach_local_optima(
        self,
        problem: Problem,
        evaluation: Evaluation,
        stop_criterion: StopCriterion,
    ) -> Evaluation:
        """Run the search from `evaluation` until `stop_criterion` is met."""
        return go_to_local_optima(problem, evaluation, stop_criterion, self.neighborhood)


class HillWalking(LocalSearch):
    """Applies the first move yielded by the given neighborhood, improving or not."""


class HillClimbing(LocalSearch):
    """Reaches a local optimum by applying first-improving moves."""

    def __init__(self, neighborhood: Neighborhood):
        super().__init__(FirstImprovement(neighborhood))


class SteepestAscent(LocalSearch):
    """Only takes the best improving moves."""

    def __init__(self, neighborhood: Neighborhood):
        super().__init__(BestImprovement(neighborhood))


class LocalSearchSolver(Solver):
    """
    Runs a neighborhood one move per iteration.

    The first iteration yields the initial evaluation, so `solve` always has a
    best to return. Every later iteration applies one move; once the
    neighborhood is exhausted (e.g. a local optimum under an explorer),
    `iterate` returns None and `solve` ends.

    Attributes:
        problem: Problem being solved
        neighborhood: Source of moves, usually wrapped by an explorer
        current: Evaluation reached so far
    """

    def __init__(self, problem: Problem, neighborhood: Neighborhood, initial: Evaluation):
        self.problem = problem
        self.neighborhood = neighborhood
        self.current = initial
        self._started = False

    def iterate(self, stop_criterion: StopCriterion) -> Optional[Evaluation]:
        if not self._started:
            self._started = True
            self.neighborhood.solution_changed(self.current)
            return self.current

        move = self.neighborhood.next_neighbor(self.problem, self.current)
        if move is None:
            return None

        self.current = move.apply(self.problem, self.current)
        self.neighborhood.solution_changed(self.current)
        return self.current
