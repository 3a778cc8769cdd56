"""
Generic solver loop and life-cycle hooks.

A solver is a procedure that seeks a good solution for a given problem. Every
algorithm implements `iterate`, a single step producing a candidate, and shares
the `solve` loop, which runs iterations until the stop criterion is met while
tracking the best evaluation ever seen.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .problem import Comparison, Evaluation
from .stop_criterion import StopCriterion

logger = logging.getLogger(__name__)


class IterHook:
    """
    Callbacks invoked at special moments of `Solver.solve`.

    Both methods do nothing by default; subclasses override the ones they need
    (e.g. for logging or recording progress).
    """

    def iterated(self, evaluation: Evaluation) -> None:
        """Called right after an iteration with the evaluation it produced."""

    def better_changed(self, old: Evaluation, new: Evaluation) -> None:
        """Called when the best evaluation is being replaced by `new`."""


class EmptyHook(IterHook):
    """It does nothing."""


class LoggingHook(IterHook):
    """Logs every iteration value and every improvement."""

    def __init__(self, level: int = logging.INFO):
        self.level = level
        self.iterations = 0

    def iterated(self, evaluation: Evaluation) -> None:
        self.iterations += 1
        logger.log(self.level, f"ITER {self.iterations} VALUE {evaluation.value}")

    def better_changed(self, old: Evaluation, new: Evaluation) -> None:
        logger.log(self.level, f"Best value improved: {old.value} -> {new.value}")


class Solver(ABC):
    """
    Base class for every solver.

    Example usage:
        ```python
        solver = Brkga(decoder, np.random.default_rng(42), params)
        best = solver.solve(IterCriterion(100) | TimeCriterion(10.0))
        ```
    """

    @abstractmethod
    def iterate(self, stop_criterion: StopCriterion) -> Optional[Evaluation]:
        """
        Perform one step of the algorithm.

        Args:
            stop_criterion: The criterion controlling the current execution

        Returns:
            The best evaluation produced by this step, or None when the
            algorithm has nothing left to explore
        """

    def solve(
        self,
        stop_criterion: StopCriterion,
        hook: Optional[IterHook] = None,
    ) -> Optional[Evaluation]:
        """
        Run iterations until the stop criterion is met.

        Args:
            stop_criterion: Decides when to stop
            hook: Optional callbacks for iterations and improvements

        Returns:
            The best evaluation found among all iterations, or None if the
            very first iteration produced nothing
        """
        hook = hook if hook is not None else EmptyHook()

        best = self.iterate(stop_criterion)
        if best is None:
            logger.warning(f"{type(self).__name__} produced no candidate on its first iteration")
            return None

        hook.iterated(best)
        stop_criterion.update(best.value)

        while not stop_criterion.should_stop():
            candidate = self.iterate(stop_criterion)
            if candidate is None:
                logger.debug(
                    f"{type(self).__name__} exhausted after {stop_criterion.current_iter} iterations"
                )
                break

            stop_criterion.update(candidate.value)
            hook.iterated(candidate)

            if candidate.compare(best) is Comparison.BETTER:
                hook.better_changed(best, candidate)
                best = candidate

        logger.info(
            f"{type(self).__name__} finished after {stop_criterion.current_iter} iterations "
            f"with best value {best.value}"
        )
        return best
