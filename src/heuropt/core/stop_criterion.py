"""
Stop criteria for heuropt solvers.

A stop criterion decides when a solver should stop seeking better solutions.
Every criterion exposes a progress value which starts at zero and grows during
execution; the solver stops once it reaches 1.0.

- IterCriterion: stops after a number of iterations.
- TimeCriterion: stops after a time budget.
- QualityCriterion: stops once a target value is reached.
- ImprovementCriterion: stops after too many iterations without improvement.
- CriterionCombiner: combines two criteria, stopping as soon as either stops.
"""

import logging
import time
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Callable, Union

from .problem import Comparison, Objective, compare_values

logger = logging.getLogger(__name__)


class StopCriterion(ABC):
    """
    Base class for every stop criterion.

    `update` must be called at the end of each iteration with the value of the
    newly generated solution.
    """

    @abstractmethod
    def progress(self) -> float:
        """The progress starts at zero and increases during execution."""

    @abstractmethod
    def update(self, value: Any) -> None:
        """
        Update the internal state.

        Args:
            value: Value of the solution produced by the last iteration
        """

    @property
    @abstractmethod
    def current_iter(self) -> int:
        """How many times `update` was called."""

    def should_stop(self) -> bool:
        """True when `progress` reaches 100%."""
        return self.progress() >= 1.0

    def __or__(self, other: "StopCriterion") -> "CriterionCombiner":
        return CriterionCombiner(self, other)


class IterCriterion(StopCriterion):
    """The execution stops after `max_iter` iterations."""

    def __init__(self, max_iter: int):
        if max_iter <= 0:
            raise ValueError(f"max_iter must be greater than zero, got {max_iter}")

        self.max_iter = max_iter
        self._current_iter = 0

    def progress(self) -> float:
        return self._current_iter / self.max_iter

    def update(self, value: Any) -> None:
        self._current_iter += 1

    @property
    def current_iter(self) -> int:
        return self._current_iter

    def __repr__(self) -> str:
        return f"IterCriterion({self._current_iter}/{self.max_iter})"


class TimeCriterion(StopCriterion):
    """
    Stops once a maximum duration has elapsed.

    The timer starts as soon as the criterion is created. Progress is measured
    on demand, so it keeps growing even when no update happens.
    """

    def __init__(
        self,
        max_duration: Union[float, timedelta],
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the time criterion.

        Args:
            max_duration: Time budget, in seconds or as a timedelta
            clock: Monotonic clock returning seconds (injectable for tests)
        """
        if isinstance(max_duration, timedelta):
            max_duration = max_duration.total_seconds()

        if max_duration <= 0:
            raise ValueError(f"max_duration must be greater than zero, got {max_duration}")

        self.max_duration = float(max_duration)
        self._clock = clock
        self._start = clock()
        self._current_iter = 0

    @property
    def elapsed(self) -> float:
        """Seconds since the criterion was created."""
        return self._clock() - self._start

    def progress(self) -> float:
        return self.elapsed / self.max_duration

    def update(self, value: Any) -> None:
        self._current_iter += 1

    @property
    def current_iter(self) -> int:
        return self._current_iter

    def __repr__(self) -> str:
        return f"TimeCriterion({self.elapsed:.3f}s/{self.max_duration:.3f}s)"


class QualityCriterion(StopCriterion):
    """Stops as soon as a value reaches or surpasses `target`."""

    def __init__(self, target: Any, objective: Objective):
        self.target = target
        self.objective = objective
        self._done = False
        self._current_iter = 0

    def progress(self) -> float:
        return 1.0 if self._done else 0.0

    def update(self, value: Any) -> None:
        self._current_iter += 1

        if self._done:
            return

        if compare_values(self.objective, value, self.target) is not Comparison.WORSE:
            logger.debug(f"Target value {self.target} reached with {value}")
            self._done = True

    @property
    def current_iter(self) -> int:
        return self._current_iter


class ImprovementCriterion(StopCriterion):
    """
    Stops when the solver runs too many iterations in a row without improving.

    Attributes:
        best: Best value seen so far
        max_without_improvement: Allowed number of iterations without improvement
        last_improvement: Iteration number of the last improvement (0 if none)
    """

    def __init__(self, initial: Any, max_without_improvement: int, objective: Objective):
        """
        Initialize the improvement criterion.

        Args:
            initial: Initial best value (very high for minimization, very low
                for maximization)
            max_without_improvement: Iterations without improvement tolerated
            objective: Direction used to decide what an improvement is
        """
        if max_without_improvement < 0:
            raise ValueError(
                f"max_without_improvement must not be negative, got {max_without_improvement}"
            )

        self.best = initial
        self.max_without_improvement = max_without_improvement
        self.objective = objective
        self.last_improvement = 0
        self._current_iter = 0

    def _improvement_took_too_long(self) -> bool:
        return self._current_iter - self.last_improvement > self.max_without_improvement

    def progress(self) -> float:
        return 1.0 if self._improvement_took_too_long() else 0.0

    def update(self, value: Any) -> None:
        self._current_iter += 1

        if compare_values(self.objective, value, self.best) is Comparison.BETTER:
            self.best = value
            self.last_improvement = self._current_iter

    @property
    def current_iter(self) -> int:
        return self._current_iter


class CriterionCombiner(StopCriterion):
    """
    Combines two criteria, finishing as soon as either of them finishes.

    The progress is the highest of the two. Useful to express limits such as
    "1000 iterations or 10 seconds, whichever comes first".
    """

    def __init__(self, a: StopCriterion, b: StopCriterion):
        self.a = a
        self.b = b

    def progress(self) -> float:
        return max(self.a.progress(), self.b.progress())

    def should_stop(self) -> bool:
        return self.a.should_stop() or self.b.should_stop()

    def update(self, value: Any) -> None:
        self.a.update(value)
        self.b.update(value)

    @property
    def current_iter(self) -> int:
        # Both receive the same updates
        return self.a.current_iter

    def __repr__(self) -> str:
        return f"CriterionCombiner({self.a!r}, {self.b!r})"
