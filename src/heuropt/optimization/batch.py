"""
Batch execution of stochastic solvers.

A batch is a sequence of independent executions of a solver, usually with
different seeds, used to compare the solver's performance statistically.
Each execution builds its own solver and stop criterion, so runs share no
state.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import numpy as np

from ..core.problem import Comparison, Evaluation, Objective, compare_values
from ..core.solver import IterHook, Solver
from ..core.stop_criterion import StopCriterion

logger = logging.getLogger(__name__)

# (execution number, best evaluation, elapsed seconds)
RunRecord = Tuple[int, Evaluation, float]


@dataclass
class BatchConfig:
    """Configuration for batch execution."""
    base_seed: int = 0
    executions: int = 10

    def __post_init__(self):
        if self.executions < 1:
            raise ValueError("executions must be at least 1")


@dataclass
class BatchResult:
    """Result of batch execution."""
    executions: int
    base_seed: int
    evaluations: List[RunRecord] = field(default_factory=list)

    @property
    def successful(self) -> int:
        """Number of executions that produced an evaluation."""
        return len(self.evaluations)

    def get_success_rate(self) -> float:
        """Get the success rate as a percentage."""
        if self.executions == 0:
            return 0.0
        return (self.successful / self.executions) * 100.0


class Batch:
    """
    Runs a solver several times and collects the best evaluation of each run.

    Example usage:
        ```python
        batch = Batch(
            BatchConfig(base_seed=1, executions=10),
            build_solver=lambda seed, n: Brkga(decoder, np.random.default_rng(seed + n), params),
            build_stop_criterion=lambda: IterCriterion(100),
        )
        result = batch.run()
        ```
    """

    def __init__(
        self,
        config: BatchConfig,
        build_solver: Callable[[int, int], Solver],
        build_stop_criterion: Callable[[], StopCriterion],
        hook: Optional[IterHook] = None,
    ):
        """
        Initialize the batch.

        Args:
            config: Batch configuration
            build_solver: Receives the base seed and the execution number
                (1..executions) and returns a fresh solver
            build_stop_criterion: Returns a fresh stop criterion for each run
            hook: Optional hook shared by every run
        """
        self.config = config
        self.build_solver = build_solver
        self.build_stop_criterion = build_stop_criterion
        self.hook = hook

    def run(self) -> Optional[BatchResult]:
        """
        Execute every run.

        Runs whose first iteration yields nothing are excluded from the result.

        Returns:
            BatchResult, or None when no run produced an evaluation
        """
        result = BatchResult(executions=self.config.executions, base_seed=self.config.base_seed)

        logger.info(
            f"Starting batch of {self.config.executions} executions "
            f"with base seed {self.config.base_seed}"
        )

        for exec_number in range(1, self.config.executions + 1):
            start_time = time.perf_counter()

            solver = self.build_solver(self.config.base_seed, exec_number)
            evaluation = solver.solve(self.build_stop_criterion(), self.hook)

            elapsed = time.perf_counter() - start_time

            if evaluation is None:
                logger.warning(f"Execution {exec_number} produced no evaluation, excluding it")
                continue

            logger.debug(f"Execution {exec_number}: value {evaluation.value} in {elapsed:.3f}s")
            result.evaluations.append((exec_number, evaluation, elapsed))

        logger.info(
            f"Completed {result.successful}/{self.config.executions} executions successfully"
        )

        if not result.evaluations:
            return None

        return result


class Statistics:
    """
    Process and collect statistics about a previously executed batch.

    Values must be numeric. Only successful executions are aggregated.
    """

    def __init__(self, batch: BatchResult, objective: Objective):
        if not batch.evaluations:
            raise ValueError("A batch result should always have at least one execution")

        self.batch = batch
        self.objective = objective
        self._values = np.array([e.value for _, e, _ in batch.evaluations], dtype=float)
        self._times = np.array([t for _, _, t in batch.evaluations], dtype=float)

    def average_value(self) -> float:
        """The average value of all executions."""
        return float(np.mean(self._values))

    def std_value(self) -> float:
        """The standard deviation of the values of all executions."""
        return float(np.std(self._values))

    def average_time(self) -> float:
        """The average time, in seconds, expended on all executions."""
        return float(np.mean(self._times))

    def best(self) -> RunRecord:
        """The record of the execution which found the best evaluation."""
        best = self.batch.evaluations[0]
        for record in self.batch.evaluations[1:]:
            if compare_values(self.objective, record[1].value, best[1].value) is Comparison.BETTER:
                best = record
        return best

    def summary(self) -> dict:
        """Aggregate statistics as a dictionary."""
        exec_number, evaluation, _ = self.best()
        return {
            "executions": self.batch.executions,
            "successful": self.batch.successful,
            "average_value": self.average_value(),
            "std_value": self.std_value(),
            "average_time": self.average_time(),
            "best_value": evaluation.value,
            "best_execution": exec_number,
        }


def gap(value: float, reference: float) -> float:
    """
    Relative difference, in percent, between `value` and `reference`.

    Args:
        value: Value obtained
        reference: Reference value, e.g. the best known solution

    Returns:
        `(value - reference) / reference * 100`
    """
    if reference == 0:
        raise ZeroDivisionError("gap is undefined for a zero reference value")
    return (value - reference) / reference * 100.0
