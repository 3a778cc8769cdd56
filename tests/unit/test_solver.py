"""
Unit tests for the solver loop and hooks.
"""

import logging
from unittest.mock import MagicMock, call
from typing import List, Optional

from heuropt.core.problem import Evaluation, Objective
from heuropt.core.solver import EmptyHook, IterHook, LoggingHook, Solver
from heuropt.core.stop_criterion import IterCriterion, StopCriterion


class ListSolver(Solver):
    """Yields a fixed sequence of values, then nothing."""

    def __init__(self, values: List[int], objective: Objective = Objective.MAX):
        self.values = list(values)
        self.objective = objective
        self.calls = 0

    def iterate(self, stop_criterion: StopCriterion) -> Optional[Evaluation]:
        self.calls += 1
        if not self.values:
            return None
        value = self.values.pop(0)
        return Evaluation(value, value, self.objective)


class RecordingHook(IterHook):
    def __init__(self):
        self.seen = []
        self.changes = []

    def iterated(self, evaluation):
        self.seen.append(evaluation.value)

    def better_changed(self, old, new):
        self.changes.append((old.value, new.value))


class TestSolver:
    """Test cases for Solver.solve."""

    def test_returns_best_of_all_iterations(self):
        """Test the best value wins even when later iterations are worse."""
        solver = ListSolver([3, 9, 4, 7])

        best = solver.solve(IterCriterion(10))

        assert best.value == 9

    def test_minimization(self):
        """Test the best for a minimization run."""
        solver = ListSolver([5, 2, 8, 2], Objective.MIN)

        assert solver.solve(IterCriterion(10)).value == 2

    def test_stops_at_criterion(self):
        """Test the loop ends when the criterion is met."""
        solver = ListSolver(range(100))
        criterion = IterCriterion(5)

        best = solver.solve(criterion)

        assert solver.calls == 5
        assert best.value == 4
        assert criterion.current_iter == 5

    def test_stops_when_exhausted(self):
        """Test the loop ends when iterate returns None."""
        solver = ListSolver([1, 2])

        best = solver.solve(IterCriterion(100))

        assert best.value == 2
        assert solver.calls == 3

    def test_no_first_candidate(self, caplog):
        """Test None is returned when the first iteration yields nothing."""
        solver = ListSolver([])

        with caplog.at_level(logging.WARNING):
            assert solver.solve(IterCriterion(5)) is None

        assert "no candidate" in caplog.text

    def test_hook_calls(self):
        """Test iterated sees every candidate and better_changed every improvement."""
        hook = RecordingHook()
        solver = ListSolver([3, 9, 4, 12, 12])

        solver.solve(IterCriterion(10), hook)

        assert hook.seen == [3, 9, 4, 12, 12]
        assert hook.changes == [(3, 9), (9, 12)]

    def test_empty_hook(self):
        """Test the default hook does nothing."""
        hook = EmptyHook()
        evaluation = Evaluation(1, 1, Objective.MIN)

        assert hook.iterated(evaluation) is None
        assert hook.better_changed(evaluation, evaluation) is None


class TestLoggingHook:
    """Test cases for LoggingHook class."""

    def test_logs_iterations_and_improvements(self, caplog):
        """Test messages for iterations and improvements."""
        hook = LoggingHook()

        with caplog.at_level(logging.INFO):
            ListSolver([1, 5]).solve(IterCriterion(10), hook)

        assert hook.iterations == 2
        assert "ITER 1 VALUE 1" in caplog.text
        assert "ITER 2 VALUE 5" in caplog.text
        assert "Best value improved: 1 -> 5" in caplog.text

    def test_level(self, caplog):
        """Test nothing is logged below the configured level."""
        hook = LoggingHook(level=logging.DEBUG)

        with caplog.at_level(logging.INFO):
            hook.iterated(Evaluation(1, 1, Objective.MIN))

        assert "ITER" not in caplog.text

    def test_hook_mock(self):
        """Test the hook protocol with a mock."""
        hook = MagicMock(spec=IterHook)
        solver = ListSolver([2, 1], Objective.MIN)

        best = solver.solve(IterCriterion(10), hook)

        assert hook.iterated.call_count == 2
        assert hook.better_changed.call_args == call(Evaluation(2, 2, Objective.MIN), best)
