"""
Unit tests for batch execution and statistics.
"""

import pytest
import numpy as np
from heuropt.core.problem import Evaluation, Objective
from heuropt.core.solver import Solver
from heuropt.core.stop_criterion import IterCriterion
from heuropt.genetic.brkga import Brkga, BrkgaParams
from heuropt.optimization.batch import Batch, BatchConfig, BatchResult, Statistics, gap


class FixedSolver(Solver):
    """Returns a single evaluation, or nothing."""

    def __init__(self, value):
        self.value = value

    def iterate(self, stop_criterion):
        if self.value is None:
            return None
        return Evaluation(self.value, self.value, Objective.MIN)


class TestBatchConfig:
    """Test cases for BatchConfig class."""

    def test_invalid_executions(self):
        """Test a batch needs at least one execution."""
        with pytest.raises(ValueError):
            BatchConfig(executions=0)


class TestBatch:
    """Test cases for Batch class."""

    def test_runs_every_execution(self):
        """Test each execution receives the base seed and its number."""
        calls = []

        def build_solver(seed, n):
            calls.append((seed, n))
            return FixedSolver(n)

        result = Batch(BatchConfig(base_seed=7, executions=3), build_solver, lambda: IterCriterion(1)).run()

        assert calls == [(7, 1), (7, 2), (7, 3)]
        assert [n for n, _, _ in result.evaluations] == [1, 2, 3]
        assert all(t >= 0 for _, _, t in result.evaluations)
        assert result.get_success_rate() == 100.0

    def test_excludes_empty_runs(self):
        """Test runs without an evaluation are skipped."""
        values = {1: 4, 2: None, 3: 2, 4: None}

        result = Batch(
            BatchConfig(executions=4),
            lambda seed, n: FixedSolver(values[n]),
            lambda: IterCriterion(1),
        ).run()

        assert result.successful == 2
        assert result.get_success_rate() == 50.0

    def test_all_runs_empty(self):
        """Test None is returned when no run succeeds."""
        batch = Batch(BatchConfig(executions=2), lambda seed, n: FixedSolver(None), lambda: IterCriterion(1))

        assert batch.run() is None

    def test_brkga_batch(self, max_decoder):
        """Test a batch of BRKGA executions with different seeds."""
        params = BrkgaParams(population_size=10, member_size=3, elites=2, mutants=2)

        result = Batch(
            BatchConfig(base_seed=1, executions=3),
            lambda seed, n: Brkga(max_decoder, np.random.default_rng(seed + n), params),
            lambda: IterCriterion(5),
        ).run()

        assert result.successful == 3
        assert Statistics(result, Objective.MAX).best()[1].value <= 3


class TestStatistics:
    """Test cases for Statistics class."""

    @pytest.fixture
    def result(self):
        return BatchResult(
            executions=3,
            base_seed=0,
            evaluations=[
                (1, Evaluation(1, 10.0, Objective.MIN), 1.0),
                (2, Evaluation(2, 4.0, Objective.MIN), 2.0),
                (3, Evaluation(3, 7.0, Objective.MIN), 3.0),
            ],
        )

    def test_aggregates(self, result):
        """Test averages and deviation."""
        stats = Statistics(result, Objective.MIN)

        assert stats.average_value() == pytest.approx(7.0)
        assert stats.std_value() == pytest.approx(np.std([10.0, 4.0, 7.0]))
        assert stats.average_time() == pytest.approx(2.0)

    def test_best_follows_objective(self, result):
        """Test the best execution for each objective."""
        assert Statistics(result, Objective.MIN).best()[0] == 2
        assert Statistics(result, Objective.MAX).best()[0] == 1

    def test_summary(self, result):
        """Test the summary dictionary."""
        summary = Statistics(result, Objective.MIN).summary()

        assert summary["best_value"] == 4.0
        assert summary["best_execution"] == 2
        assert summary["successful"] == 3

    def test_empty_result(self):
        """Test statistics need at least one execution."""
        with pytest.raises(ValueError):
            Statistics(BatchResult(executions=1, base_seed=0), Objective.MIN)


class TestGap:
    """Test cases for gap."""

    def test_gap(self):
        """Test relative difference in percent."""
        assert gap(110.0, 100.0) == pytest.approx(10.0)
        assert gap(90.0, 100.0) == pytest.approx(-10.0)

    def test_zero_reference(self):
        """Test a zero reference is rejected."""
        with pytest.raises(ZeroDivisionError):
            gap(1.0, 0.0)
