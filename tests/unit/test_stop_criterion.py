"""
Unit tests for stop criteria.
"""

from datetime import timedelta

import pytest
from heuropt.core.problem import Objective
from heuropt.core.stop_criterion import (
    CriterionCombiner,
    ImprovementCriterion,
    IterCriterion,
    QualityCriterion,
    TimeCriterion,
)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self):
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestIterCriterion:
    """Test cases for IterCriterion class."""

    def test_stops_after_max_iter(self):
        """Test should_stop is false before the N-th update and true after it."""
        criterion = IterCriterion(5)

        for i in range(5):
            assert not criterion.should_stop()
            assert criterion.progress() == pytest.approx(i / 5)
            criterion.update(0)

        assert criterion.should_stop()
        assert criterion.progress() == 1.0
        assert criterion.current_iter == 5

    def test_four_updates_do_not_stop(self):
        """Test the criterion with max_iter=5 after four updates."""
        criterion = IterCriterion(5)

        for _ in range(4):
            criterion.update(0)

        assert not criterion.should_stop()

    def test_invalid_max_iter(self):
        """Test construction fails for a zero budget."""
        with pytest.raises(ValueError, match="max_iter must be greater than zero"):
            IterCriterion(0)


class TestTimeCriterion:
    """Test cases for TimeCriterion class."""

    def test_progress_follows_clock(self):
        """Test progress is elapsed time over the budget."""
        clock = FakeClock()
        criterion = TimeCriterion(10.0, clock=clock)

        assert criterion.progress() == 0.0
        assert not criterion.should_stop()

        clock.now += 5.0
        assert criterion.progress() == pytest.approx(0.5)

        clock.now += 5.0
        assert criterion.should_stop()

    def test_update_counts_iterations(self):
        """Test updates only count iterations."""
        criterion = TimeCriterion(10.0, clock=FakeClock())

        criterion.update(3)

        assert criterion.current_iter == 1
        assert criterion.progress() == 0.0

    def test_accepts_timedelta(self):
        """Test construction from a timedelta."""
        criterion = TimeCriterion(timedelta(minutes=1), clock=FakeClock())

        assert criterion.max_duration == 60.0

    @pytest.mark.parametrize("duration", [0, -1.0, timedelta(0)])
    def test_invalid_duration(self, duration):
        """Test construction fails for a zero or negative duration."""
        with pytest.raises(ValueError, match="max_duration must be greater than zero"):
            TimeCriterion(duration)


class TestQualityCriterion:
    """Test cases for QualityCriterion class."""

    def test_minimization_target(self):
        """Test reaching the target when minimizing."""
        criterion = QualityCriterion(10, Objective.MIN)

        criterion.update(11)
        assert criterion.progress() == 0.0

        criterion.update(10)
        assert criterion.progress() == 1.0
        assert criterion.should_stop()

    def test_maximization_target(self):
        """Test surpassing the target when maximizing."""
        criterion = QualityCriterion(10, Objective.MAX)

        criterion.update(9)
        assert not criterion.should_stop()

        criterion.update(12)
        assert criterion.should_stop()

    def test_progress_is_monotonic(self):
        """Test progress stays at 1.0 after a worse value."""
        criterion = QualityCriterion(0, Objective.MIN)

        criterion.update(0)
        criterion.update(50)

        assert criterion.progress() == 1.0
        assert criterion.current_iter == 2


class TestImprovementCriterion:
    """Test cases for ImprovementCriterion class."""

    def test_stops_without_improvement(self):
        """Test stopping once updates since last improvement exceed the maximum."""
        criterion = ImprovementCriterion(0, 10, Objective.MIN)

        for _ in range(10):
            criterion.update(0)

        assert criterion.progress() != 1.0

        criterion.update(0)

        assert criterion.progress() == 1.0

    def test_improvement_resets_counter(self):
        """Test an improvement postpones the stop."""
        criterion = ImprovementCriterion(float("-inf"), 2, Objective.MAX)

        criterion.update(1)
        criterion.update(1)
        criterion.update(2)
        criterion.update(2)
        criterion.update(2)

        assert criterion.best == 2
        assert criterion.last_improvement == 3
        assert not criterion.should_stop()

        criterion.update(2)
        assert criterion.should_stop()

    def test_fresh_criterion_does_not_stop(self):
        """Test the criterion before any update."""
        criterion = ImprovementCriterion(0, 0, Objective.MIN)

        assert criterion.current_iter == 0
        assert not criterion.should_stop()

    def test_invalid_maximum(self):
        """Test construction fails for a negative maximum."""
        with pytest.raises(ValueError):
            ImprovementCriterion(0, -1, Objective.MIN)


class TestCriterionCombiner:
    """Test cases for CriterionCombiner class."""

    def test_iteration_limit(self):
        """Test the iteration side stops the combination."""
        combined = CriterionCombiner(IterCriterion(5), TimeCriterion(1e9))

        for i in range(5):
            assert not combined.should_stop()
            combined.update(i)

        assert combined.should_stop()
        assert combined.current_iter == 5

    def test_time_limit(self):
        """Test the time side stops the combination."""
        clock = FakeClock()
        combined = CriterionCombiner(IterCriterion(1000), TimeCriterion(1.0, clock=clock))

        clock.now += 2.0

        assert combined.should_stop()

    def test_progress_is_max(self):
        """Test progress is the highest of both."""
        iters = IterCriterion(4)
        quality = QualityCriterion(100, Objective.MAX)
        combined = CriterionCombiner(iters, quality)

        combined.update(1)

        assert combined.progress() == pytest.approx(0.25)

        combined.update(100)

        assert combined.progress() == 1.0

    def test_should_stop_is_or(self):
        """Test should_stop equals A or B over a sequence of states."""
        a = IterCriterion(3)
        b = QualityCriterion(5, Objective.MAX)
        combined = CriterionCombiner(a, b)

        for value in [1, 2, 6, 1]:
            assert combined.should_stop() == (a.should_stop() or b.should_stop())
            combined.update(value)
            assert combined.should_stop() == (a.should_stop() or b.should_stop())

    def test_or_operator(self):
        """Test combining with the | operator."""
        combined = IterCriterion(1) | IterCriterion(2)

        assert isinstance(combined, CriterionCombiner)

        combined.update(0)

        assert combined.should_stop()
