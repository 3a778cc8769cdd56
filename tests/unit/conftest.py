"""
Fixtures for unit tests.
"""

from typing import List, Optional

import numpy as np
import pytest

from heuropt.core.problem import Evaluation, Objective, Problem
from heuropt.genetic.decoder import Decoder
from heuropt.neighborhood.base import Move, Neighborhood


class IdentityProblem(Problem):
    """Integer solutions scored by themselves."""

    def __init__(self, objective: Objective):
        self.objective = objective

    def score(self, solution: int) -> int:
        return solution


class ValueMove(Move):
    """Move to the solution whose value is `target`."""

    def __init__(self, target: int):
        self.target = target

    def value(self, problem: Problem, evaluation: Evaluation) -> int:
        return self.target

    def apply(self, problem: Problem, evaluation: Evaluation) -> Evaluation:
        return problem.evaluate(self.target)


class ScriptedNeighborhood(Neighborhood):
    """
    Yields moves to fixed values, then signals exhaustion.

    `solution_changed` restarts the script and is counted.
    """

    def __init__(self, targets: List[int]):
        self.targets = targets
        self.position = 0
        self.changes = 0
        self.probes = 0

    def next_neighbor(self, problem: Problem, evaluation: Evaluation) -> Optional[Move]:
        if self.position == len(self.targets):
            return None

        self.probes += 1
        move = ValueMove(self.targets[self.position])
        self.position += 1
        return move

    def solution_changed(self, evaluation: Evaluation) -> None:
        self.changes += 1
        self.position = 0


class StepNeighborhood(Neighborhood):
    """Infinite neighborhood proposing `solution - 1` and `solution + 1` alternately."""

    def __init__(self):
        self.calls = 0

    def next_neighbor(self, problem: Problem, evaluation: Evaluation) -> Optional[Move]:
        self.calls += 1
        step = -1 if self.calls % 2 else 1
        return ValueMove(evaluation.solution + step)


class KeySum(Problem):
    """Solutions are tuples of floats scored by their sum."""

    def __init__(self, objective: Objective):
        self.objective = objective

    def score(self, solution: tuple) -> float:
        return float(sum(solution))


class KeySumDecoder(Decoder):
    def __init__(self, problem: KeySum):
        self._problem = problem
        self.calls = 0

    @property
    def problem(self) -> KeySum:
        return self._problem

    def decode(self, keys: np.ndarray) -> tuple:
        self.calls += 1
        return tuple(float(k) for k in keys)


class ConstantDecoder(KeySumDecoder):
    """Every member decodes to the same value."""

    def decode_value(self, keys: np.ndarray) -> float:
        return 0.0


@pytest.fixture
def min_problem():
    """Minimization problem over integers."""
    return IdentityProblem(Objective.MIN)


@pytest.fixture
def max_problem():
    """Maximization problem over integers."""
    return IdentityProblem(Objective.MAX)


@pytest.fixture
def scripted_neighborhood():
    """Factory for scripted neighborhoods."""
    return ScriptedNeighborhood


@pytest.fixture
def step_neighborhood():
    """Infinite +-1 neighborhood."""
    return StepNeighborhood()


@pytest.fixture(params=[Objective.MIN, Objective.MAX], ids=["min", "max"])
def key_sum_decoder(request):
    """Decoder whose value is the sum of the keys, for both objectives."""
    return KeySumDecoder(KeySum(request.param))


@pytest.fixture
def max_decoder():
    """Decoder maximizing the sum of the keys."""
    return KeySumDecoder(KeySum(Objective.MAX))


@pytest.fixture
def constant_decoder():
    """Decoder giving every member the same value."""
    return ConstantDecoder(KeySum(Objective.MAX))


@pytest.fixture
def rng():
    """Seeded random source."""
    return np.random.default_rng(42)
