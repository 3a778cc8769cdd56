#!/usr/bin/env python3
"""
Knapsack example for heuropt.

This script demonstrates how to:
1. Define a problem, a neighborhood and a decoder
2. Improve a solution with local search
3. Run BRKGA configured from a YAML file
4. Run a batch of seeded executions and aggregate statistics

Usage:
    python examples/knapsack.py --items 50 --config config/brkga.yaml
    python examples/knapsack.py --items 200 --executions 5 --seed 7
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from heuropt import (
    Brkga,
    Decoder,
    Evaluation,
    Finite,
    HillClimbing,
    IterCriterion,
    LoggingHook,
    Move,
    Neighborhood,
    Objective,
    Problem,
    TimeCriterion,
)
from heuropt.optimization import Batch, BatchConfig, BrkgaConfig, Statistics
from heuropt.utils import RunLogger

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class Knapsack(Problem):
    """Choose items maximizing total value without exceeding the capacity."""

    objective = Objective.MAX

    def __init__(self, values: List[int], weights: List[int], capacity: int):
        self.values = values
        self.weights = weights
        self.capacity = capacity

    @classmethod
    def random(cls, n_items: int, rng: np.random.Generator) -> "Knapsack":
        values = rng.integers(1, 100, n_items).tolist()
        weights = rng.integers(1, 50, n_items).tolist()
        return cls(values, weights, capacity=sum(weights) // 3)

    def __len__(self) -> int:
        return len(self.values)

    def weight(self, solution: Tuple[bool, ...]) -> int:
        return sum(w for w, chosen in zip(self.weights, solution) if chosen)

    def score(self, solution: Tuple[bool, ...]) -> int:
        if self.weight(solution) > self.capacity:
            return 0
        return sum(v for v, chosen in zip(self.values, solution) if chosen)


class FlipMove(Move):
    """Add or remove a single item."""

    def __init__(self, item: int):
        self.item = item

    def value(self, problem: Knapsack, evaluation: Evaluation) -> int:
        flipped = list(evaluation.solution)
        flipped[self.item] = not flipped[self.item]
        return problem.score(tuple(flipped))

    def apply(self, problem: Knapsack, evaluation: Evaluation) -> Evaluation:
        flipped = list(evaluation.solution)
        flipped[self.item] = not flipped[self.item]
        return problem.evaluate(tuple(flipped))


class RandomFlip(Neighborhood):
    """Infinite neighborhood flipping random items."""

    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    def next_neighbor(self, problem: Knapsack, evaluation: Evaluation) -> Optional[Move]:
        return FlipMove(int(self.rng.integers(len(problem))))


class GreedyDecoder(Decoder):
    """Visit items by increasing key and take each one that still fits."""

    def __init__(self, knapsack: Knapsack):
        self._problem = knapsack

    @property
    def problem(self) -> Knapsack:
        return self._problem

    def decode(self, keys: np.ndarray) -> Tuple[bool, ...]:
        chosen = [False] * len(keys)
        weight = 0
        for item in np.argsort(keys, kind="stable"):
            if weight + self._problem.weights[item] <= self._problem.capacity:
                chosen[item] = True
                weight += self._problem.weights[item]
        return tuple(chosen)


def parse_arguments():
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Solve a random knapsack instance with heuropt")
    parser.add_argument("--items", type=int, default=50, help="Number of items")
    parser.add_argument("--seed", type=int, default=1, help="Seed for the instance")
    parser.add_argument("--config", type=Path, default=None, help="BRKGA YAML configuration")
    parser.add_argument("--executions", type=int, default=3, help="Batch executions")
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for run logs")
    return parser.parse_args()


def main():
    args = parse_arguments()

    knapsack = Knapsack.random(args.items, np.random.default_rng(args.seed))
    logger.info(f"Instance with {len(knapsack)} items and capacity {knapsack.capacity}")

    # 1. Local search from the empty knapsack
    empty = knapsack.evaluate(tuple([False] * len(knapsack)))
    search = HillClimbing(Finite(RandomFlip(np.random.default_rng(args.seed)), 10 * len(knapsack)))
    local_optimum = search.reach_local_optima(knapsack, empty, IterCriterion(1000) | TimeCriterion(5.0))
    logger.info(f"Hill climbing reached value {local_optimum.value}")

    # 2. BRKGA
    if args.config is not None:
        config = BrkgaConfig.from_yaml(args.config, member_size=len(knapsack))
    else:
        config = BrkgaConfig(member_size=len(knapsack), seed=args.seed)
    config.apply_log_level()

    decoder = GreedyDecoder(knapsack)
    run_logger = RunLogger(args.output_dir, run_id="brkga")
    brkga = Brkga(decoder, config.make_rng(), config.to_params())
    best = brkga.solve(config.build_stop_criterion(knapsack.objective), run_logger)
    run_logger.save()
    logger.info(f"BRKGA reached value {best.value} after {brkga.current_generation} generations")

    # 3. Batch of seeded executions
    batch = Batch(
        BatchConfig(base_seed=config.seed or 0, executions=args.executions),
        build_solver=lambda seed, n: Brkga(decoder, np.random.default_rng(seed + n), config.to_params()),
        build_stop_criterion=lambda: config.build_stop_criterion(knapsack.objective),
        hook=LoggingHook(level=logging.DEBUG),
    )
    result = batch.run()
    if result is not None:
        logger.info(f"Batch statistics: {Statistics(result, knapsack.objective).summary()}")


if __name__ == "__main__":
    main()
