"""
Configuration for BRKGA runs.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Union
from pathlib import Path

import numpy as np
import yaml

from ..core.problem import Objective
from ..core.stop_criterion import (
    StopCriterion,
    IterCriterion,
    TimeCriterion,
    QualityCriterion,
    ImprovementCriterion,
)
from ..genetic.brkga import BrkgaParams
from ..genetic.population import GenerationHistory

logger = logging.getLogger(__name__)

__all__ = ["parse_ratio", "BrkgaConfig", "GenerationHistory"]


def parse_ratio(value: Union[str, int, float]) -> float:
    """
    Parse a ratio value that can be a fraction string, int, or float.

    Args:
        value: Ratio value as:
               - Fraction string like "1/5", "3/20"
               - Integer like 1 (will be converted to float)
               - Float like 0.15

    Returns:
        Float representation of the ratio

    Examples:
        >>> parse_ratio("1/5")
        0.2
        >>> parse_ratio(0.5)
        0.5
        >>> parse_ratio(1)
        1.0
    """
    if isinstance(value, float):
        return value

    if isinstance(value, int):
        return float(value)

    if isinstance(value, str):
        value = value.strip()

        # Try to parse as fraction "a/b"
        if '/' in value:
            try:
                numerator, denominator = value.split('/')
                return float(numerator) / float(denominator)
            except (ValueError, ZeroDivisionError):
                logger.warning(f"Invalid fraction format: {value}, falling back to 0.0")
                return 0.0

        try:
            return float(value)
        except ValueError:
            logger.warning(f"Invalid ratio format: {value}, falling back to 0.0")
            return 0.0

    logger.warning(f"Unknown ratio type: {type(value)}, falling back to 0.0")
    return 0.0


def _optional(cast, raw: Optional[str]):
    return cast(raw) if raw not in (None, "") else None


@dataclass
class BrkgaConfig:
    """
    Configuration for a BRKGA run.

    Contains the algorithm hyperparameters plus the limits of the run. Every
    configured limit becomes a stop criterion; the run stops at the first one met.
    """

    # Algorithm hyperparameters
    population_size: int = 100
    member_size: int = 10
    elites: int = 20
    mutants: int = 15
    crossover_bias: float = 0.7

    # Ratios override the counts above when set (e.g. "1/5")
    elite_ratio: Optional[Union[str, float]] = None
    mutant_ratio: Optional[Union[str, float]] = None

    # Reproducibility
    seed: Optional[int] = None

    # Run limits
    max_generations: Optional[int] = 100
    max_seconds: Optional[float] = None
    target_value: Optional[float] = None
    max_without_improvement: Optional[int] = None

    # Logging
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.elite_ratio is not None:
            self.elites = int(self.population_size * parse_ratio(self.elite_ratio))
        if self.mutant_ratio is not None:
            self.mutants = int(self.population_size * parse_ratio(self.mutant_ratio))

        # BrkgaParams holds the structural checks
        self.to_params()

        if self.max_generations is not None and self.max_generations < 1:
            raise ValueError("max_generations must be at least 1")
        if self.max_seconds is not None and self.max_seconds <= 0:
            raise ValueError("max_seconds must be greater than zero")
        if self.max_without_improvement is not None and self.max_without_improvement < 0:
            raise ValueError("max_without_improvement must not be negative")
        if not isinstance(getattr(logging, self.log_level.upper(), None), int):
            raise ValueError(f"Unknown log_level: {self.log_level}")

        if self.max_generations is None and self.max_seconds is None:
            logger.warning(
                "Neither max_generations nor max_seconds is set, "
                "the run may never stop"
            )

    def to_params(self) -> BrkgaParams:
        """Build the algorithm parameters."""
        return BrkgaParams(
            population_size=self.population_size,
            member_size=self.member_size,
            elites=self.elites,
            mutants=self.mutants,
            crossover_bias=self.crossover_bias,
        )

    def make_rng(self, offset: int = 0) -> np.random.Generator:
        """
        Create the random source for a run.

        Args:
            offset: Added to the seed, e.g. the execution number of a batch

        Returns:
            A seeded generator, or an OS-seeded one when `seed` is None
        """
        if self.seed is None:
            return np.random.default_rng()
        return np.random.default_rng(self.seed + offset)

    def build_stop_criterion(self, objective: Objective) -> StopCriterion:
        """
        Combine every configured limit into a single stop criterion.

        Args:
            objective: Direction of the problem (for quality and improvement limits)

        Returns:
            A stop criterion which stops as soon as any limit is met
        """
        criteria = []

        if self.max_generations is not None:
            criteria.append(IterCriterion(self.max_generations))
        if self.max_seconds is not None:
            criteria.append(TimeCriterion(self.max_seconds))
        if self.target_value is not None:
            criteria.append(QualityCriterion(self.target_value, objective))
        if self.max_without_improvement is not None:
            initial = float("inf") if objective is Objective.MIN else float("-inf")
            criteria.append(ImprovementCriterion(initial, self.max_without_improvement, objective))

        if not criteria:
            raise ValueError("At least one run limit must be configured")

        combined = criteria[0]
        for criterion in criteria[1:]:
            combined = combined | criterion

        return combined

    def apply_log_level(self) -> None:
        """Set the root logger level from `log_level`."""
        logging.getLogger().setLevel(getattr(logging, self.log_level.upper()))

    @classmethod
    def from_yaml(cls, config_path: Path, **overrides) -> "BrkgaConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file
            **overrides: Values taking precedence over the file, e.g. a
                member_size derived from the problem instance

        Returns:
            BrkgaConfig instance
        """
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}

        # Extract nested parameters if present
        brkga_config = dict(config.get("brkga", config))
        brkga_config.update(overrides)

        return cls(**brkga_config)

    @classmethod
    def from_env(cls) -> "BrkgaConfig":
        """
        Load configuration from environment variables.

        Reads the following environment variables:
        - BRKGA_POPULATION_SIZE: population_size
        - BRKGA_MEMBER_SIZE: member_size
        - BRKGA_ELITES / BRKGA_MUTANTS: elites / mutants
        - BRKGA_ELITE_RATIO / BRKGA_MUTANT_RATIO: ratios (supports fractions like "1/5")
        - BRKGA_CROSSOVER_BIAS: crossover_bias
        - BRKGA_SEED: seed
        - BRKGA_MAX_GENERATIONS: max_generations
        - BRKGA_MAX_SECONDS: max_seconds
        - BRKGA_TARGET_VALUE: target_value
        - BRKGA_MAX_WITHOUT_IMPROVEMENT: max_without_improvement
        - LOG_LEVEL: log_level

        Returns:
            BrkgaConfig instance
        """
        return cls(
            population_size=int(os.getenv("BRKGA_POPULATION_SIZE", "100")),
            member_size=int(os.getenv("BRKGA_MEMBER_SIZE", "10")),
            elites=int(os.getenv("BRKGA_ELITES", "20")),
            mutants=int(os.getenv("BRKGA_MUTANTS", "15")),
            elite_ratio=_optional(str, os.getenv("BRKGA_ELITE_RATIO")),
            mutant_ratio=_optional(str, os.getenv("BRKGA_MUTANT_RATIO")),
            crossover_bias=float(os.getenv("BRKGA_CROSSOVER_BIAS", "0.7")),
            seed=_optional(int, os.getenv("BRKGA_SEED")),
            max_generations=_optional(int, os.getenv("BRKGA_MAX_GENERATIONS", "100")),
            max_seconds=_optional(float, os.getenv("BRKGA_MAX_SECONDS")),
            target_value=_optional(float, os.getenv("BRKGA_TARGET_VALUE")),
            max_without_improvement=_optional(int, os.getenv("BRKGA_MAX_WITHOUT_IMPROVEMENT")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "population_size": self.population_size,
            "member_size": self.member_size,
            "elites": self.elites,
            "mutants": self.mutants,
            "crossover_bias": self.crossover_bias,
            "seed": self.seed,
            "max_generations": self.max_generations,
            "max_seconds": self.max_seconds,
            "target_value": self.target_value,
            "max_without_improvement": self.max_without_improvement,
            "log_level": self.log_level,
        }

    def to_yaml(self, save_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            save_path: Path where to save the configuration
        """
        with open(save_path, 'w') as f:
            yaml.dump({"brkga": self.to_dict()}, f, default_flow_style=False)

        logger.info(f"Saved configuration to {save_path}")
