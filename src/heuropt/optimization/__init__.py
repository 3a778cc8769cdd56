"""
Optimization module for heuropt.

This module contains the run configuration and the batch runner used to
execute a solver several times and aggregate its results.
"""

from .config import BrkgaConfig, GenerationHistory, parse_ratio
from .batch import Batch, BatchConfig, BatchResult, Statistics, gap

__all__ = [
    "BrkgaConfig",
    "GenerationHistory",
    "parse_ratio",
    "Batch",
    "BatchConfig",
    "BatchResult",
    "Statistics",
    "gap",
]
