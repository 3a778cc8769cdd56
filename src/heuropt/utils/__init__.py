"""
Utility modules for heuropt.
"""

from .run_logger import RunLogger

__all__ = [
    "RunLogger",
]
