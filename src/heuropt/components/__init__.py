"""
Reusable building blocks for problem-specific decoders and neighborhoods.
"""

from .coverage import Coverage
from .selection_control import SelectionControl

__all__ = [
    "Coverage",
    "SelectionControl",
]
