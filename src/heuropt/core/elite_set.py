"""
Bounded collection keeping the best evaluations found during a search.
"""

import logging
from typing import Any, Iterator, List, Optional

import numpy as np

from .problem import Comparison, Evaluation

logger = logging.getLogger(__name__)


def _same_solution(a: Any, b: Any) -> bool:
    # `==` on arrays is elementwise
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.array_equal(a, b)
    return a == b


class EliteSet:
    """
    Keeps at most `capacity` distinct evaluations, evicting the worst.

    Members are stored in insertion order. Once the set is full, the threshold
    always equals the value of its worst member, and a candidate must be
    strictly better than it to get in.

    Attributes:
        capacity: Maximum number of members
        threshold: Value a candidate must beat to be admitted
    """

    def __init__(self, capacity: int, initial_threshold: Any):
        """
        Initialize an empty elite set.

        Args:
            capacity: Maximum number of members, must be greater than zero
            initial_threshold: Admission threshold until the set fills up
                (very high for minimization, very low for maximization)
        """
        if capacity <= 0:
            raise ValueError("Elite set size must be greater than zero")

        self.capacity = capacity
        self.threshold = initial_threshold
        self._elements: List[Evaluation] = []

    def try_insert(self, candidate: Evaluation) -> bool:
        """
        Insert `candidate` if it is good enough and not a duplicate.

        Args:
            candidate: Evaluation to insert

        Returns:
            True if inserted, False if rejected (the set is left unchanged)
        """
        if candidate.compare_value(self.threshold) is not Comparison.BETTER:
            return False

        if any(_same_solution(existing.solution, candidate.solution) for existing in self._elements):
            return False

        self._insert(candidate)
        return True

    def _insert(self, candidate: Evaluation) -> None:
        if self.is_full():
            position = self._worst_position()
            logger.debug(f"Evicting elite with value {self._elements[position].value}")
            self._elements[position] = candidate
            self._update_threshold()
        else:
            self._elements.append(candidate)

            if self.is_full():
                self._update_threshold()

    def _worst_position(self) -> Optional[int]:
        if not self._elements:
            return None

        position = 0
        for idx in range(1, len(self._elements)):
            if self._elements[idx].compare(self._elements[position]) is Comparison.WORSE:
                position = idx

        return position

    def _update_threshold(self) -> None:
        self.threshold = self._elements[self._worst_position()].value

    def is_full(self) -> bool:
        """Check whether the set holds `capacity` members."""
        return len(self._elements) == self.capacity

    def best(self) -> Optional[Evaluation]:
        """Best member, or None if the set is empty."""
        best = None
        for element in self._elements:
            if best is None or element.compare(best) is Comparison.BETTER:
                best = element
        return best

    def worst(self) -> Optional[Evaluation]:
        """Worst member, or None if the set is empty."""
        position = self._worst_position()
        return None if position is None else self._elements[position]

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Evaluation]:
        """Iterate over members in insertion order."""
        return iter(tuple(self._elements))

    def __repr__(self) -> str:
        return f"EliteSet(size={len(self)}/{self.capacity}, threshold={self.threshold!r})"
