"""
Coverage of elements by their position.

Often used by decoders to resolve collisions, e.g. when mapping random keys to
a permutation of cities.
"""

import numpy as np


class Coverage:
    """
    Counts how many times each position in `[0, quantity)` was covered.

    Attributes:
        state: Per-position counters
    """

    def __init__(self, quantity: int):
        """
        Initialize the coverage.

        Args:
            quantity: Number of positions
        """
        self.state = np.zeros(quantity, dtype=np.int64)

    def _check(self, position: int) -> int:
        position = int(position)
        if not 0 <= position < len(self.state):
            raise IndexError(f"position {position} out of coverage range {len(self.state)}")
        return position

    def cover(self, position: int) -> None:
        """Cover the given position."""
        self.state[self._check(position)] += 1

    def uncover(self, position: int) -> None:
        """Uncover the given position."""
        position = self._check(position)
        if self.state[position] == 0:
            raise ValueError(f"position {position} is not covered")
        self.state[position] -= 1

    def count(self, position: int) -> int:
        """How many times the position is covered."""
        return int(self.state[self._check(position)])

    def is_covered(self, position: int) -> bool:
        """True if it was covered at least once."""
        return self.count(position) > 0

    def merge(self, other: "Coverage") -> None:
        """Incorporate `other` into `self`. Both must have the same length."""
        if len(other) != len(self):
            raise ValueError(f"cannot merge coverages of sizes {len(self)} and {len(other)}")
        self.state += other.state

    def reset(self) -> None:
        """Mark all positions as uncovered so the coverage can be reused."""
        self.state.fill(0)

    def __len__(self) -> int:
        return len(self.state)
