"""
Random selection of distinct elements of an array.
"""

from typing import Optional

import numpy as np


class SelectionControl:
    """
    Draws distinct random indices in `[0, quantity)` until all were chosen.
    """

    def __init__(self, quantity: int):
        self.already_chosen = np.zeros(quantity, dtype=bool)
        self.total_selected = 0

    def next(self, rng: np.random.Generator) -> Optional[int]:
        """
        Choose a random index not selected before.

        Args:
            rng: Random source

        Returns:
            The chosen index, or None once every index was selected
        """
        remaining = np.flatnonzero(~self.already_chosen)
        if len(remaining) == 0:
            return None

        chosen = int(remaining[rng.integers(len(remaining))])
        self.already_chosen[chosen] = True
        self.total_selected += 1
        return chosen

    def reset(self) -> None:
        """Allow every index to be chosen again."""
        self.already_chosen.fill(False)
        self.total_selected = 0

    def __getitem__(self, index: int) -> bool:
        return bool(self.already_chosen[index])

    def __len__(self) -> int:
        return len(self.already_chosen)
