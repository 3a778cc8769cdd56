"""
Decoder abstraction for random-key genetic algorithms.
"""

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from ..core.problem import Problem


class Decoder(ABC):
    """
    Maps a vector of random keys to a solution of the target problem.

    Subclasses implement `decode` and the `problem` property. `decode_value`
    scores the decoded solution by default; it may be overridden with a direct
    computation as long as it reports exactly the value the problem's scoring
    function gives to `decode(keys)`.
    """

    @property
    @abstractmethod
    def problem(self) -> Problem:
        """The problem instance being decoded."""

    @abstractmethod
    def decode(self, keys: np.ndarray) -> Any:
        """
        Convert a member's keys into a solution.

        Args:
            keys: Gene vector with values in [0, 1); must not be modified

        Returns:
            A solution for `problem`
        """

    def decode_value(self, keys: np.ndarray) -> Any:
        """Value of the solution encoded by `keys`."""
        return self.problem.score(self.decode(keys))
