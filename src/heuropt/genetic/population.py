"""
Population management for random-key genetic algorithms.

This module defines the Member class, a gene vector with its cached value, and
the Population class, which keeps members ranked by value and exposes the
elite, regular and mutant partitions used by BRKGA.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

import numpy as np

from ..core.problem import Objective
from .decoder import Decoder


# (rng, member_size, member_number) -> keys in [0, 1)
MemberBuilder = Callable[[np.random.Generator, int, int], np.ndarray]


def random_member_builder(rng: np.random.Generator, member_size: int, member_number: int) -> np.ndarray:
    """Draw `member_size` uniform random keys."""
    return rng.random(member_size)


@dataclass(eq=False)
class Member:
    """
    A chromosome of random keys.

    Attributes:
        keys: Gene vector with values in [0, 1)
        value: Cached decoded value of `keys`
    """

    keys: np.ndarray
    value: Any = None

    def __len__(self) -> int:
        return len(self.keys)

    def __getitem__(self, gene: int) -> float:
        return self.keys[gene]

    def copy(self) -> "Member":
        """Deep copy of this member."""
        return Member(self.keys.copy(), self.value)


@dataclass
class GenerationHistory:
    """
    Statistics for a single generation of evolution.

    Tracks key metrics to monitor evolution progress.
    """

    generation: int
    population_size: int
    best_value: Any
    worst_value: Any
    avg_value: float
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "generation": self.generation,
            "population_size": self.population_size,
            "best_value": self.best_value,
            "worst_value": self.worst_value,
            "avg_value": self.avg_value,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationHistory":
        """Create instance from dictionary."""
        return cls(**data)


class Population:
    """
    A list of members ranked by their value.

    Members are sorted best first according to the objective: ascending values
    for minimization, descending for maximization. The best `n_elites` members
    are the elites, the worst `n_mutants` slots are replaced by mutants on
    evolution, and the rest are regulars.

    Attributes:
        members: Members, best first once sorted
        objective: Direction used to rank members
        n_elites: Size of the elite partition
        n_mutants: Size of the mutant partition
    """

    def __init__(
        self,
        members: List[Member],
        objective: Objective,
        n_elites: int = 0,
        n_mutants: int = 0,
    ):
        """
        Initialize a Population.

        Args:
            members: Initial members (not sorted by this constructor)
            objective: Direction used to rank members
            n_elites: Number of elites
            n_mutants: Number of mutants
        """
        if n_elites + n_mutants > len(members):
            raise ValueError(
                f"elites + mutants ({n_elites} + {n_mutants}) exceeds population size {len(members)}"
            )

        self.members = members
        self.objective = objective
        self.n_elites = n_elites
        self.n_mutants = n_mutants

    @classmethod
    def random(
        cls,
        size: int,
        member_size: int,
        decoder: Decoder,
        rng: np.random.Generator,
        n_elites: int = 0,
        n_mutants: int = 0,
        member_builder: Optional[MemberBuilder] = None,
    ) -> "Population":
        """
        Generate a sorted population of newly built members.

        Args:
            size: Number of members
            member_size: Number of genes per member
            decoder: Decoder used to compute each member's value
            rng: Random source
            n_elites: Number of elites
            n_mutants: Number of mutants
            member_builder: Builds the keys of each member; random keys when None

        Returns:
            A new scored and sorted Population
        """
        member_builder = member_builder if member_builder is not None else random_member_builder

        members = []
        for member_number in range(size):
            keys = np.array(member_builder(rng, member_size, member_number), dtype=float)
            if keys.shape != (member_size,):
                raise ValueError(
                    f"member {member_number} has shape {keys.shape}, expected ({member_size},)"
                )
            members.append(Member(keys, decoder.decode_value(keys)))

        population = cls(members, decoder.problem.objective, n_elites, n_mutants)
        population.sort()
        return population

    @property
    def size(self) -> int:
        """Get the current population size."""
        return len(self.members)

    @property
    def member_size(self) -> int:
        """Number of genes in a member."""
        return len(self.members[0].keys) if self.members else 0

    def sort(self) -> None:
        """Rank members best first. Ties keep their current order."""
        self.members.sort(key=lambda m: m.value, reverse=self.objective is Objective.MAX)

    def compute_values(self, decoder: Decoder) -> None:
        """Decode every member and sort the population."""
        for member in self.members:
            member.value = decoder.decode_value(member.keys)

        self.sort()

    def elite_indices(self) -> range:
        return range(0, self.n_elites)

    def regular_indices(self) -> range:
        return range(self.n_elites, self.size - self.n_mutants)

    def mutant_indices(self) -> range:
        return range(self.size - self.n_mutants, self.size)

    def elites(self) -> List[Member]:
        """The best members."""
        return self.members[:self.n_elites]

    def not_elites(self) -> List[Member]:
        """The members which aren't elites."""
        return self.members[self.n_elites:]

    def regulars(self) -> List[Member]:
        """Members which are neither elites nor mutants."""
        return self.members[self.n_elites:self.size - self.n_mutants]

    def mutants(self) -> List[Member]:
        """The worst members, replaced by mutants on evolution."""
        return self.members[self.size - self.n_mutants:]

    def best(self) -> Optional[Member]:
        """The best member, if any."""
        return self.members[0] if self.members else None

    def is_sorted(self) -> bool:
        """Check that members are ranked according to the objective."""
        values = [m.value for m in self.members]
        if self.objective is Objective.MAX:
            return all(a >= b for a, b in zip(values, values[1:]))
        return all(a <= b for a, b in zip(values, values[1:]))

    def copy(self) -> "Population":
        """Deep copy with independent gene vectors."""
        return Population(
            [m.copy() for m in self.members],
            self.objective,
            self.n_elites,
            self.n_mutants,
        )

    def statistics(self) -> Dict[str, Any]:
        """
        Compute population statistics.

        Returns:
            Dictionary containing population statistics
        """
        if not self.members:
            return {
                "size": 0,
                "best_value": None,
                "worst_value": None,
                "avg_value": None,
            }

        values = np.array([m.value for m in self.members], dtype=float)

        return {
            "size": self.size,
            "best_value": self.members[0].value,
            "worst_value": self.members[-1].value,
            "avg_value": float(np.mean(values)),
        }

    def __getitem__(self, index: int) -> Member:
        return self.members[index]

    def __len__(self) -> int:
        """Get the population size."""
        return len(self.members)

    def __iter__(self) -> Iterator[Member]:
        """Iterate over members, best first."""
        return iter(self.members)

    def __repr__(self) -> str:
        """String representation of the population."""
        stats = self.statistics()
        return (
            f"Population(size={stats['size']}, "
            f"best={stats['best_value']}, "
            f"worst={stats['worst_value']}, "
            f"elites={self.n_elites}, mutants={self.n_mutants})"
        )
