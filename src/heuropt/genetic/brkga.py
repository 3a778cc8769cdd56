"""
Biased Random-Key Genetic Algorithm (BRKGA).

Follows the brkgaAPI design with a single population: each generation keeps
the elites, fills regular slots with biased uniform crossover between an elite
and a non-elite parent, and replaces the worst slots with fresh mutants.
Two equally sized population buffers are swapped every generation, so no
member is reallocated while evolving.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..core.problem import Evaluation
from ..core.solver import Solver
from ..core.stop_criterion import StopCriterion
from .decoder import Decoder
from .population import GenerationHistory, Member, MemberBuilder, Population

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrkgaParams:
    """
    The parameters needed to run BRKGA.

    Attributes:
        population_size: Number of members, greater than 0
        member_size: Number of genes per member, greater than 0
        elites: Number of elites (best members) kept between generations
        mutants: Number of mutants generated for each new generation
        crossover_bias: Probability of taking a gene from the elite parent,
            in [0.5, 1.0]
    """

    population_size: int
    member_size: int
    elites: int
    mutants: int
    crossover_bias: float = 0.7

    def __post_init__(self):
        """Validate parameters after initialization."""
        if self.population_size <= 0:
            raise ValueError("population_size must be greater than zero")
        if self.member_size <= 0:
            raise ValueError("member_size must be greater than zero")
        if self.elites < 0:
            raise ValueError("elites must not be negative")
        if self.mutants < 0:
            raise ValueError("mutants must not be negative")
        if self.elites + self.mutants > self.population_size:
            raise ValueError(
                f"elites + mutants ({self.elites} + {self.mutants}) must not exceed "
                f"population_size ({self.population_size})"
            )
        if self.regulars > 0 and self.elites == 0:
            raise ValueError("at least one elite is required to generate offspring by crossover")
        if not 0.5 <= self.crossover_bias <= 1.0:
            raise ValueError("crossover_bias must be between 0.5 and 1")

    @property
    def regulars(self) -> int:
        """Number of members generated by crossover."""
        return self.population_size - self.elites - self.mutants


class Brkga(Solver):
    """
    The interface to execute the BRKGA algorithm.

    Example usage:
        ```python
        brkga = Brkga(decoder, np.random.default_rng(42), params)
        logger.info(f"Initial value: {brkga.best().value}")

        for _ in range(100):
            brkga.evolve()

        logger.info(f"Final value: {brkga.best().value}")
        ```

    Identical seeds and decoders produce identical generation sequences.
    """

    def __init__(
        self,
        decoder: Decoder,
        rng: np.random.Generator,
        params: BrkgaParams,
        member_builder: Optional[MemberBuilder] = None,
    ):
        """
        Create a BRKGA instance and its initial population.

        Args:
            decoder: Decoder for the problem being solved
            rng: Random source, owned by this instance from now on
            params: Algorithm parameters
            member_builder: Builds the keys of each initial member, e.g. to
                seed heuristic solutions; random keys when None
        """
        self.decoder = decoder
        self.rng = rng
        self.params = params
        self.generations = 0
        self.history: List[GenerationHistory] = []

        self._current = Population.random(
            params.population_size,
            params.member_size,
            decoder,
            rng,
            n_elites=params.elites,
            n_mutants=params.mutants,
            member_builder=member_builder,
        )
        self._next = self._current.copy()

        logger.info(
            f"Initialized BRKGA with population size {params.population_size}, "
            f"{params.elites} elites, {params.mutants} mutants, "
            f"crossover bias {params.crossover_bias}"
        )

    def evolve(self) -> None:
        """
        Perform the evolution of the population.

        1. Elites are transferred to the next generation.
        2. Crossover between elites and non elites generates the regulars.
        3. The worst slots are replaced by mutants.
        4. The next generation is decoded, sorted and becomes the current one.
        """
        self._transfer_elites()
        self._crossover()
        self._mutate()

        self._next.compute_values(self.decoder)
        self._current, self._next = self._next, self._current

        self.generations += 1
        self._record_generation()

    def _transfer_elites(self) -> None:
        for elite, target in zip(self._current.elites(), self._next.members):
            target.keys[:] = elite.keys
            target.value = elite.value

    def _crossover(self) -> None:
        """
        Generate each regular member from an elite and a non elite parent.

        Every gene comes from the elite parent with probability
        `crossover_bias`, independently of the other genes.
        """
        elites = self._current.elites()
        not_elites = self._current.not_elites()

        for idx in self._next.regular_indices():
            child = self._next.members[idx]

            elite_parent = elites[self.rng.integers(len(elites))]
            other_parent = not_elites[self.rng.integers(len(not_elites))]

            from_elite = self.rng.random(self.params.member_size) < self.params.crossover_bias
            np.copyto(child.keys, other_parent.keys)
            np.copyto(child.keys, elite_parent.keys, where=from_elite)

    def _mutate(self) -> None:
        for idx in self._next.mutant_indices():
            self.rng.random(out=self._next.members[idx].keys)

    def _record_generation(self) -> None:
        stats = self._current.statistics()
        history = GenerationHistory(
            generation=self.generations,
            population_size=stats["size"],
            best_value=stats["best_value"],
            worst_value=stats["worst_value"],
            avg_value=stats["avg_value"],
        )
        self.history.append(history)

        logger.debug(
            f"Gen {self.generations}: "
            f"value={stats['avg_value']:.3f}/{stats['best_value']}, "
            f"worst={stats['worst_value']}"
        )

    def reset(self) -> None:
        """Replace every member of the current population by a random one."""
        for member in self._current.members:
            self.rng.random(out=member.keys)

        self._current.compute_values(self.decoder)
        self.generations = 0
        self.history.clear()

        logger.info("BRKGA population reset")

    @property
    def current_generation(self) -> int:
        """The number of the current generation."""
        return self.generations

    @property
    def current_population(self) -> Population:
        """The population of the current generation."""
        return self._current

    def best(self) -> Member:
        """The best member at this moment."""
        return self._current[0]

    def iterate(self, stop_criterion: StopCriterion) -> Optional[Evaluation]:
        self.evolve()

        solution = self.decoder.decode(self.best().keys)
        return self.decoder.problem.evaluate(solution)
