"""Genetic processor: the state machine driving one evolutionary run.

A GeneticProcessor holds a population and applies the three generation steps
to it:

1. **select** (also ``populate``, and ``reduce`` for the final pass): contract
   the population back to its target size with the configured Selector.
2. **cross**: pair chromosomes, preferring spatially close partners, and
   replace every pair with its four crossover outputs.
3. **mutate**: mutate each chromosome independently with a fixed chance.

The processor is a frozen dataclass. Each step returns a new processor and
leaves the receiver untouched (only ``finalize`` retires its receiver), and
chromosomes are themselves immutable, so no two stages of a run can alias
mutable population state.

Example:
    >>> processor = factory.new_processor().init_population(factory.new_population(100))
    >>> for _ in range(50):
    ...     processor = processor.select().cross().mutate()
    >>> final = processor.reduce().finalize()
"""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

import numpy as np

from radial_evo.parameters import GeneticParameters
from radial_evo.population import distances_from, fitness_matrix, points_of
from radial_evo.protocols import Chromosome, FitnessEvaluator, Selector
from radial_evo.ranking import best_first


class Phase(Enum):
    """Position of a processor in the generation cycle."""

    UNINITIALIZED = "uninitialized"
    SEEDED = "seeded"
    SELECTED = "selected"
    CROSSED = "crossed"
    MUTATED = "mutated"
    FINALIZED = "finalized"


@dataclass(frozen=True, eq=False)
class GeneticProcessor:
    """Apply selection, crossover and mutation to a population.

    Attributes:
        parameters: Run configuration.
        rng: Generator for pairing, mutation decisions and selection draws.
        chromosomes: Current population. Empty until ``init_population``.
        population_size: Target size restored by every selection pass. Taken
            from the seed population.
        phase: Last step applied.
        selector: Selection strategy. Resolved from ``parameters`` if not given.
    """

    parameters: GeneticParameters
    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    chromosomes: tuple[Chromosome, ...] = ()
    population_size: int = 0
    phase: Phase = Phase.UNINITIALIZED
    selector: Selector | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.selector is None:
            object.__setattr__(self, "selector", self.parameters.make_selector())

    def _require_population(self, operation: str) -> tuple[Chromosome, ...]:
        if self.phase is Phase.UNINITIALIZED:
            raise RuntimeError(f"{operation} called before init_population")
        if self.phase is Phase.FINALIZED:
            raise RuntimeError(f"{operation} called after finalize")
        return self.chromosomes

    def init_population(self, start_population: Sequence[Chromosome]) -> "GeneticProcessor":
        """Seed the processor. This is the only legal first step.

        Args:
            start_population: Initial chromosomes. Their count becomes the
                target population size.

        Returns:
            A processor in the SEEDED phase.

        Raises:
            ValueError: If fewer than 2 chromosomes are given or their
                dimensionality does not match the parameters.
        """
        chromosomes = tuple(start_population)
        if len(chromosomes) < 2:
            raise ValueError(f"population must contain at least 2 chromosomes, got {len(chromosomes)}")
        for ch in chromosomes:
            if ch.point.shape != (self.parameters.n_vars,):
                raise ValueError(
                    f"chromosome has shape {ch.point.shape}, expected ({self.parameters.n_vars},) to match parameters"
                )
        return replace(self, chromosomes=chromosomes, population_size=len(chromosomes), phase=Phase.SEEDED)

    @property
    def population(self) -> tuple[Chromosome, ...]:
        """Current population.

        Raises:
            RuntimeError: If the processor has not been seeded.
        """
        return self._require_population("population")

    def fitness(self) -> np.ndarray:
        """Fitness matrix of the current population, shape (n, n_criteria)."""
        return fitness_matrix(self._require_population("fitness"), self.parameters.evaluators)

    def select(self) -> "GeneticProcessor":
        """Contract the population to ``population_size`` with the selector."""
        chromosomes = self._require_population("select")
        indices = self.selector(fitness_matrix(chromosomes, self.parameters.evaluators), self.population_size, self.rng)
        selected = tuple(chromosomes[int(i)] for i in indices)
        return replace(self, chromosomes=selected, phase=Phase.SELECTED)

    def populate(self) -> "GeneticProcessor":
        """Alias for :meth:`select`."""
        return self.select()

    def reduce(self) -> "GeneticProcessor":
        """Final selection pass shrinking the last offspring back to target size."""
        return self.select()

    def cross(self) -> "GeneticProcessor":
        """Pair up the population and replace each pair by its crossover outputs.

        The population is shuffled, then the first remaining chromosome is
        repeatedly taken as parent A. Remaining chromosomes within
        ``search_radius`` of A are shuffled and scanned (at most
        ``max_cross_choices`` of them) for the first one within
        ``cross_allow_radius``; if none qualifies, parent B is drawn uniformly
        from everything remaining. Each pair contributes four chromosomes; an
        unpaired last chromosome is dropped.
        """
        chromosomes = self._require_population("cross")
        params = self.parameters

        order = self.rng.permutation(len(chromosomes))
        pool = [chromosomes[i] for i in order]
        points = points_of(pool)
        offspring: list[Chromosome] = []

        while len(pool) > 1:
            first = pool.pop(0)
            first_point, points = points[0], points[1:]

            dist = distances_from(first_point, points)
            nearby = self.rng.permutation(np.flatnonzero(dist <= params.search_radius))
            if params.max_cross_choices is not None:
                nearby = nearby[: params.max_cross_choices]
            local = nearby[dist[nearby] <= params.cross_allow_radius]

            if local.size > 0:
                partner = int(local[0])
            else:
                partner = int(self.rng.integers(len(pool)))

            second = pool.pop(partner)
            points = np.delete(points, partner, axis=0)
            offspring.extend(first.cross(second))

        return replace(self, chromosomes=tuple(offspring), phase=Phase.CROSSED)

    def mutate(self) -> "GeneticProcessor":
        """Mutate each chromosome independently with ``mutation_chance``."""
        chromosomes = self._require_population("mutate")
        hits = self.rng.random(len(chromosomes)) < self.parameters.mutation_chance
        mutated = tuple(ch.mutate() if hit else ch for ch, hit in zip(chromosomes, hits))
        return replace(self, chromosomes=mutated, phase=Phase.MUTATED)

    def finalize(self) -> list[Chromosome]:
        """Extract the population as a list and retire this processor.

        The processor moves to the FINALIZED phase; every later operation on it
        raises RuntimeError.
        """
        chromosomes = list(self._require_population("finalize"))
        object.__setattr__(self, "phase", Phase.FINALIZED)
        return chromosomes

    def top_chromosomes(
        self,
        count: int,
        evaluator: FitnessEvaluator | None = None,
        maximize: bool | None = None,
    ) -> list[Chromosome]:
        """Return the ``count`` best chromosomes of the current population, best first.

        Args:
            count: Number of chromosomes, ``0 < count < len(population)``.
            evaluator: Evaluator to rank by. Defaults to the first configured one.
            maximize: Whether higher scores are better. Defaults to ``parameters.maximize``.

        Raises:
            ValueError: If count is outside ``(0, len(population))``.
            RuntimeError: If the processor has not been seeded.
        """
        chromosomes = self._require_population("top_chromosomes")
        if not 0 < count < len(chromosomes):
            raise ValueError(f"count must be in (0, {len(chromosomes)}), got {count}")
        fe = evaluator if evaluator is not None else self.parameters.evaluators[0]
        direction = self.parameters.maximize if maximize is None else maximize
        scores = np.array([fe.fitness(ch) for ch in chromosomes], dtype=np.float64)
        order = best_first(scores, maximize=direction)
        return [chromosomes[int(i)] for i in order[:count]]
