"""Factory binding chromosomes and processors to one parameter set.

GeneticFactory is the entry point of a run. It owns the run's root random
generator and hands out independent child generators to every chromosome
lineage and processor it creates, so a single seed makes the whole run
reproducible.

Example:
    >>> params = GeneticParameters(
    ...     lower=[-6.0, -6.0],
    ...     upper=[6.0, 6.0],
    ...     evaluators=[VectorFitnessEvaluator(lambda x: -float(np.sum(x**2)))],
    ... )
    >>> factory = GeneticFactory(params, seed=42)
    >>> processor = factory.new_processor().init_population(factory.new_population(100))
"""

import numpy as np

from radial_evo.chromosome import CriteriaChromosome, VectorChromosome
from radial_evo.parameters import GeneticParameters
from radial_evo.processor import GeneticProcessor


class GeneticFactory:
    """Create chromosomes and processors for one GeneticParameters instance.

    Args:
        parameters: Run configuration shared by everything the factory creates.
        seed: Seed for the root generator. If None, uses system entropy.
    """

    def __init__(self, parameters: GeneticParameters, seed: int | np.random.SeedSequence | None = None) -> None:
        self.parameters = parameters
        self.rng = np.random.default_rng(seed)

    def _child_rng(self) -> np.random.Generator:
        return self.rng.spawn(1)[0]

    def new_vector_chromosome(self) -> VectorChromosome:
        """Create a chromosome drawn uniformly from the search box."""
        p = self.parameters
        return VectorChromosome(
            point=self.rng.uniform(p.lower, p.upper),
            lower=p.lower,
            upper=p.upper,
            rng=self._child_rng(),
        )

    def new_chromosome(self) -> CriteriaChromosome:
        """Create a chromosome drawn uniformly from the search box, bound to the run's evaluators."""
        return CriteriaChromosome(vector=self.new_vector_chromosome(), evaluators=self.parameters.evaluators)

    def new_population(self, size: int) -> list[CriteriaChromosome]:
        """Create ``size`` chromosomes with :meth:`new_chromosome`.

        Raises:
            ValueError: If size is negative.
        """
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        return [self.new_chromosome() for _ in range(size)]

    def new_processor(self) -> GeneticProcessor:
        """Create an unseeded processor with its own generator."""
        return GeneticProcessor(parameters=self.parameters, rng=self._child_rng())
