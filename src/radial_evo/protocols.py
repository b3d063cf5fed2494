"""Protocol definitions for the pluggable parts of the evolutionary engine.

The engine is generic over three capabilities, each expressed as a structural
protocol so that any object with the right shape can be plugged in:

1. **Chromosome**: A candidate point that knows how to recombine with a peer,
   mutate itself, and measure its distance to another candidate.

2. **FitnessEvaluator**: A scoring function over a chromosome's point. Higher
   or lower is better depending on how the run is configured.

3. **Selector**: A strategy that picks which members of a (possibly oversized)
   population survive into the next generation, working purely on a fitness
   matrix so that it stays independent of the chromosome representation.

Example usage:
    ```python
    def my_step(
        chromosomes: list[Chromosome],
        evaluators: Sequence[FitnessEvaluator],
        selector: Selector,
        rng: np.random.Generator,
    ) -> list[Chromosome]:
        fitness = np.array([[fe.fitness(ch) for fe in evaluators] for ch in chromosomes])
        keep = selector(fitness, n_select=len(chromosomes) // 2, rng=rng)
        return [chromosomes[i] for i in keep]
    ```
"""

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class Chromosome(Protocol):
    """Protocol for a candidate solution in a bounded real coordinate space.

    Attributes:
        point: Coordinates of the candidate, shape (n_vars,).

    Implementations must keep the dimensionality fixed for their lifetime.
    Operators return new chromosomes; callers must not rely on the receiver
    being modified.
    """

    point: np.ndarray

    def cross(self, other: "Chromosome") -> list["Chromosome"]:
        """Recombine with another chromosome.

        Args:
            other: Second parent with the same dimensionality.

        Returns:
            Exactly four chromosomes: two blended children followed by the two
            parents.
        """
        ...

    def mutate(self) -> "Chromosome":
        """Return a mutated chromosome derived from this one."""
        ...

    def distance(self, other: "Chromosome") -> float:
        """Euclidean distance between the points of two chromosomes."""
        ...


@runtime_checkable
class FitnessEvaluator(Protocol):
    """Protocol for scoring chromosomes.

    An evaluator maps any object exposing a ``point`` array to a scalar. It must
    be pure given the point (the constrained evaluator's tolerance is the only
    externally mutated state, and it changes only between generations).

    Example:
        ```python
        class Sphere:
            def fitness(self, chromosome) -> float:
                return float(np.sum(chromosome.point**2))
        ```
    """

    def fitness(self, chromosome: Chromosome) -> float:
        """Score a chromosome.

        Args:
            chromosome: Chromosome (or any object with a ``point`` attribute).

        Returns:
            Scalar fitness value.
        """
        ...


@runtime_checkable
class Selector(Protocol):
    """Protocol for population selection strategies.

    Selectors pick the members of a population that survive a selection pass.
    They receive a fitness matrix rather than the chromosomes themselves, so a
    single strategy serves every chromosome variant.

    Parameters:
        fitness: Fitness values, shape (n, n_criteria). Single-objective runs
            pass a single column.
        n_select: Number of survivors to return.
        rng: NumPy random number generator for reproducible stochastic selection.

    Returns:
        Array of indices into the population, shape (n_select,). Strategies that
        sample with replacement may repeat indices.

    Example:
        ```python
        def best_half(fitness, n_select, rng):
            return np.argsort(-fitness[:, 0], kind="stable")[:n_select]
        ```
    """

    def __call__(
        self,
        fitness: np.ndarray,
        n_select: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Select survivor indices from a fitness matrix.

        Args:
            fitness: Fitness matrix of shape (n, n_criteria).
            n_select: Number of indices to return.
            rng: NumPy random number generator for reproducibility.

        Returns:
            Array of shape (n_select,) containing indices of survivors.
        """
        ...
