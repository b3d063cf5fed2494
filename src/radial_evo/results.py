"""Result types for evolutionary runs and repeated trials.

This module provides result dataclasses returned by :mod:`radial_evo.runner`:

- EvolutionResult: Final population and collected elites of one run
- TrialOutcome: Value (or failure) of one trial in a batch of independent runs

Both classes are immutable (frozen dataclasses).
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from radial_evo.parameters import GeneticParameters
from radial_evo.protocols import Chromosome, FitnessEvaluator
from radial_evo.ranking import best_first


@dataclass(frozen=True, eq=False)
class EvolutionResult:
    """Outcome of one evolutionary run.

    Attributes:
        parameters: Configuration the run used.
        population: Final population after the reducing selection pass.
        elites: Chromosomes collected with ``top_chromosomes`` after every
            selection pass, in collection order. Empty if no elites were requested.
        generations: Number of generations completed.

    Example:
        >>> result = evolve(factory, population_size=100, n_generations=50, elite_count=5)
        >>> best = result.best()
        >>> best.point
        array([0.0012, -0.0031])
    """

    parameters: GeneticParameters
    population: tuple[Chromosome, ...]
    elites: tuple[Chromosome, ...]
    generations: int

    def __post_init__(self) -> None:
        """Validate fields and normalise sequences to tuples.

        Raises:
            ValueError: If population is empty or generations is negative.
        """
        object.__setattr__(self, "population", tuple(self.population))
        object.__setattr__(self, "elites", tuple(self.elites))
        if len(self.population) == 0:
            raise ValueError("population must not be empty")
        if self.generations < 0:
            raise ValueError(f"generations must be non-negative, got {self.generations}")

    def fitness(self, evaluator: FitnessEvaluator | None = None) -> np.ndarray:
        """Fitness of the final population, shape (n,).

        Args:
            evaluator: Evaluator to score with. Defaults to the first configured one.
        """
        fe = evaluator if evaluator is not None else self.parameters.evaluators[0]
        return np.array([fe.fitness(ch) for ch in self.population], dtype=np.float64)

    def best(self, evaluator: FitnessEvaluator | None = None) -> Chromosome:
        """Best chromosome of the final population.

        Args:
            evaluator: Evaluator to rank by. Defaults to the first configured one.
        """
        order = best_first(self.fitness(evaluator), maximize=self.parameters.maximize)
        return self.population[int(order[0])]


@dataclass(frozen=True)
class TrialOutcome:
    """Outcome of one trial in a batch.

    Attributes:
        index: Position of the trial in the batch.
        seed: Seed the trial was run with.
        value: Whatever the trial function returned, or None if it failed.
        error: ``repr`` of the exception raised by the trial, or None on success.
        elapsed: Wall-clock duration of the trial in seconds.
    """

    index: int
    seed: int
    value: Any = None
    error: str | None = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        """Whether the trial completed without raising."""
        return self.error is None


@dataclass(frozen=True, eq=False)
class TrialSummary:
    """Aggregate of a batch of trials.

    Attributes:
        n_trials: Number of trials in the batch.
        n_failed: Number of trials that raised.
        mean_value: Element-wise mean of successful trial values, or None if
            every trial failed.
        mean_elapsed: Mean duration of successful trials in seconds.
    """

    n_trials: int
    n_failed: int
    mean_value: np.ndarray | float | None
    mean_elapsed: float
