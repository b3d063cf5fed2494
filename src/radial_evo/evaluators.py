"""Fitness evaluators for chromosomes.

This module provides:
- VectorFitnessEvaluator: wraps a plain function of a point
- ConstrainedEvaluator: penalty-method fitness with a tolerance on restrictions
- LinearAnnealing: moves a ConstrainedEvaluator's tolerance between generations

Evaluators read only ``chromosome.point``, so they work with every chromosome
variant in :mod:`radial_evo.chromosome`.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import numpy as np

from radial_evo.protocols import Chromosome

PointFunction = Callable[[np.ndarray], float]
"""A scalar function of a point of shape (n_vars,)."""


@dataclass(frozen=True)
class VectorFitnessEvaluator:
    """Evaluate a chromosome by applying a function to its point.

    Attributes:
        fn: Scalar function of the point.

    Example:
        >>> sphere = VectorFitnessEvaluator(lambda x: -float(np.sum(x**2)))
    """

    fn: PointFunction

    def fitness(self, chromosome: Chromosome) -> float:
        return float(self.fn(chromosome.point))


@dataclass(eq=False)
class ConstrainedEvaluator:
    """Penalty-method fitness for equality-constrained problems.

    Every restriction is a function that should evaluate to zero at feasible
    points. A restriction whose absolute value reaches the tolerance ``eps``
    adds ``weight * |value|`` to the penalty; restrictions inside the tolerance
    are treated as satisfied and add nothing.

    The combined fitness is ``raw + penalty`` when minimizing and
    ``raw - penalty`` when maximizing, so a violation always makes a point
    worse.

    ``eps`` is the only mutable attribute. It is owned by the driver and is
    changed between generations (see :class:`LinearAnnealing`).

    Attributes:
        objective: Raw objective function of the point.
        restrictions: Functions that must be zero, in order.
        weights: Penalty weight for each restriction.
        eps: Current tolerance on restriction values.
        maximize: Whether higher raw objective values are better.
        inclusive_tolerance: If True, a restriction exactly at ``eps`` is
            tolerated (``|r| <= eps``). Default False tolerates only ``|r| < eps``.

    Example:
        >>> fe = ConstrainedEvaluator(
        ...     objective=lambda x: x[0] ** 2 + (x[1] - 1.0) ** 2,
        ...     restrictions=[lambda x: x[1] - x[0] ** 2],
        ...     weights=[1.0],
        ...     eps=0.01,
        ... )
    """

    objective: PointFunction
    restrictions: Sequence[PointFunction]
    weights: Sequence[float]
    eps: float = 0.0
    maximize: bool = False
    inclusive_tolerance: bool = False
    _weights: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate restriction weights.

        Raises:
            ValueError: If weights and restrictions differ in length, or eps or
                any weight is negative.
        """
        self.restrictions = tuple(self.restrictions)
        self._weights = np.asarray(self.weights, dtype=np.float64)
        if self._weights.shape != (len(self.restrictions),):
            raise ValueError(
                f"weights has {self._weights.size} elements, expected {len(self.restrictions)} to match restrictions"
            )
        if np.any(self._weights < 0):
            raise ValueError(f"weights must be non-negative, got {self._weights.tolist()}")
        if self.eps < 0:
            raise ValueError(f"eps must be non-negative, got {self.eps}")

    def violations(self, chromosome: Chromosome) -> np.ndarray:
        """Absolute restriction values at the chromosome's point, shape (n_restrictions,)."""
        point = chromosome.point
        return np.array([abs(r(point)) for r in self.restrictions], dtype=np.float64)

    def raw_fitness(self, chromosome: Chromosome) -> float:
        """Objective value without any penalty."""
        return float(self.objective(chromosome.point))

    def penalty(self, chromosome: Chromosome) -> float:
        """Weighted sum of the violations that fall outside the tolerance."""
        if not self.restrictions:
            return 0.0
        values = self.violations(chromosome)
        if self.inclusive_tolerance:
            active = values > self.eps
        else:
            active = values >= self.eps
        return float(np.sum(self._weights[active] * values[active]))

    def is_feasible(self, chromosome: Chromosome) -> bool:
        """Whether every restriction is within the current tolerance."""
        return self.penalty(chromosome) == 0.0

    def fitness(self, chromosome: Chromosome) -> float:
        raw = self.raw_fitness(chromosome)
        penalty = self.penalty(chromosome)
        return raw - penalty if self.maximize else raw + penalty


@dataclass
class LinearAnnealing:
    """Move an evaluator's tolerance linearly from ``start`` to ``end``.

    Each call to :meth:`step` shifts ``evaluator.eps`` by ``(end - start) / steps``,
    so after ``steps`` calls the tolerance equals ``end``. Construction sets the
    tolerance to ``start``.

    Attributes:
        evaluator: Evaluator whose ``eps`` is driven.
        start: Tolerance for the first generation.
        end: Tolerance after the last generation.
        steps: Number of generations over which to anneal.

    Example:
        >>> schedule = LinearAnnealing(evaluator, start=0.01, end=0.005, steps=100)
        >>> for _ in range(100):
        ...     schedule.step()
    """

    evaluator: ConstrainedEvaluator
    start: float
    end: float
    steps: int
    completed: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.steps <= 0:
            raise ValueError(f"steps must be positive, got {self.steps}")
        if self.start < 0 or self.end < 0:
            raise ValueError(f"tolerances must be non-negative, got start={self.start}, end={self.end}")
        self.reset()

    @property
    def increment(self) -> float:
        """Change applied to the tolerance on every step."""
        return (self.end - self.start) / self.steps

    def reset(self) -> None:
        """Return the tolerance to ``start``."""
        self.completed = 0
        self.evaluator.eps = self.start

    def step(self) -> float:
        """Advance one generation and return the new tolerance.

        Steps past ``steps`` keep the tolerance at ``end``.
        """
        if self.completed < self.steps:
            self.completed += 1
            if self.completed == self.steps:
                self.evaluator.eps = self.end
            else:
                self.evaluator.eps += self.increment
        return self.evaluator.eps
