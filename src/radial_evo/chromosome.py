"""Chromosome types for real-valued evolutionary search.

This module provides the two chromosome variants used by the engine:

- VectorChromosome: A point inside a bounding box together with the random
  generator that drives its own crossover and mutation
- CriteriaChromosome: A VectorChromosome bound to the shared set of fitness
  evaluators of a run (one evaluator for single-objective and constrained
  runs, several for multi-criteria runs)

Both classes are frozen dataclasses. Operators never modify the receiver; they
return fresh chromosomes that share the parent's bounds and generator.
"""

from dataclasses import dataclass

import numpy as np

from radial_evo.protocols import FitnessEvaluator

JITTER_SCALE = 300.0
"""Divisor applied to each coordinate's range to get the jitter standard deviation.

A coordinate spanning ``[lower, upper)`` is perturbed with standard deviation
``(upper - lower) / JITTER_SCALE``, i.e. a third of one percent of its range.
"""


def _readonly(values: np.ndarray) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class VectorChromosome:
    """A candidate point in a bounded real coordinate space.

    Attributes:
        point: Coordinates, shape (n_vars,). Stored as a read-only copy.
        lower: Lower bounds, shape (n_vars,). Shared with every chromosome of a run.
        upper: Upper bounds, shape (n_vars,). Shared with every chromosome of a run.
        rng: Generator private to this chromosome's lineage.

    Example:
        >>> rng = np.random.default_rng(0)
        >>> ch = VectorChromosome(np.array([0.5, 0.5]), np.zeros(2), np.ones(2), rng)
        >>> len(ch.cross(ch))
        4
    """

    point: np.ndarray
    lower: np.ndarray
    upper: np.ndarray
    rng: np.random.Generator

    def __post_init__(self) -> None:
        """Validate shapes and freeze the point.

        Raises:
            TypeError: If point is not one-dimensional.
            ValueError: If bounds do not match the point's dimensionality.
        """
        point = np.asarray(self.point, dtype=np.float64)
        if point.ndim != 1:
            raise TypeError(f"point must be 1D, got shape {point.shape}")
        if self.lower.shape != point.shape or self.upper.shape != point.shape:
            raise ValueError(
                f"bounds have shapes {self.lower.shape} and {self.upper.shape}, expected {point.shape} to match point"
            )
        object.__setattr__(self, "point", _readonly(point))

    @property
    def n_vars(self) -> int:
        """Return the number of coordinates."""
        return self.point.shape[0]

    def with_point(self, point: np.ndarray) -> "VectorChromosome":
        """Return a chromosome at ``point`` sharing this one's bounds and generator."""
        return VectorChromosome(point=point, lower=self.lower, upper=self.upper, rng=self.rng)

    def distance(self, other: "VectorChromosome") -> float:
        """Euclidean distance to another chromosome.

        Raises:
            ValueError: If the chromosomes have different dimensionality.
        """
        if self.point.shape != other.point.shape:
            raise ValueError(f"cannot measure distance between {self.n_vars}-D and {other.n_vars}-D chromosomes")
        return float(np.linalg.norm(self.point - other.point))

    def cross(self, other: "VectorChromosome") -> list["VectorChromosome"]:
        """Blend two parents with a single weight drawn from this parent's generator.

        With ``w ~ U[0, 1)`` the children are ``w*A + (1-w)*B`` and
        ``w*B + (1-w)*A``. Both parents are appended unchanged, so the result
        always has four members.

        Args:
            other: Second parent.

        Returns:
            ``[child_a, child_b, self, other]``.

        Raises:
            ValueError: If the parents have different dimensionality.
        """
        if self.point.shape != other.point.shape:
            raise ValueError(f"cannot cross {self.n_vars}-D and {other.n_vars}-D chromosomes")
        w = self.rng.random()
        child_a = self.with_point(w * self.point + (1.0 - w) * other.point)
        child_b = self.with_point(w * other.point + (1.0 - w) * self.point)
        return [child_a, child_b, self, other]

    def reset(self) -> "VectorChromosome":
        """Redraw every coordinate uniformly from ``[lower, upper)``."""
        return self.with_point(self.rng.uniform(self.lower, self.upper))

    def jitter(self) -> "VectorChromosome":
        """Add zero-mean Gaussian noise scaled to each coordinate's range.

        The result is not clipped back into the bounds.
        """
        scale = (self.upper - self.lower) / JITTER_SCALE
        return self.with_point(self.point + self.rng.normal(0.0, scale))

    def mutate(self) -> "VectorChromosome":
        """Apply either a full reset or a local jitter, each with probability 1/2."""
        if self.rng.random() < 0.5:
            return self.reset()
        return self.jitter()


@dataclass(frozen=True, eq=False)
class CriteriaChromosome:
    """A VectorChromosome scored by the shared evaluators of a run.

    Used for single-objective (one evaluator), constrained (one
    ConstrainedEvaluator) and multi-criteria (several evaluators) runs. The
    evaluator tuple is shared by reference across the whole population and is
    never modified; only the wrapped point changes between generations.

    Attributes:
        vector: The underlying chromosome.
        evaluators: Evaluators scoring this chromosome, one per criterion.
    """

    vector: VectorChromosome
    evaluators: tuple[FitnessEvaluator, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.evaluators, tuple):
            object.__setattr__(self, "evaluators", tuple(self.evaluators))
        if len(self.evaluators) == 0:
            raise ValueError("CriteriaChromosome requires at least one evaluator")

    @property
    def point(self) -> np.ndarray:
        """Coordinates of the wrapped chromosome."""
        return self.vector.point

    @property
    def criteria_count(self) -> int:
        """Number of criteria this chromosome is scored on."""
        return len(self.evaluators)

    def fitness(self, criterion: int = 0) -> float:
        """Score this chromosome on one criterion."""
        return float(self.evaluators[criterion].fitness(self))

    def fitnesses(self) -> np.ndarray:
        """Score this chromosome on every criterion, shape (criteria_count,)."""
        return np.array([fe.fitness(self) for fe in self.evaluators], dtype=np.float64)

    def _wrap(self, vector: VectorChromosome) -> "CriteriaChromosome":
        return CriteriaChromosome(vector=vector, evaluators=self.evaluators)

    def distance(self, other: "CriteriaChromosome") -> float:
        return self.vector.distance(other.vector)

    def cross(self, other: "CriteriaChromosome") -> list["CriteriaChromosome"]:
        child_a, child_b, _, _ = self.vector.cross(other.vector)
        return [self._wrap(child_a), self._wrap(child_b), self, other]

    def mutate(self) -> "CriteriaChromosome":
        return self._wrap(self.vector.mutate())
