"""Run configuration for the genetic engine.

GeneticParameters bundles everything a processor needs for one run: the search
box, the fitness evaluators, the crossover radii, the mutation chance and the
selection strategy. It is a frozen dataclass validated on construction, so an
invalid configuration fails before the first generation rather than producing
NaN weights mid-run.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

# Import selection module to trigger strategy registration
import radial_evo.selection  # noqa: F401
from radial_evo.evaluators import ConstrainedEvaluator
from radial_evo.protocols import FitnessEvaluator, Selector
from radial_evo.registry import SelectionRegistry


def _bounds_array(name: str, values: Sequence[float] | np.ndarray) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != 1:
        raise TypeError(f"{name} must be 1D, got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must be finite, got {arr.tolist()}")
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class GeneticParameters:
    """Immutable configuration for one evolutionary run.

    Attributes:
        lower: Lower corner of the search box, shape (n_vars,).
        upper: Upper corner of the search box, shape (n_vars,). Must be strictly
            greater than ``lower`` in every coordinate.
        evaluators: Fitness evaluators, one per criterion. A single evaluator
            gives a single-objective (or constrained) run.
        search_radius: Radius around the first parent within which partner
            candidates are gathered during crossover.
        cross_allow_radius: Tighter radius a candidate must fall within to be
            accepted as a local partner.
        max_cross_choices: Maximum number of in-radius candidates examined
            before falling back to a random partner. None examines them all.
        mutation_chance: Probability in [0, 1] that a chromosome is mutated.
        rank_pressure: Linear-ranking shape parameter in [1, 2]. 1 selects
            uniformly, 2 gives the strongest pull toward the best.
        maximize: Whether higher fitness values are better. Must agree with
            the direction of every ConstrainedEvaluator.
        selection: Registered strategy name or a Selector callable. None picks
            "criteria" for several evaluators and "linear_rank" otherwise.

    Example:
        >>> params = GeneticParameters(
        ...     lower=[-6.0, -6.0],
        ...     upper=[6.0, 6.0],
        ...     evaluators=[VectorFitnessEvaluator(lambda x: -float(np.sum(x**2)))],
        ... )
        >>> params.n_vars
        2
    """

    lower: np.ndarray
    upper: np.ndarray
    evaluators: tuple[FitnessEvaluator, ...]
    search_radius: float = 0.5
    cross_allow_radius: float = 0.25
    max_cross_choices: int | None = None
    mutation_chance: float = 0.2
    rank_pressure: float = 1.5
    maximize: bool = True
    selection: str | Selector | None = None

    def __post_init__(self) -> None:
        """Validate and normalize the configuration.

        Raises:
            TypeError: If bounds are not 1D or selection has an unsupported type.
            ValueError: If any value is outside its domain, or a
                ConstrainedEvaluator optimizes in the other direction.
        """
        lower = _bounds_array("lower", self.lower)
        upper = _bounds_array("upper", self.upper)
        if lower.shape != upper.shape:
            raise ValueError(f"lower has shape {lower.shape}, upper has shape {upper.shape}")
        if not np.all(lower < upper):
            bad = np.nonzero(lower >= upper)[0].tolist()
            raise ValueError(f"lower must be strictly less than upper, violated at coordinates {bad}")
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)

        evaluators = tuple(self.evaluators)
        if len(evaluators) == 0:
            raise ValueError("at least one fitness evaluator is required")
        object.__setattr__(self, "evaluators", evaluators)
        for i, fe in enumerate(evaluators):
            if isinstance(fe, ConstrainedEvaluator) and fe.maximize != self.maximize:
                raise ValueError(
                    f"evaluator {i} has maximize={fe.maximize}, expected {self.maximize} to match parameters"
                )

        if self.search_radius < 0:
            raise ValueError(f"search_radius must be non-negative, got {self.search_radius}")
        if self.cross_allow_radius < 0:
            raise ValueError(f"cross_allow_radius must be non-negative, got {self.cross_allow_radius}")
        if self.max_cross_choices is not None and self.max_cross_choices <= 0:
            raise ValueError(f"max_cross_choices must be positive, got {self.max_cross_choices}")
        if not 0.0 <= self.mutation_chance <= 1.0:
            raise ValueError(f"mutation_chance must be in [0, 1], got {self.mutation_chance}")
        if not 1.0 <= self.rank_pressure <= 2.0:
            raise ValueError(f"rank_pressure must be in [1, 2], got {self.rank_pressure}")
        if self.selection is not None and not isinstance(self.selection, str) and not callable(self.selection):
            raise TypeError(f"selection must be a strategy name or callable, got {type(self.selection).__name__}")

    @property
    def n_vars(self) -> int:
        """Dimensionality of the search space."""
        return self.lower.shape[0]

    @property
    def n_criteria(self) -> int:
        """Number of fitness criteria."""
        return len(self.evaluators)

    @property
    def selection_name(self) -> str | None:
        """Name of the selection strategy, or None for a custom callable."""
        if self.selection is None:
            return "criteria" if self.n_criteria > 1 else "linear_rank"
        if isinstance(self.selection, str):
            return self.selection
        return None

    def make_selector(self) -> Selector:
        """Resolve the configured selection strategy.

        Registered strategies are built with this configuration's
        ``rank_pressure`` and ``maximize``.

        Raises:
            KeyError: If the strategy name is not registered.
        """
        name = self.selection_name
        if name is None:
            return self.selection  # type: ignore[return-value]
        return SelectionRegistry.get(name, pressure=self.rank_pressure, maximize=self.maximize)
