"""Shared test fixtures for radial-evo tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- Sphere and constrained-parabola evaluators and parameter sets
- make_chromosome: builder for chromosomes at fixed points
"""

import numpy as np
import pytest

from radial_evo import (
    ConstrainedEvaluator,
    CriteriaChromosome,
    GeneticParameters,
    VectorChromosome,
    VectorFitnessEvaluator,
)


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def sphere_evaluator() -> VectorFitnessEvaluator:
    """Negated sphere function; maximum 0 at the origin."""
    return VectorFitnessEvaluator(lambda x: -float(np.sum(x**2)))


@pytest.fixture
def sphere_params(sphere_evaluator) -> GeneticParameters:
    """2-D sphere problem on [-6, 6]^2, maximizing."""
    return GeneticParameters(
        lower=[-6.0, -6.0],
        upper=[6.0, 6.0],
        evaluators=[sphere_evaluator],
        search_radius=0.5,
        cross_allow_radius=0.25,
        mutation_chance=0.2,
        rank_pressure=1.5,
    )


@pytest.fixture
def parabola_evaluator() -> ConstrainedEvaluator:
    """Minimize x^2 + (y - 1)^2 subject to y = x^2.

    The constrained optima are (+-1/sqrt(2), 1/2).
    """
    return ConstrainedEvaluator(
        objective=lambda x: x[0] ** 2 + (x[1] - 1.0) ** 2,
        restrictions=[lambda x: x[1] - x[0] ** 2],
        weights=[10.0],
        eps=0.01,
    )


@pytest.fixture
def parabola_params(parabola_evaluator) -> GeneticParameters:
    """Constrained parabola problem on [-1, 1]^2, minimizing."""
    return GeneticParameters(
        lower=[-1.0, -1.0],
        upper=[1.0, 1.0],
        evaluators=[parabola_evaluator],
        search_radius=0.01,
        cross_allow_radius=0.005,
        mutation_chance=0.3,
        rank_pressure=1.3,
        maximize=False,
    )


@pytest.fixture
def make_chromosome(sphere_evaluator):
    """Builder for 2-D CriteriaChromosomes on [-6, 6]^2 at fixed points.

    Returns:
        Function ``(point, seed=0, evaluators=None) -> CriteriaChromosome``.
    """
    lower = np.array([-6.0, -6.0])
    upper = np.array([6.0, 6.0])

    def build(point, seed: int = 0, evaluators=None) -> CriteriaChromosome:
        vector = VectorChromosome(np.asarray(point, dtype=np.float64), lower, upper, np.random.default_rng(seed))
        return CriteriaChromosome(vector=vector, evaluators=evaluators or (sphere_evaluator,))

    return build


@pytest.fixture
def four_points(make_chromosome) -> list[CriteriaChromosome]:
    """Two tight pairs of chromosomes, the pairs far apart.

    Points (0, 0), (0.1, 0), (5, 5), (5.1, 5). Sphere fitness prefers the first
    of each pair.
    """
    return [
        make_chromosome([0.0, 0.0], seed=0),
        make_chromosome([0.1, 0.0], seed=1),
        make_chromosome([5.0, 5.0], seed=2),
        make_chromosome([5.1, 5.0], seed=3),
    ]
