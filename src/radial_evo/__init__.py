"""radial-evo: Pluggable evolutionary optimization over bounded real spaces.

A pure numpy genetic engine with radius-restricted arithmetic crossover,
two-mode mutation, rank-based selection strategies, a penalty model for
equality constraints and elite declustering for extracting several optima.

Example (single objective):
    >>> import numpy as np
    >>> from radial_evo import GeneticFactory, GeneticParameters, VectorFitnessEvaluator, evolve
    >>> fe = VectorFitnessEvaluator(lambda x: -float(np.sum(x**2)))
    >>> params = GeneticParameters(lower=[-6.0, -6.0], upper=[6.0, 6.0], evaluators=[fe])
    >>> result = evolve(GeneticFactory(params, seed=42), population_size=100, n_generations=50)
    >>> len(result.population)
    100

Example (constrained, with elite declustering):
    >>> from radial_evo import ConstrainedEvaluator, LinearAnnealing
    >>> from radial_evo import decluster_until_stable, constrained_preference, rank_constrained
    >>> fe = ConstrainedEvaluator(
    ...     objective=lambda x: x[0] ** 2 + (x[1] - 1.0) ** 2,
    ...     restrictions=[lambda x: x[1] - x[0] ** 2],
    ...     weights=[10.0],
    ... )
    >>> params = GeneticParameters(
    ...     lower=[-1.0, -1.0], upper=[1.0, 1.0], evaluators=[fe], maximize=False,
    ...     search_radius=0.01, cross_allow_radius=0.005, mutation_chance=0.3, rank_pressure=1.3,
    ... )
    >>> schedule = LinearAnnealing(fe, start=0.01, end=0.005, steps=100)
    >>> result = evolve(GeneticFactory(params, seed=7), 300, 100, elite_count=5, annealing=schedule)
    >>> optima = rank_constrained(decluster_until_stable(list(result.elites), 0.7, constrained_preference(fe)), fe)
"""

from radial_evo.chromosome import CriteriaChromosome, VectorChromosome
from radial_evo.decluster import (
    constrained_preference,
    decluster,
    decluster_until_stable,
    fitness_preference,
    rank_constrained,
)
from radial_evo.evaluators import ConstrainedEvaluator, LinearAnnealing, VectorFitnessEvaluator
from radial_evo.factory import GeneticFactory
from radial_evo.parameters import GeneticParameters
from radial_evo.population import distances_from, fitness_matrix, points_of
from radial_evo.processor import GeneticProcessor, Phase
from radial_evo.protocols import Chromosome, FitnessEvaluator, Selector
from radial_evo.ranking import best_first, draw_without_replacement, linear_rank_weights
from radial_evo.registry import SelectionRegistry, list_selections
from radial_evo.results import EvolutionResult, TrialOutcome, TrialSummary
from radial_evo.runner import evolve, run_trials, summarize_trials
from radial_evo.selection import criteria_selection, exponential_rank_selection, linear_rank_selection

__all__ = [
    # Run loops
    "evolve",
    "run_trials",
    "summarize_trials",
    # Engine
    "GeneticFactory",
    "GeneticParameters",
    "GeneticProcessor",
    "Phase",
    # Chromosomes
    "VectorChromosome",
    "CriteriaChromosome",
    # Evaluators
    "VectorFitnessEvaluator",
    "ConstrainedEvaluator",
    "LinearAnnealing",
    # Selection strategies
    "linear_rank_selection",
    "exponential_rank_selection",
    "criteria_selection",
    # Ranking primitives
    "best_first",
    "linear_rank_weights",
    "draw_without_replacement",
    # Population helpers
    "points_of",
    "fitness_matrix",
    "distances_from",
    # Declustering
    "decluster",
    "decluster_until_stable",
    "fitness_preference",
    "constrained_preference",
    "rank_constrained",
    # Registry system
    "SelectionRegistry",
    "list_selections",
    # Protocols
    "Chromosome",
    "FitnessEvaluator",
    "Selector",
    # Result types
    "EvolutionResult",
    "TrialOutcome",
    "TrialSummary",
]
