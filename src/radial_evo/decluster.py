"""Declustering of elite pools into one representative per neighbourhood.

Elites collected over many generations pile up around the same optima. This
module collapses them greedily:

- decluster: one pass of radius-based exemplar extraction
- decluster_until_stable: repeat passes until the exemplar count stops changing
- fitness_preference / constrained_preference: decide which of two nearby
  chromosomes is kept
- rank_constrained: order constrained elites by penalty, then raw objective

A single pass is not guaranteed to be a fixed point. Each candidate is
compared against the founding position of every exemplar in insertion order,
and a replaced exemplar can end up close to another one, so callers wanting a
stable set should use :func:`decluster_until_stable`. Even then two
exemplars closer than ``tol`` can survive when their tolerance balls overlap
but neither founding point lies inside the other's ball.
"""

from collections.abc import Callable, Sequence
from functools import cmp_to_key

from radial_evo.evaluators import ConstrainedEvaluator
from radial_evo.protocols import Chromosome, FitnessEvaluator

Preference = Callable[[Chromosome, Chromosome], bool]
"""``prefer(candidate, incumbent)`` is True when the candidate should replace the incumbent."""

TIE_TOLERANCE = 1e-14
"""Penalties closer than this are considered equal."""


def fitness_preference(evaluator: FitnessEvaluator, maximize: bool = True) -> Preference:
    """Prefer the chromosome with strictly better fitness.

    Args:
        evaluator: Evaluator to compare on.
        maximize: Whether higher fitness is better.
    """

    def prefer(candidate: Chromosome, incumbent: Chromosome) -> bool:
        c = evaluator.fitness(candidate)
        i = evaluator.fitness(incumbent)
        return c > i if maximize else c < i

    return prefer


def constrained_preference(evaluator: ConstrainedEvaluator, tie_tolerance: float = TIE_TOLERANCE) -> Preference:
    """Prefer lower penalty; break near-ties on the raw objective.

    Args:
        evaluator: Constrained evaluator supplying penalty and raw objective.
        tie_tolerance: Penalties differing by less than this count as equal.
    """

    def prefer(candidate: Chromosome, incumbent: Chromosome) -> bool:
        return _compare_constrained(evaluator, tie_tolerance, candidate, incumbent) < 0

    return prefer


def _compare_constrained(
    evaluator: ConstrainedEvaluator,
    tie_tolerance: float,
    left: Chromosome,
    right: Chromosome,
) -> int:
    """Three-way comparison; negative when ``left`` is better."""
    diff = evaluator.penalty(left) - evaluator.penalty(right)
    if abs(diff) >= tie_tolerance:
        return -1 if diff < 0 else 1
    raw_l = evaluator.raw_fitness(left)
    raw_r = evaluator.raw_fitness(right)
    if raw_l == raw_r:
        return 0
    left_better = raw_l > raw_r if evaluator.maximize else raw_l < raw_r
    return -1 if left_better else 1


def decluster(elites: Sequence[Chromosome], tol: float, prefer: Preference) -> list[Chromosome]:
    """Keep one representative per ``tol``-neighbourhood of founding points.

    The first chromosome founds the first exemplar. Each following chromosome
    is compared with the founding points of the existing exemplars in
    insertion order; at the first one closer than ``tol`` it replaces that
    exemplar if ``prefer`` says so, and is discarded otherwise. A chromosome
    with no founding point within ``tol`` founds a new exemplar.

    Args:
        elites: Chromosomes to decluster.
        tol: Distance tolerance, non-negative.
        prefer: Preference deciding replacements.

    Returns:
        Exemplars in founding order.

    Raises:
        ValueError: If tol is negative.

    Example:
        >>> exemplars = decluster(elites, tol=0.7, prefer=fitness_preference(fe))
    """
    if tol < 0:
        raise ValueError(f"tol must be non-negative, got {tol}")
    if len(elites) == 0:
        return []

    founders: list[Chromosome] = [elites[0]]
    exemplars: list[Chromosome] = [elites[0]]

    for candidate in elites[1:]:
        for i, founder in enumerate(founders):
            if candidate.distance(founder) < tol:
                if prefer(candidate, exemplars[i]):
                    exemplars[i] = candidate
                break
        else:
            founders.append(candidate)
            exemplars.append(candidate)

    return exemplars


def decluster_until_stable(elites: Sequence[Chromosome], tol: float, prefer: Preference) -> list[Chromosome]:
    """Apply :func:`decluster` until a pass no longer changes the exemplar count."""
    current = decluster(elites, tol, prefer)
    previous_size = len(elites)
    while len(current) != previous_size:
        previous_size = len(current)
        current = decluster(current, tol, prefer)
    return current


def rank_constrained(
    elites: Sequence[Chromosome],
    evaluator: ConstrainedEvaluator,
    tie_tolerance: float = TIE_TOLERANCE,
) -> list[Chromosome]:
    """Sort constrained elites best first: lower penalty, then better raw objective.

    The sort is stable, so exact ties keep their input order.
    """

    def compare(left: Chromosome, right: Chromosome) -> int:
        return _compare_constrained(evaluator, tie_tolerance, left, right)

    return sorted(elites, key=cmp_to_key(compare))
