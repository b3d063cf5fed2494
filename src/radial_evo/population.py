"""Vectorised helpers over populations of chromosomes.

A population is an ordered sequence of chromosomes. These helpers turn it into
numpy arrays for the parts of the engine that work on numbers rather than on
chromosome objects:

- points_of: struct-of-arrays view of the coordinates
- fitness_matrix: scores of every chromosome on every criterion
- distances_from: Euclidean distances from one point to many
"""

from collections.abc import Sequence

import numpy as np

from radial_evo.protocols import Chromosome, FitnessEvaluator


def points_of(chromosomes: Sequence[Chromosome]) -> np.ndarray:
    """Stack chromosome points into an array of shape (n, n_vars).

    Raises:
        ValueError: If the population is empty or dimensionalities differ.

    Example:
        >>> points_of(population).shape
        (100, 2)
    """
    if len(chromosomes) == 0:
        raise ValueError("cannot stack points of an empty population")
    return np.stack([ch.point for ch in chromosomes])


def fitness_matrix(
    chromosomes: Sequence[Chromosome],
    evaluators: Sequence[FitnessEvaluator],
) -> np.ndarray:
    """Evaluate every chromosome on every criterion.

    Args:
        chromosomes: Population of length n.
        evaluators: Evaluators, one per criterion.

    Returns:
        Array of shape (n, n_criteria).
    """
    out = np.empty((len(chromosomes), len(evaluators)), dtype=np.float64)
    for i, ch in enumerate(chromosomes):
        for c, fe in enumerate(evaluators):
            out[i, c] = fe.fitness(ch)
    return out


def distances_from(point: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Euclidean distances from ``point`` (n_vars,) to each row of ``points`` (m, n_vars).

    Raises:
        ValueError: If the dimensionalities differ.
    """
    if points.size == 0:
        return np.empty(0, dtype=np.float64)
    if points.shape[1] != point.shape[0]:
        raise ValueError(f"cannot measure distance between {point.shape[0]}-D and {points.shape[1]}-D points")
    return np.linalg.norm(points - point, axis=1)
