"""Ranking primitives shared by the selection strategies.

This module provides the core pure functions for rank-based selection:
- best_first: order a fitness column from best to worst
- linear_rank_weights: sampling weights for linear ranking selection
- draw_without_replacement: weighted draw that removes each drawn slot
"""

import numpy as np


def best_first(values: np.ndarray, maximize: bool = True) -> np.ndarray:
    """Return indices ordering ``values`` from best to worst.

    Uses a stable sort so that equal values keep their original order.

    Args:
        values: Fitness values, shape (n,).
        maximize: Whether higher values are better.

    Returns:
        Integer array of shape (n,) with the index of the best value first.

    Examples:
        >>> best_first(np.array([1.0, 3.0, 2.0]))
        array([1, 2, 0])
        >>> best_first(np.array([1.0, 3.0, 2.0]), maximize=False)
        array([0, 2, 1])
    """
    values = np.asarray(values, dtype=np.float64)
    if np.any(np.isnan(values)):
        raise ValueError("fitness values must not contain NaN")
    key = -values if maximize else values
    return np.argsort(key, kind="stable")


def linear_rank_weights(n: int, pressure: float) -> np.ndarray:
    """Compute linear ranking selection weights for ``n`` ranked individuals.

    Rank position ``i`` (0 = best) receives

        w_i = (1/n) * (a - (a - b) * i / (n - 1)),   a = pressure, b = 2 - a

    so the best individual is weighted ``a/n``, the worst ``b/n`` and the
    weights sum to 1. ``pressure = 1`` is uniform selection and ``pressure = 2``
    gives the worst individual zero weight.

    Args:
        n: Number of ranked individuals. Must be at least 2.
        pressure: Selection pressure in [1, 2].

    Returns:
        Array of shape (n,) with non-increasing weights.

    Raises:
        ValueError: If n < 2 or pressure is outside [1, 2].

    Examples:
        >>> linear_rank_weights(3, 1.5)
        array([0.5       , 0.33333333, 0.16666667])
    """
    if n < 2:
        raise ValueError(f"linear ranking needs at least 2 individuals, got {n}")
    if not 1.0 <= pressure <= 2.0:
        raise ValueError(f"pressure must be in [1, 2], got {pressure}")
    a = pressure
    b = 2.0 - a
    positions = np.arange(n, dtype=np.float64)
    return (a - (a - b) * positions / (n - 1)) / n


def draw_without_replacement(weights: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    """Draw ``k`` distinct positions, each proportionally to its remaining weight.

    Each drawn position is removed together with its weight before the next
    draw. If every remaining weight is zero before ``k`` positions have been
    drawn, the rest are drawn uniformly from the positions still in the pool.

    Args:
        weights: Non-negative weights, shape (n,).
        k: Number of positions to draw, 0 <= k <= n.
        rng: Random number generator.

    Returns:
        Integer array of shape (k,) with distinct positions in draw order.

    Raises:
        ValueError: If k is negative, exceeds n, or weights are negative.
    """
    weights = np.asarray(weights, dtype=np.float64)
    n = weights.shape[0]
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    if k > n:
        raise ValueError(f"cannot draw {k} positions without replacement from {n}")
    if np.any(weights < 0):
        raise ValueError("weights must be non-negative")

    positive = np.flatnonzero(weights > 0)
    m = min(k, len(positive))
    if m > 0:
        probs = weights[positive] / weights[positive].sum()
        weighted = positive[rng.choice(len(positive), size=m, replace=False, p=probs)]
    else:
        weighted = np.empty(0, dtype=np.intp)

    # Top up uniformly from the zero-weight positions
    zero = np.flatnonzero(weights == 0)
    rest = rng.choice(zero, size=k - m, replace=False) if k > m else np.empty(0, dtype=np.intp)
    return np.concatenate([weighted, rest]).astype(np.intp)
