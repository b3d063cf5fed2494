"""Linear ranking selection without replacement for single-criterion runs."""

import numpy as np

from radial_evo.ranking import best_first, draw_without_replacement, linear_rank_weights


def linear_rank_selection(pressure: float = 1.5, maximize: bool = True):
    """Create a linear-ranking selector that samples without replacement.

    The population is ranked on the first fitness column, best first. Rank
    position ``i`` receives the linear ranking weight (see
    :func:`radial_evo.ranking.linear_rank_weights`) and ``n_select`` distinct
    individuals are drawn, each draw removing the chosen slot and its weight
    from the pool. When ``pressure = 2`` the worst slot has zero weight; should
    the positive weight run out, the remaining quota is filled uniformly.

    Args:
        pressure: Selection pressure in [1, 2] (default 1.5).
        maximize: Whether higher fitness is better (default True).

    Returns:
        A Selector callable.

    Raises:
        ValueError: If pressure is outside [1, 2].

    Example:
        >>> selector = linear_rank_selection(pressure=1.8)
        >>> survivors = selector(fitness, n_select=100, rng=rng)
    """
    if not 1.0 <= pressure <= 2.0:
        raise ValueError(f"pressure must be in [1, 2], got {pressure}")

    def selector(
        fitness: np.ndarray,
        n_select: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Select survivors using linear ranking without replacement.

        Args:
            fitness: Fitness matrix of shape (n, n_criteria); column 0 is used.
            n_select: Number of survivors, at most n.
            rng: Random number generator for reproducibility.

        Returns:
            Array of distinct survivor indices with shape (n_select,).

        Raises:
            ValueError: If n_select exceeds the population size or the
                population has fewer than 2 individuals.
        """
        fitness = np.asarray(fitness, dtype=np.float64)
        if fitness.ndim == 1:
            fitness = fitness.reshape(-1, 1)
        n = fitness.shape[0]
        if n_select > n:
            raise ValueError(f"n_select ({n_select}) cannot exceed population size ({n})")

        order = best_first(fitness[:, 0], maximize=maximize)
        weights = linear_rank_weights(n, pressure)
        positions = draw_without_replacement(weights, n_select, rng)
        return order[positions].astype(np.intp)

    return selector
