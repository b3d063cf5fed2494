"""Exponential-rank selection with replacement for single-criterion runs."""

import numpy as np

from radial_evo.ranking import best_first


def exponential_rank_selection(pressure: float = 1.5, maximize: bool = True):
    """Create an exponential-rank selector that samples with replacement.

    The population is ranked on the first fitness column, best first. For each
    of the ``n_select`` output slots an index is drawn from an exponential
    distribution with rate ``1 / (n_select // 2)``, floored and clamped into
    ``[0, n_select - 1]``. Indices therefore concentrate on the top ranks and
    never reach below rank ``n_select - 1``; after crossover has roughly doubled
    the population this discards the worse half outright.

    Args:
        pressure: Unused. Accepted so every registered strategy can be built
            from the same configuration.
        maximize: Whether higher fitness is better (default True).

    Returns:
        A Selector callable.

    Example:
        >>> selector = exponential_rank_selection(maximize=False)
        >>> survivors = selector(fitness, n_select=100, rng=rng)
    """

    def selector(
        fitness: np.ndarray,
        n_select: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Select survivors using exponential-rank sampling.

        Args:
            fitness: Fitness matrix of shape (n, n_criteria); column 0 is used.
            n_select: Number of survivors, at most n.
            rng: Random number generator for reproducibility.

        Returns:
            Array of survivor indices with shape (n_select,). Indices may repeat.

        Raises:
            ValueError: If n_select exceeds the population size, or
                n_select // 2 is zero (a zero exponential rate).
        """
        fitness = np.asarray(fitness, dtype=np.float64)
        if fitness.ndim == 1:
            fitness = fitness.reshape(-1, 1)
        n = fitness.shape[0]
        if n_select > n:
            raise ValueError(f"n_select ({n_select}) cannot exceed population size ({n})")
        mean_rank = n_select // 2
        if mean_rank == 0:
            raise ValueError(f"exponential rank selection needs n_select >= 2, got {n_select}")

        order = best_first(fitness[:, 0], maximize=maximize)
        # numpy parametrises the exponential by its scale (1 / rate)
        ranks = np.floor(rng.exponential(scale=mean_rank, size=n_select)).astype(np.intp)
        ranks = np.clip(ranks, 0, n_select - 1)
        return order[ranks]

    return selector
