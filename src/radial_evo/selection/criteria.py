"""Per-criterion round-robin selection for multi-criteria runs."""

import numpy as np

from radial_evo.ranking import best_first, draw_without_replacement, linear_rank_weights


def criteria_selection(pressure: float = 1.5, maximize: bool = True):
    """Create a multi-criteria selector that gives each criterion a ranked share.

    With ``k`` criteria, each criterion in turn ranks the individuals still in
    the candidate pool and draws ``n_select // k`` of them with linear ranking
    without replacement. Later criteria therefore choose from what earlier ones
    left behind. A criterion whose pool holds no more than its share takes the
    whole pool. The remaining ``n_select % k`` slots are filled uniformly from
    the pool. Every criterion contributes survivors that are good on it, which
    keeps the population spread along the trade-off surface without explicit
    dominance sorting.

    Args:
        pressure: Selection pressure in [1, 2] (default 1.5).
        maximize: Whether higher fitness is better on every criterion
            (default True).

    Returns:
        A Selector callable.

    Raises:
        ValueError: If pressure is outside [1, 2].

    Example:
        >>> selector = criteria_selection(pressure=1.3, maximize=False)
        >>> survivors = selector(fitness, n_select=300, rng=rng)  # fitness shape (600, 3)
    """
    if not 1.0 <= pressure <= 2.0:
        raise ValueError(f"pressure must be in [1, 2], got {pressure}")

    def selector(
        fitness: np.ndarray,
        n_select: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Select survivors criterion by criterion.

        Args:
            fitness: Fitness matrix of shape (n, n_criteria).
            n_select: Number of survivors, at most n.
            rng: Random number generator for reproducibility.

        Returns:
            Array of distinct survivor indices with shape (n_select,), grouped
            by the criterion that chose them.

        Raises:
            ValueError: If n_select exceeds the population size.
        """
        fitness = np.asarray(fitness, dtype=np.float64)
        if fitness.ndim == 1:
            fitness = fitness.reshape(-1, 1)
        n, n_criteria = fitness.shape
        if n_select > n:
            raise ValueError(f"n_select ({n_select}) cannot exceed population size ({n})")

        share = n_select // n_criteria
        pool = np.arange(n)
        chosen: list[np.ndarray] = []

        for c in range(n_criteria):
            if share == 0:
                break
            order = pool[best_first(fitness[pool, c], maximize=maximize)]
            if len(order) <= share:
                picked = order
            else:
                weights = linear_rank_weights(len(order), pressure)
                picked = order[draw_without_replacement(weights, share, rng)]
            chosen.append(picked)
            pool = np.setdiff1d(pool, picked, assume_unique=True)

        shortfall = n_select - sum(len(p) for p in chosen)
        if shortfall > 0:
            chosen.append(rng.choice(pool, size=shortfall, replace=False))

        if not chosen:
            return np.empty(0, dtype=np.intp)
        return np.concatenate(chosen).astype(np.intp)

    return selector
