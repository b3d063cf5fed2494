"""Performance metrics for benchmark runs.

- hypervolume: quality of a multi-criteria population, via pymoo
- optima_error: distance from each known optimum to the closest found point
"""

import numpy as np
from pymoo.indicators.hv import HV


def hypervolume(objectives: np.ndarray, ref_point: np.ndarray) -> float:
    """Compute hypervolume indicator.

    The hypervolume (or S-metric) measures the volume of objective space
    dominated by the population and bounded by a reference point. Higher
    values indicate better convergence and diversity. All criteria are
    minimized.

    Args:
        objectives: (n, n_obj) criteria values of the final population
        ref_point: (n_obj,) reference point, worse than every population member

    Returns:
        Hypervolume value (higher is better)

    Raises:
        ValueError: If objectives array is empty or has wrong shape
    """
    if objectives.size == 0:
        raise ValueError("objectives array cannot be empty")

    if objectives.ndim != 2:
        raise ValueError(f"objectives must be 2D array, got shape {objectives.shape}")

    if objectives.shape[1] != len(ref_point):
        raise ValueError(f"ref_point has {len(ref_point)} elements, expected {objectives.shape[1]}")

    indicator = HV(ref_point=ref_point)
    return float(indicator(objectives))


def optima_error(points: np.ndarray, optima: np.ndarray) -> np.ndarray:
    """Distance from each known optimum to the nearest found point.

    Args:
        points: (n, n_vars) points found by a run
        optima: (m, n_vars) known optima

    Returns:
        (m,) errors, one per optimum

    Raises:
        ValueError: If no points were found
    """
    if len(points) == 0:
        raise ValueError("points array cannot be empty")
    diff = optima[:, None, :] - points[None, :, :]
    return np.linalg.norm(diff, axis=2).min(axis=1)
