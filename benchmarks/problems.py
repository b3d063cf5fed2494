"""Test problems for benchmarking the evolutionary engine.

Three problems with known behaviour:
- sphere: single objective on [-6, 6]^2, optimum at the origin
- quadratic_criteria: three convex quadratic criteria on [-4, 4]^2 with
  conflicting minima, reported with hypervolume
- parabola: minimize x^2 + (y - 1)^2 subject to y = x^2 on [-1, 1]^2, with
  the two constrained optima (+-1/sqrt(2), 1/2)
"""

import numpy as np

from radial_evo import ConstrainedEvaluator, VectorFitnessEvaluator

SPHERE_BOUNDS: tuple[list[float], list[float]] = ([-6.0, -6.0], [6.0, 6.0])
CRITERIA_BOUNDS: tuple[list[float], list[float]] = ([-4.0, -4.0], [4.0, 4.0])
PARABOLA_BOUNDS: tuple[list[float], list[float]] = ([-1.0, -1.0], [1.0, 1.0])

PARABOLA_OPTIMA: np.ndarray = np.array([[np.sqrt(0.5), 0.5], [-np.sqrt(0.5), 0.5]])


def sphere(x: np.ndarray) -> float:
    """Sum of squares, minimized at the origin."""
    return float(np.sum(x**2))


def criterion_a(x: np.ndarray) -> float:
    return x[0] ** 2 / 2.0 + (x[1] + 1.0) ** 2 / 13.0 + 3.0


def criterion_b(x: np.ndarray) -> float:
    return x[0] ** 2 / 2.0 + (2.0 * x[1] + 2.0) ** 2 / 15.0 + 1.0


def criterion_c(x: np.ndarray) -> float:
    return (x[0] + 2.0 * x[1] - 1.0) ** 2 / 175.0 + (2.0 * x[1] - x[0]) ** 2 / 27.0 - 13.0


CRITERIA = (criterion_a, criterion_b, criterion_c)


def criteria_reference_point(margin: float = 0.1) -> np.ndarray:
    """Hypervolume reference point for the three criteria, slightly worse than the box nadir.

    Every criterion is a convex quadratic, so its maximum over the box is
    attained at a corner.
    """
    lower, upper = CRITERIA_BOUNDS
    corners = np.array([[x, y] for x in (lower[0], upper[0]) for y in (lower[1], upper[1])])
    worst = np.array([max(fn(c) for c in corners) for fn in CRITERIA])
    return worst + margin * np.abs(worst)


def parabola_objective(x: np.ndarray) -> float:
    return x[0] ** 2 + (x[1] - 1.0) ** 2


def parabola_restriction(x: np.ndarray) -> float:
    return x[1] - x[0] ** 2


def box_x(x: np.ndarray) -> float:
    """Distance of x outside [-1, 1]; jittered points may leave the box."""
    return max(abs(x[0]) - 1.0, 0.0)


def box_y(x: np.ndarray) -> float:
    return max(abs(x[1]) - 1.0, 0.0)


def sphere_evaluator() -> VectorFitnessEvaluator:
    return VectorFitnessEvaluator(sphere)


def criteria_evaluators() -> list[VectorFitnessEvaluator]:
    return [VectorFitnessEvaluator(fn) for fn in CRITERIA]


def parabola_evaluator(weight_h: float = 10.0, weight_box: float = 10.0, eps: float = 0.01) -> ConstrainedEvaluator:
    """Constrained parabola evaluator with the box kept as two soft restrictions."""
    return ConstrainedEvaluator(
        objective=parabola_objective,
        restrictions=[parabola_restriction, box_x, box_y],
        weights=[weight_h, weight_box, weight_box],
        eps=eps,
    )
