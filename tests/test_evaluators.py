"""Tests for fitness evaluators and tolerance annealing."""

import numpy as np
import pytest

from radial_evo import ConstrainedEvaluator, FitnessEvaluator, LinearAnnealing, VectorFitnessEvaluator


class _At:
    """Minimal object exposing a point, enough for any evaluator."""

    def __init__(self, *coords: float) -> None:
        self.point = np.array(coords, dtype=np.float64)


class TestVectorFitnessEvaluator:
    def test_applies_function_to_point(self) -> None:
        fe = VectorFitnessEvaluator(lambda x: float(x[0] * 10 + x[1]))
        assert fe.fitness(_At(1.0, 2.0)) == 12.0

    def test_satisfies_protocol(self, sphere_evaluator) -> None:
        assert isinstance(sphere_evaluator, FitnessEvaluator)


class TestConstrainedEvaluator:
    """Tests for the penalty method."""

    def test_penalty_zero_inside_tolerance(self, parabola_evaluator) -> None:
        """A restriction value strictly below eps adds no penalty."""
        at = _At(0.0, 0.005)  # |y - x^2| = 0.005 < 0.01
        assert parabola_evaluator.penalty(at) == 0.0
        assert parabola_evaluator.is_feasible(at)
        assert parabola_evaluator.fitness(at) == pytest.approx(parabola_evaluator.raw_fitness(at))

    def test_penalty_weighted_outside_tolerance(self, parabola_evaluator) -> None:
        at = _At(0.0, 0.5)  # |y - x^2| = 0.5
        assert parabola_evaluator.penalty(at) == pytest.approx(10.0 * 0.5)
        assert not parabola_evaluator.is_feasible(at)

    def test_minimizing_adds_penalty(self, parabola_evaluator) -> None:
        at = _At(0.0, 0.5)
        assert parabola_evaluator.fitness(at) == pytest.approx(0.25 + 5.0)

    def test_maximizing_subtracts_penalty(self) -> None:
        fe = ConstrainedEvaluator(
            objective=lambda x: float(x[0]),
            restrictions=[lambda x: float(x[1])],
            weights=[2.0],
            maximize=True,
        )
        assert fe.fitness(_At(3.0, 1.0)) == pytest.approx(3.0 - 2.0)

    def test_boundary_is_penalised_by_default(self) -> None:
        """A violation exactly at eps counts against the point."""
        fe = ConstrainedEvaluator(
            objective=lambda x: 0.0,
            restrictions=[lambda x: float(x[0])],
            weights=[1.0],
            eps=0.5,
        )
        assert fe.penalty(_At(0.5)) == pytest.approx(0.5)

    def test_boundary_tolerated_when_inclusive(self) -> None:
        fe = ConstrainedEvaluator(
            objective=lambda x: 0.0,
            restrictions=[lambda x: float(x[0])],
            weights=[1.0],
            eps=0.5,
            inclusive_tolerance=True,
        )
        assert fe.penalty(_At(0.5)) == 0.0
        assert fe.penalty(_At(0.75)) == pytest.approx(0.75)

    def test_only_active_restrictions_contribute(self) -> None:
        fe = ConstrainedEvaluator(
            objective=lambda x: 0.0,
            restrictions=[lambda x: float(x[0]), lambda x: float(x[1]), lambda x: float(x[2])],
            weights=[1.0, 2.0, 3.0],
            eps=0.1,
        )
        at = _At(0.05, -0.2, 1.0)
        np.testing.assert_allclose(fe.violations(at), [0.05, 0.2, 1.0])
        assert fe.penalty(at) == pytest.approx(2.0 * 0.2 + 3.0 * 1.0)

    def test_no_restrictions_is_unconstrained(self) -> None:
        fe = ConstrainedEvaluator(objective=lambda x: float(x[0]), restrictions=[], weights=[])
        assert fe.penalty(_At(4.0)) == 0.0
        assert fe.fitness(_At(4.0)) == 4.0

    def test_weights_length_mismatch_raises(self) -> None:
        with pytest.raises(ValueError, match="match restrictions"):
            ConstrainedEvaluator(objective=lambda x: 0.0, restrictions=[lambda x: 0.0], weights=[1.0, 2.0])

    def test_negative_weight_raises(self) -> None:
        with pytest.raises(ValueError, match="weights must be non-negative"):
            ConstrainedEvaluator(objective=lambda x: 0.0, restrictions=[lambda x: 0.0], weights=[-1.0])

    def test_negative_eps_raises(self) -> None:
        with pytest.raises(ValueError, match="eps must be non-negative"):
            ConstrainedEvaluator(objective=lambda x: 0.0, restrictions=[], weights=[], eps=-0.1)


class TestLinearAnnealing:
    """Tests for the tolerance schedule."""

    def test_construction_sets_start(self, parabola_evaluator) -> None:
        parabola_evaluator.eps = 1.0
        LinearAnnealing(parabola_evaluator, start=0.01, end=0.005, steps=10)
        assert parabola_evaluator.eps == 0.01

    def test_reaches_end_exactly(self, parabola_evaluator) -> None:
        schedule = LinearAnnealing(parabola_evaluator, start=0.01, end=0.005, steps=100)
        values = [schedule.step() for _ in range(100)]

        assert values[-1] == 0.005
        assert parabola_evaluator.eps == 0.005
        assert np.all(np.diff(values) < 0)

    def test_increment_is_linear(self, parabola_evaluator) -> None:
        schedule = LinearAnnealing(parabola_evaluator, start=0.01, end=0.005, steps=4)
        assert schedule.increment == pytest.approx(-0.00125)
        assert schedule.step() == pytest.approx(0.00875)
        assert schedule.step() == pytest.approx(0.0075)

    def test_extra_steps_hold_end(self, parabola_evaluator) -> None:
        schedule = LinearAnnealing(parabola_evaluator, start=0.0, end=1.0, steps=2)
        for _ in range(5):
            schedule.step()
        assert parabola_evaluator.eps == 1.0
        assert schedule.completed == 2

    def test_reset_restarts_schedule(self, parabola_evaluator) -> None:
        schedule = LinearAnnealing(parabola_evaluator, start=0.01, end=0.005, steps=3)
        schedule.step()
        schedule.reset()
        assert parabola_evaluator.eps == 0.01
        assert schedule.completed == 0

    def test_non_positive_steps_raise(self, parabola_evaluator) -> None:
        with pytest.raises(ValueError, match="steps must be positive"):
            LinearAnnealing(parabola_evaluator, start=0.01, end=0.005, steps=0)

    def test_negative_tolerance_raises(self, parabola_evaluator) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            LinearAnnealing(parabola_evaluator, start=-0.01, end=0.005, steps=5)
