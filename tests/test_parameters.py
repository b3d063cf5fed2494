"""Tests for run configuration."""

import numpy as np
import pytest

from radial_evo import ConstrainedEvaluator, GeneticParameters, VectorFitnessEvaluator


def _params(**overrides) -> GeneticParameters:
    kwargs = {
        "lower": [0.0, 0.0],
        "upper": [1.0, 1.0],
        "evaluators": [VectorFitnessEvaluator(lambda x: float(x.sum()))],
    }
    kwargs.update(overrides)
    return GeneticParameters(**kwargs)


class TestGeneticParameters:
    """Tests for GeneticParameters validation and derived properties."""

    def test_bounds_converted_to_readonly_arrays(self) -> None:
        params = _params()
        assert isinstance(params.lower, np.ndarray)
        assert params.n_vars == 2
        with pytest.raises(ValueError):
            params.upper[0] = 5.0

    def test_evaluators_normalised_to_tuple(self) -> None:
        params = _params()
        assert isinstance(params.evaluators, tuple)
        assert params.n_criteria == 1

    def test_lower_not_below_upper_raises(self) -> None:
        with pytest.raises(ValueError, match="strictly less than upper.*\\[1\\]"):
            _params(lower=[0.0, 1.0], upper=[1.0, 1.0])

    def test_bounds_shape_mismatch_raises(self) -> None:
        with pytest.raises(ValueError, match="shape"):
            _params(lower=[0.0, 0.0, 0.0])

    def test_2d_bounds_raise_type_error(self) -> None:
        with pytest.raises(TypeError, match="1D"):
            _params(lower=[[0.0, 0.0]], upper=[[1.0, 1.0]])

    def test_empty_bounds_raise(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            _params(lower=[], upper=[])

    def test_non_finite_bounds_raise(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            _params(upper=[1.0, np.inf])

    def test_no_evaluators_raise(self) -> None:
        with pytest.raises(ValueError, match="at least one fitness evaluator"):
            _params(evaluators=[])

    @pytest.mark.parametrize(
        ("field", "value", "message"),
        [
            ("search_radius", -0.1, "search_radius"),
            ("cross_allow_radius", -0.1, "cross_allow_radius"),
            ("max_cross_choices", 0, "max_cross_choices"),
            ("mutation_chance", 1.5, "mutation_chance"),
            ("rank_pressure", 2.5, "rank_pressure"),
            ("rank_pressure", 0.5, "rank_pressure"),
        ],
    )
    def test_out_of_domain_values_raise(self, field: str, value, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            _params(**{field: value})

    def test_invalid_selection_type_raises(self) -> None:
        with pytest.raises(TypeError, match="selection"):
            _params(selection=42)

    def test_constrained_direction_mismatch_raises(self) -> None:
        fe = ConstrainedEvaluator(objective=lambda x: float(x[0]), restrictions=[], weights=[])
        with pytest.raises(ValueError, match="evaluator 0 has maximize=False"):
            _params(evaluators=[fe])

    def test_constrained_direction_match_accepted(self) -> None:
        fe = ConstrainedEvaluator(objective=lambda x: float(x[0]), restrictions=[], weights=[], maximize=True)
        assert _params(evaluators=[fe]).maximize
        assert _params(evaluators=[ConstrainedEvaluator(lambda x: 0.0, [], [])], maximize=False).n_criteria == 1


class TestSelectionResolution:
    """Tests for choosing the selection strategy."""

    def test_single_criterion_defaults_to_linear_rank(self) -> None:
        assert _params().selection_name == "linear_rank"

    def test_several_criteria_default_to_criteria(self) -> None:
        fe = VectorFitnessEvaluator(lambda x: float(x[0]))
        assert _params(evaluators=[fe, fe]).selection_name == "criteria"

    def test_named_selection(self) -> None:
        assert _params(selection="exponential_rank").selection_name == "exponential_rank"

    def test_callable_selection_returned_as_is(self) -> None:
        def custom(fitness, n_select, rng):
            return np.arange(n_select)

        params = _params(selection=custom)
        assert params.selection_name is None
        assert params.make_selector() is custom

    def test_make_selector_returns_working_selector(self, rng) -> None:
        selector = _params(selection="linear_rank").make_selector()
        chosen = selector(np.arange(10, dtype=np.float64).reshape(-1, 1), 5, rng)
        assert chosen.shape == (5,)

    def test_unknown_selection_raises_key_error(self) -> None:
        with pytest.raises(KeyError, match="not found"):
            _params(selection="roulette").make_selector()
