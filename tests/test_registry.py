"""Tests for the selection strategy registry.

- Test behavior, not implementation
- Each test should fail for one reason
- Assert both exception type and message fragment for error tests
"""

import numpy as np
import pytest

from radial_evo import GeneticParameters, VectorFitnessEvaluator
from radial_evo.registry import SelectionRegistry, list_selections


@pytest.fixture(autouse=True)
def isolate_registry():
    """Save and restore the registry to ensure test isolation."""
    saved = SelectionRegistry._registry.copy()
    SelectionRegistry._registry = {}
    yield
    SelectionRegistry._registry = saved


def _truncation(pressure: float = 1.5, maximize: bool = True):
    def selector(fitness, n_select, rng):
        key = -fitness[:, 0] if maximize else fitness[:, 0]
        return np.argsort(key, kind="stable")[:n_select]

    return selector


class TestSelectionRegistry:
    """Tests for SelectionRegistry class."""

    def test_register_adds_factory_to_registry(self) -> None:
        SelectionRegistry.register("truncate", _truncation)
        assert "truncate" in SelectionRegistry.list()

    def test_register_overwrites_existing_strategy(self) -> None:
        def other(**kwargs):
            return lambda fitness, n_select, rng: np.zeros(n_select, dtype=np.intp)

        SelectionRegistry.register("truncate", _truncation)
        SelectionRegistry.register("truncate", other)

        assert SelectionRegistry.list() == ["truncate"]
        selector = SelectionRegistry.get("truncate")
        np.testing.assert_array_equal(selector(np.ones((3, 1)), 2, None), [0, 0])

    def test_get_passes_kwargs_to_factory(self) -> None:
        SelectionRegistry.register("truncate", _truncation)
        fitness = np.array([[3.0], [1.0], [2.0]])

        best_high = SelectionRegistry.get("truncate", maximize=True)
        best_low = SelectionRegistry.get("truncate", maximize=False)

        np.testing.assert_array_equal(best_high(fitness, 2, None), [0, 2])
        np.testing.assert_array_equal(best_low(fitness, 2, None), [1, 2])

    def test_get_raises_keyerror_for_unknown_strategy(self) -> None:
        with pytest.raises(KeyError, match="Selection strategy 'unknown' not found"):
            SelectionRegistry.get("unknown")

    def test_keyerror_message_lists_available_strategies(self) -> None:
        SelectionRegistry.register("strategy2", _truncation)
        SelectionRegistry.register("strategy1", _truncation)
        with pytest.raises(KeyError, match="Available strategies: strategy1, strategy2"):
            SelectionRegistry.get("unknown")

    def test_keyerror_message_shows_none_when_empty(self) -> None:
        with pytest.raises(KeyError, match="Available strategies: none"):
            SelectionRegistry.get("unknown")

    def test_list_returns_sorted_strategy_names(self) -> None:
        for name in ["zeta", "alpha", "mid"]:
            SelectionRegistry.register(name, _truncation)
        assert SelectionRegistry.list() == ["alpha", "mid", "zeta"]

    def test_list_selections_matches_registry(self) -> None:
        SelectionRegistry.register("truncate", _truncation)
        assert list_selections() == SelectionRegistry.list() == ["truncate"]


class TestParametersUseRegistry:
    def test_custom_strategy_resolved_by_name(self) -> None:
        """A registered custom strategy is configured from the parameters."""
        SelectionRegistry.register("truncate", _truncation)
        params = GeneticParameters(
            lower=[0.0],
            upper=[1.0],
            evaluators=[VectorFitnessEvaluator(lambda x: float(x[0]))],
            selection="truncate",
            maximize=False,
        )
        selector = params.make_selector()
        np.testing.assert_array_equal(selector(np.array([[0.5], [0.1], [0.9]]), 1, None), [1])
