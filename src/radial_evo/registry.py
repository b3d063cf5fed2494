"""Registry system for selection strategies.

Selection strategies are registered as factories under a name, so a run can be
configured with a plain string (``GeneticParameters(selection="exponential_rank")``)
while custom strategies remain one ``register`` call away.

Every built-in factory accepts the same keyword arguments, ``pressure`` and
``maximize``, which lets the processor configure any registered strategy from
a GeneticParameters instance without knowing which one it is.

Basic usage:
    ```python
    from radial_evo.registry import SelectionRegistry, list_selections

    def best_first_factory(pressure: float = 1.5, maximize: bool = True):
        def selector(fitness, n_select, rng):
            order = np.argsort(-fitness[:, 0] if maximize else fitness[:, 0], kind="stable")
            return order[:n_select]
        return selector

    SelectionRegistry.register("truncate", best_first_factory)

    selector = SelectionRegistry.get("truncate", maximize=False)
    available = list_selections()  # ["criteria", "exponential_rank", "linear_rank", "truncate"]
    ```
"""

from collections.abc import Callable

from radial_evo.protocols import Selector


class SelectionRegistry:
    """Registry for population selection strategies.

    The registry stores factory functions that accept keyword arguments and
    return Selector callables.

    Class Attributes:
        _registry: Dictionary mapping strategy names to factory functions.
    """

    _registry: dict[str, Callable[..., Selector]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[..., Selector]) -> None:
        """Register a selection strategy factory.

        Args:
            name: Unique name for the strategy. Will overwrite if already exists.
            factory: Callable that returns a Selector. Should accept ``pressure``
                and ``maximize`` keyword arguments.
        """
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str, **kwargs) -> Selector:
        """Get a configured selector by name.

        Args:
            name: Name of the registered strategy.
            **kwargs: Configuration parameters passed to the factory function.

        Returns:
            A configured Selector callable.

        Raises:
            KeyError: If the strategy name is not registered. Error message
                includes list of available strategies.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"Selection strategy '{name}' not found. Available strategies: {available}")
        factory = cls._registry[name]
        return factory(**kwargs)

    @classmethod
    def list(cls) -> list[str]:
        """Return sorted list of registered strategy names."""
        return sorted(cls._registry.keys())


def list_selections() -> list[str]:
    """List all registered selection strategies.

    Convenience function that returns SelectionRegistry.list().
    """
    return SelectionRegistry.list()
