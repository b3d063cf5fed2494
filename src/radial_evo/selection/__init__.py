"""Selection strategies for the genetic processor."""

from radial_evo.registry import SelectionRegistry
from radial_evo.selection.criteria import criteria_selection
from radial_evo.selection.exponential import exponential_rank_selection
from radial_evo.selection.linear_rank import linear_rank_selection

# Register built-in selection strategies
SelectionRegistry.register("criteria", criteria_selection)
SelectionRegistry.register("exponential_rank", exponential_rank_selection)
SelectionRegistry.register("linear_rank", linear_rank_selection)

__all__ = ["criteria_selection", "exponential_rank_selection", "linear_rank_selection"]
