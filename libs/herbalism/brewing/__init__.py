"""Brewing — element pools, recipe pairing and the brew workflow."""

from herbalism.brewing.outcome import BrewOutcome, resolve_brew, roll_brews
from herbalism.brewing.pairing import (
    CombineCheck,
    PairedEffect,
    SelectedRecipe,
    aggregate_effects,
    can_combine_effects,
    effects_from_recipes,
    find_recipe_for_pair,
)
from herbalism.brewing.phases import (
    BatchResult,
    BrewMode,
    BrewPhase,
    Brewing,
    MakeChoices,
    PairElements,
    PhaseName,
    Result,
    SelectHerbs,
    SelectHerbsForRecipes,
    SelectRecipes,
)
from herbalism.brewing.pool import (
    assign_pair,
    build_element_pool,
    instance_counts,
    remaining_elements,
    required_elements,
    total_elements,
)
from herbalism.brewing.workflow import BrewWorkflow

__all__ = [
    "BatchResult",
    "BrewMode",
    "BrewOutcome",
    "BrewPhase",
    "BrewWorkflow",
    "Brewing",
    "CombineCheck",
    "MakeChoices",
    "PairElements",
    "PairedEffect",
    "PhaseName",
    "Result",
    "SelectHerbs",
    "SelectHerbsForRecipes",
    "SelectRecipes",
    "SelectedRecipe",
    "aggregate_effects",
    "assign_pair",
    "build_element_pool",
    "can_combine_effects",
    "effects_from_recipes",
    "find_recipe_for_pair",
    "instance_counts",
    "remaining_elements",
    "required_elements",
    "resolve_brew",
    "roll_brews",
    "total_elements",
]
