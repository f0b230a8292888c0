"""Herbalism — foraging and brewing resolution for a tabletop RPG companion."""

from herbalism.brewing import (
    BatchResult,
    BrewMode,
    BrewOutcome,
    BrewPhase,
    Brewing,
    BrewWorkflow,
    CombineCheck,
    MakeChoices,
    PairedEffect,
    PairElements,
    PhaseName,
    Result,
    SelectedRecipe,
    SelectHerbs,
    SelectHerbsForRecipes,
    SelectRecipes,
    aggregate_effects,
    assign_pair,
    build_element_pool,
    can_combine_effects,
    effects_from_recipes,
    find_recipe_for_pair,
    instance_counts,
    remaining_elements,
    required_elements,
    resolve_brew,
    roll_brews,
    total_elements,
)
from herbalism.config import DEFAULT_CONFIG, RulesConfig
from herbalism.errors import (
    DataIntegrityError,
    ExternalFailure,
    HerbalismError,
    InvalidArgument,
)
from herbalism.foraging import (
    BiomeHerbSource,
    ForageAllocation,
    ForageBudget,
    Forager,
    check_allocation,
    run_foraging_sessions,
    tally_herbs,
)
from herbalism.helpers import (
    TemplateVariable,
    all_choices_made,
    collect_required_choices,
    compute_description,
    fill_template,
    parse_template_variables,
    resolve_check,
    roll_die,
    roll_quantity,
    weighted_sample,
)
from herbalism.models import (
    Biome,
    BiomeHerb,
    BrewedItem,
    CheckRoll,
    Herb,
    HerbInventory,
    InventoryItem,
    QuantityRoll,
    Rarity,
    Recipe,
    RecipeBook,
    RecipeType,
    SessionResult,
    TableRoll,
)

__all__ = [
    # Config & errors
    "DEFAULT_CONFIG",
    "DataIntegrityError",
    "ExternalFailure",
    "HerbalismError",
    "InvalidArgument",
    "RulesConfig",
    # Models
    "Biome",
    "BiomeHerb",
    "BrewedItem",
    "CheckRoll",
    "Herb",
    "HerbInventory",
    "InventoryItem",
    "QuantityRoll",
    "Rarity",
    "Recipe",
    "RecipeBook",
    "RecipeType",
    "SessionResult",
    "TableRoll",
    # Helpers
    "TemplateVariable",
    "all_choices_made",
    "collect_required_choices",
    "compute_description",
    "fill_template",
    "parse_template_variables",
    "resolve_check",
    "roll_die",
    "roll_quantity",
    "weighted_sample",
    # Brewing
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
    # Foraging
    "BiomeHerbSource",
    "ForageAllocation",
    "ForageBudget",
    "Forager",
    "check_allocation",
    "run_foraging_sessions",
    "tally_herbs",
]
