"""BrewPhase — the tagged union of workflow phases.

Each phase is its own frozen dataclass carrying only the data that phase
needs; `name` is the discriminant. Match on the class:

    match workflow.phase:
        case PairElements(selected_herbs=herbs): ...
        case Result(roll=roll): ...
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

from herbalism.brewing.pairing import PairedEffect, SelectedRecipe
from herbalism.helpers.templates import TemplateVariable
from herbalism.models.catalogue import RecipeType
from herbalism.models.inventory import InventoryItem
from herbalism.models.results import BrewedItem, CheckRoll


class BrewMode(StrEnum):
    BY_HERBS = "by-herbs"
    BY_RECIPE = "by-recipe"


class PhaseName(StrEnum):
    SELECT_HERBS = "select-herbs"
    PAIR_ELEMENTS = "pair-elements"
    SELECT_RECIPES = "select-recipes"
    SELECT_HERBS_FOR_RECIPES = "select-herbs-for-recipes"
    MAKE_CHOICES = "make-choices"
    BREWING = "brewing"
    RESULT = "result"
    BATCH_RESULT = "batch-result"


@dataclass(frozen=True)
class SelectHerbs:
    name: ClassVar[PhaseName] = PhaseName.SELECT_HERBS


@dataclass(frozen=True)
class PairElements:
    name: ClassVar[PhaseName] = PhaseName.PAIR_ELEMENTS

    selected_herbs: tuple[InventoryItem, ...]  # one entry per herb instance


@dataclass(frozen=True)
class SelectRecipes:
    name: ClassVar[PhaseName] = PhaseName.SELECT_RECIPES


@dataclass(frozen=True)
class SelectHerbsForRecipes:
    name: ClassVar[PhaseName] = PhaseName.SELECT_HERBS_FOR_RECIPES

    selected_recipes: tuple[SelectedRecipe, ...]
    batch_count: int = 1


@dataclass(frozen=True)
class MakeChoices:
    name: ClassVar[PhaseName] = PhaseName.MAKE_CHOICES

    selected_herbs: tuple[InventoryItem, ...]
    paired_effects: tuple[PairedEffect, ...]
    required_choices: tuple[TemplateVariable, ...]


@dataclass(frozen=True)
class Brewing:
    name: ClassVar[PhaseName] = PhaseName.BREWING

    selected_herbs: tuple[InventoryItem, ...]
    paired_effects: tuple[PairedEffect, ...]
    choices: dict[str, str] = field(default_factory=dict)
    batch_count: int = 1


@dataclass(frozen=True)
class Result:
    """Single brew outcome."""

    name: ClassVar[PhaseName] = PhaseName.RESULT

    roll: CheckRoll
    type: RecipeType
    description: str | None
    consumed: dict[int, int]  # herb_id -> quantity used up
    brewed: BrewedItem | None = None

    @property
    def success(self) -> bool:
        return self.roll.success


@dataclass(frozen=True)
class BatchResult:
    """Outcome of a batch: one roll per unit."""

    name: ClassVar[PhaseName] = PhaseName.BATCH_RESULT

    rolls: tuple[CheckRoll, ...]
    type: RecipeType
    description: str | None
    consumed: dict[int, int]
    brewed: BrewedItem | None = None

    @property
    def success_count(self) -> int:
        return sum(1 for roll in self.rolls if roll.success)


BrewPhase = (
    SelectHerbs
    | PairElements
    | SelectRecipes
    | SelectHerbsForRecipes
    | MakeChoices
    | Brewing
    | Result
    | BatchResult
)

INITIAL_PHASES: dict[BrewMode, BrewPhase] = {
    BrewMode.BY_HERBS: SelectHerbs(),
    BrewMode.BY_RECIPE: SelectRecipes(),
}
