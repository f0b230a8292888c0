"""BrewWorkflow — the phase machine driving a brew from herb pick to result.

Two modes share the machine:

    by-herbs:  select-herbs -> pair-elements -> [make-choices] -> brewing -> result
    by-recipe: select-recipes -> select-herbs-for-recipes -> [make-choices]
               -> brewing -> result | batch-result

Every action either succeeds (returns True) or declines and leaves the
phase untouched (returns False); the unmet conditions are then available
in `errors`. Pools, effects and requirements are derived from the current
selection on each access.
"""

import logging
import random
from collections.abc import Iterable

from herbalism.brewing.outcome import resolve_brew
from herbalism.brewing.pairing import (
    CombineCheck,
    PairedEffect,
    SelectedRecipe,
    aggregate_effects,
    can_combine_effects,
    effects_from_recipes,
)
from herbalism.brewing.phases import (
    INITIAL_PHASES,
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
    ElementPair,
    ElementPool,
    assign_pair,
    build_element_pool,
    instance_counts,
    remaining_elements,
    required_elements,
)
from herbalism.brewing.rules import (
    check_add_herb,
    check_choices,
    check_herb_selection,
    check_pairing,
    check_recipe_herbs,
    check_recipe_selection,
    scaled_herb_cap,
)
from herbalism.config import DEFAULT_CONFIG, RulesConfig
from herbalism.helpers.templates import (
    TemplateVariable,
    all_choices_made,
    collect_required_choices,
    is_choice_made,
)
from herbalism.models.catalogue import Herb, Recipe, RecipeBook
from herbalism.models.inventory import InventoryItem

logger = logging.getLogger(__name__)

_HERB_PICKING = (PhaseName.SELECT_HERBS, PhaseName.SELECT_HERBS_FOR_RECIPES)


class BrewWorkflow:
    """State for one player's brew, mutated only through its actions."""

    def __init__(
        self,
        inventory: Iterable[InventoryItem],
        recipes: RecipeBook | Iterable[Recipe],
        brewing_modifier: int = 0,
        config: RulesConfig | None = None,
        rng: random.Random | None = None,
        mode: BrewMode = BrewMode.BY_HERBS,
    ) -> None:
        self._inventory: dict[int, InventoryItem] = {item.id: item for item in inventory}
        self._recipes = recipes if isinstance(recipes, RecipeBook) else RecipeBook(recipes)
        self._modifier = brewing_modifier
        self._config = config or DEFAULT_CONFIG
        self._rng = rng
        self._mode = mode
        self._phase: BrewPhase = INITIAL_PHASES[mode]
        self._selected: dict[int, int] = {}  # inventory item id -> instances
        self._pairs: list[ElementPair] = []
        self._choices: dict[str, str] = {}
        self._recipe_counts: dict[int, int] = {}  # recipe id -> count
        self._batch_count = 1
        self._errors: list[str] = []

    # --- Current state ---

    @property
    def mode(self) -> BrewMode:
        return self._mode

    @property
    def phase(self) -> BrewPhase:
        return self._phase

    @property
    def errors(self) -> list[str]:
        """Why the last action was declined. Empty after a successful action."""
        return list(self._errors)

    @property
    def inventory(self) -> list[InventoryItem]:
        return list(self._inventory.values())

    @property
    def recipes(self) -> RecipeBook:
        return self._recipes

    @property
    def selected_quantities(self) -> dict[int, int]:
        return dict(self._selected)

    @property
    def assigned_pairs(self) -> list[ElementPair]:
        return list(self._pairs)

    @property
    def choices(self) -> dict[str, str]:
        return dict(self._choices)

    @property
    def selected_recipes(self) -> list[SelectedRecipe]:
        selected: list[SelectedRecipe] = []
        for recipe_id, count in self._recipe_counts.items():
            recipe = self._recipes.get(recipe_id)
            if recipe is not None:
                selected.append(SelectedRecipe(recipe=recipe, count=count))
        return selected

    @property
    def batch_count(self) -> int:
        return self._batch_count

    # --- Derived views ---

    def _selections(self) -> list[tuple[Herb, int]]:
        return [
            (self._inventory[item_id].herb, qty)
            for item_id, qty in self._selected.items()
            if item_id in self._inventory
        ]

    @property
    def selected_herbs(self) -> list[InventoryItem]:
        """Selected inventory rows, repeated once per selected instance."""
        herbs: list[InventoryItem] = []
        for item_id, qty in self._selected.items():
            item = self._inventory.get(item_id)
            if item is not None:
                herbs.extend([item] * qty)
        return herbs

    @property
    def total_herbs_selected(self) -> int:
        return sum(self._selected.values())

    @property
    def herb_cap(self) -> int:
        """Herb instance limit: scales with batch size in by-recipe mode."""
        if self._mode == BrewMode.BY_RECIPE:
            return scaled_herb_cap(self._config.max_herbs_per_brew, self._batch_count)
        return self._config.max_herbs_per_brew

    @property
    def element_pool(self) -> ElementPool:
        return build_element_pool(self._selections())

    @property
    def remaining_elements(self) -> ElementPool:
        return remaining_elements(self.element_pool, self._pairs)

    @property
    def paired_effects(self) -> list[PairedEffect]:
        if self._mode == BrewMode.BY_RECIPE:
            return effects_from_recipes(self.selected_recipes)
        return aggregate_effects(self._recipes, self._pairs)

    @property
    def pairing_validation(self) -> CombineCheck:
        return can_combine_effects(self.paired_effects)

    @property
    def required_choices(self) -> list[TemplateVariable]:
        return collect_required_choices(self.paired_effects)

    @property
    def all_choices_made(self) -> bool:
        return all_choices_made(self.required_choices, self._choices)

    @property
    def required_elements(self) -> ElementPool:
        return required_elements(
            ((s.recipe.elements, s.count) for s in self.selected_recipes),
            self._batch_count,
        )

    @property
    def matching_herbs(self) -> list[InventoryItem]:
        """Inventory rows carrying at least one element the recipes need."""
        needed = set(self.required_elements)
        return [
            item
            for item in self._inventory.values()
            if any(element in needed for element in item.herb.elements)
        ]

    @property
    def instance_counts(self) -> dict[str, int]:
        return instance_counts(self._selections(), self.required_elements)

    @property
    def herbs_satisfy_recipes(self) -> bool:
        return not self._recipe_herb_errors()

    def _recipe_herb_errors(self) -> list[str]:
        return check_recipe_herbs(
            self.selected_recipes, self._batch_count, self._selections(), self.herb_cap
        )

    # --- Bookkeeping ---

    def _accept(self) -> bool:
        self._errors = []
        return True

    def _refuse(self, action: str, errors: list[str]) -> bool:
        self._errors = list(errors)
        logger.warning(
            "Refused %s during %s: %s", action, self._phase.name, "; ".join(errors)
        )
        return False

    def _enter(self, phase: BrewPhase) -> None:
        logger.debug("Brew phase %s -> %s", self._phase.name, phase.name)
        self._phase = phase

    def _wrong_phase(self, action: str, *allowed: PhaseName) -> bool:
        if self._phase.name in allowed:
            return False
        self._refuse(action, [f"Cannot {action.replace('_', ' ')} during {self._phase.name}"])
        return True

    def _clear_selection(self) -> None:
        self._selected.clear()
        self._pairs.clear()
        self._choices.clear()
        self._recipe_counts.clear()
        self._batch_count = 1

    # --- Herb selection ---

    def add_herb(self, item_id: int) -> bool:
        """Select one more instance of an inventory row."""
        if self._wrong_phase("add_herb", *_HERB_PICKING):
            return False
        errors = check_add_herb(
            self._inventory.get(item_id),
            self._selected.get(item_id, 0),
            self.total_herbs_selected,
            self.herb_cap,
        )
        if errors:
            return self._refuse("add_herb", errors)
        self._selected[item_id] = self._selected.get(item_id, 0) + 1
        return self._accept()

    def remove_herb(self, item_id: int) -> bool:
        """Deselect one instance of an inventory row."""
        if self._wrong_phase("remove_herb", *_HERB_PICKING):
            return False
        current = self._selected.get(item_id, 0)
        if current < 1:
            return self._refuse("remove_herb", ["Herb is not selected"])
        if current == 1:
            del self._selected[item_id]
        else:
            self._selected[item_id] = current - 1
        return self._accept()

    def clear_herb_selections(self) -> bool:
        if self._wrong_phase("clear_herb_selections", *_HERB_PICKING):
            return False
        self._selected.clear()
        return self._accept()

    def proceed_to_pairing(self) -> bool:
        """select-herbs -> pair-elements, starting with no pairs."""
        if self._wrong_phase("proceed_to_pairing", PhaseName.SELECT_HERBS):
            return False
        errors = check_herb_selection(self.total_herbs_selected, self.herb_cap)
        if errors:
            return self._refuse("proceed_to_pairing", errors)
        self._pairs.clear()
        self._choices.clear()
        self._enter(PairElements(selected_herbs=tuple(self.selected_herbs)))
        return self._accept()

    # --- Pairing ---

    def add_pair(self, first: str, second: str) -> bool:
        """Pair two remaining elements."""
        if self._wrong_phase("add_pair", PhaseName.PAIR_ELEMENTS):
            return False
        if not assign_pair(self.remaining_elements, self._pairs, first, second):
            return self._refuse(
                "add_pair", [f"Not enough {first} and {second} left to pair"]
            )
        return self._accept()

    def remove_pair(self, index: int) -> bool:
        """Undo an assigned pair, returning its elements to the pool."""
        if self._wrong_phase("remove_pair", PhaseName.PAIR_ELEMENTS):
            return False
        if not 0 <= index < len(self._pairs):
            return self._refuse("remove_pair", [f"No pair at position {index}"])
        del self._pairs[index]
        return self._accept()

    def proceed_to_choices(self) -> bool:
        """pair-elements -> make-choices, or straight to brewing if nothing to choose."""
        if self._wrong_phase("proceed_to_choices", PhaseName.PAIR_ELEMENTS):
            return False
        effects = self.paired_effects
        errors = check_pairing(effects)
        if errors:
            return self._refuse("proceed_to_choices", errors)
        self._enter_choices_or_brewing(effects)
        return self._accept()

    # --- Recipe selection ---

    def add_recipe(self, recipe_id: int) -> bool:
        """Select a known recipe, or stack one more of an already selected one."""
        if self._wrong_phase("add_recipe", PhaseName.SELECT_RECIPES):
            return False
        if recipe_id not in self._recipes:
            return self._refuse("add_recipe", [f"Unknown recipe {recipe_id}"])
        self._recipe_counts[recipe_id] = self._recipe_counts.get(recipe_id, 0) + 1
        return self._accept()

    def remove_recipe(self, recipe_id: int) -> bool:
        """Unstack one of a selected recipe, dropping it at zero."""
        if self._wrong_phase("remove_recipe", PhaseName.SELECT_RECIPES):
            return False
        current = self._recipe_counts.get(recipe_id, 0)
        if current < 1:
            return self._refuse("remove_recipe", ["Recipe is not selected"])
        if current == 1:
            del self._recipe_counts[recipe_id]
        else:
            self._recipe_counts[recipe_id] = current - 1
        return self._accept()

    def set_batch_count(self, count: int) -> bool:
        """Set how many brews to make at once."""
        if self._wrong_phase("set_batch_count", PhaseName.SELECT_RECIPES):
            return False
        if count < 1:
            return self._refuse("set_batch_count", ["Batch count must be at least 1"])
        self._batch_count = count
        return self._accept()

    def proceed_to_herb_selection(self) -> bool:
        """select-recipes -> select-herbs-for-recipes, with no herbs picked yet."""
        if self._wrong_phase("proceed_to_herb_selection", PhaseName.SELECT_RECIPES):
            return False
        selected = self.selected_recipes
        errors = check_recipe_selection(selected)
        if errors:
            return self._refuse("proceed_to_herb_selection", errors)
        self._selected.clear()
        self._enter(
            SelectHerbsForRecipes(
                selected_recipes=tuple(selected), batch_count=self._batch_count
            )
        )
        return self._accept()

    def proceed_from_recipes(self) -> bool:
        """select-herbs-for-recipes -> make-choices or brewing."""
        if self._wrong_phase("proceed_from_recipes", PhaseName.SELECT_HERBS_FOR_RECIPES):
            return False
        errors = self._recipe_herb_errors()
        if errors:
            return self._refuse("proceed_from_recipes", errors)
        self._enter_choices_or_brewing(self.paired_effects)
        return self._accept()

    # --- Choices and brewing ---

    def _enter_choices_or_brewing(self, effects: list[PairedEffect]) -> None:
        required = collect_required_choices(effects)
        herbs = tuple(self.selected_herbs)
        self._choices.clear()
        if required:
            self._enter(
                MakeChoices(
                    selected_herbs=herbs,
                    paired_effects=tuple(effects),
                    required_choices=tuple(required),
                )
            )
        else:
            self._enter(
                Brewing(
                    selected_herbs=herbs,
                    paired_effects=tuple(effects),
                    batch_count=self._batch_count,
                )
            )

    def set_choice(self, variable: str, value: str) -> bool:
        """Record the player's value for a template choice."""
        if self._wrong_phase("set_choice", PhaseName.MAKE_CHOICES):
            return False
        required = {v.name: v for v in self._phase.required_choices}  # type: ignore[union-attr]
        target = required.get(variable)
        if target is None:
            return self._refuse("set_choice", [f"'{variable}' is not a choice for this brew"])
        if target.options is None and not is_choice_made(target, {variable: value}):
            return self._refuse("set_choice", [f"Enter a value for {variable}"])
        if target.options is not None and value not in target.options:
            return self._refuse(
                "set_choice",
                [f"'{value}' is not an option for {variable}: {', '.join(target.options)}"],
            )
        self._choices[variable] = value
        return self._accept()

    def proceed_to_brewing(self) -> bool:
        """make-choices -> brewing, once every choice is made."""
        if self._wrong_phase("proceed_to_brewing", PhaseName.MAKE_CHOICES):
            return False
        phase: MakeChoices = self._phase  # type: ignore[assignment]
        errors = check_choices(phase.required_choices, self._choices)
        if errors:
            return self._refuse("proceed_to_brewing", errors)
        choices = dict(self._choices)
        self._choices.clear()
        self._enter(
            Brewing(
                selected_herbs=phase.selected_herbs,
                paired_effects=phase.paired_effects,
                choices=choices,
                batch_count=self._batch_count,
            )
        )
        return self._accept()

    def brew(self) -> bool:
        """Roll the brew. Herbs are used up whatever the outcome."""
        if self._wrong_phase("brew", PhaseName.BREWING):
            return False
        phase: Brewing = self._phase  # type: ignore[assignment]
        outcome = resolve_brew(
            phase.paired_effects,
            phase.choices,
            phase.batch_count,
            self._modifier,
            self._config.brewing_dc,
            self._rng,
            self._config.check_die,
        )

        consumed: dict[int, int] = {}
        for item in phase.selected_herbs:
            consumed[item.herb.id] = consumed.get(item.herb.id, 0) + 1

        if phase.batch_count > 1:
            self._enter(
                BatchResult(
                    rolls=outcome.rolls,
                    type=outcome.type,
                    description=outcome.description,
                    consumed=consumed,
                    brewed=outcome.brewed,
                )
            )
        else:
            self._enter(
                Result(
                    roll=outcome.rolls[0],
                    type=outcome.type,
                    description=outcome.description,
                    consumed=consumed,
                    brewed=outcome.brewed,
                )
            )
        return self._accept()

    # --- Navigation ---

    def back(self) -> bool:
        """Step back one phase, clearing whatever the exited phase owned.

        Pairs are cleared when leaving pair-elements, choices whenever
        make-choices is left, herb picks when leaving the recipe herb
        selection.
        """
        phase = self._phase
        match phase:
            case PairElements():
                self._pairs.clear()
                self._choices.clear()
                self._enter(SelectHerbs())
            case MakeChoices() | Brewing():
                self._choices.clear()
                if isinstance(phase, Brewing):
                    required = collect_required_choices(phase.paired_effects)
                    if required:
                        self._enter(
                            MakeChoices(
                                selected_herbs=phase.selected_herbs,
                                paired_effects=phase.paired_effects,
                                required_choices=tuple(required),
                            )
                        )
                        return self._accept()
                if self._mode == BrewMode.BY_RECIPE:
                    self._enter(
                        SelectHerbsForRecipes(
                            selected_recipes=tuple(self.selected_recipes),
                            batch_count=self._batch_count,
                        )
                    )
                else:
                    self._enter(PairElements(selected_herbs=phase.selected_herbs))
            case SelectHerbsForRecipes():
                self._selected.clear()
                self._choices.clear()
                self._enter(SelectRecipes())
            case SelectHerbs() | SelectRecipes():
                return self._refuse("back", ["Already at the first step"])
            case Result() | BatchResult():
                return self._refuse("back", ["The brew is done, reset to start again"])
        return self._accept()

    def switch_mode(self, mode: BrewMode) -> bool:
        """Change brewing mode. Nothing carries over between modes."""
        self._mode = mode
        self._clear_selection()
        self._enter(INITIAL_PHASES[mode])
        return self._accept()

    def reset(self, inventory: Iterable[InventoryItem] | None = None) -> bool:
        """Start over in the current mode, optionally with a refreshed inventory."""
        if inventory is not None:
            self._inventory = {item.id: item for item in inventory}
        self._clear_selection()
        self._enter(INITIAL_PHASES[self._mode])
        return self._accept()
