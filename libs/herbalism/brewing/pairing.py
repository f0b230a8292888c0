"""Pairing and recipe resolution — pure functions."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from herbalism.brewing.pool import ElementPair
from herbalism.models.catalogue import Recipe, RecipeBook, RecipeType, pair_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PairedEffect:
    """A recipe and how many times it was paired (its potency)."""

    recipe: Recipe
    count: int = 1


@dataclass(frozen=True)
class SelectedRecipe:
    """A recipe picked in by-recipe mode and how many times it is stacked."""

    recipe: Recipe
    count: int = 1


@dataclass(frozen=True)
class CombineCheck:
    """Result of can_combine_effects."""

    valid: bool
    type: RecipeType | None = None
    error: str | None = None

    @property
    def ready(self) -> bool:
        """Valid and non-empty: the brew may proceed."""
        return self.valid and self.type is not None


def find_recipe_for_pair(
    recipes: RecipeBook | Iterable[Recipe], first: str, second: str
) -> Recipe | None:
    """Find the recipe whose element pair matches {first, second}.

    Order and case do not matter. Returns None when nothing matches.
    """
    if isinstance(recipes, RecipeBook):
        return recipes.for_pair(first, second)
    key = pair_key(first, second)
    for recipe in recipes:
        if recipe.element_pair == key:
            return recipe
    return None


def aggregate_effects(
    recipes: RecipeBook | Iterable[Recipe], pairs: Iterable[ElementPair]
) -> list[PairedEffect]:
    """Fold assigned pairs into effects, counting repeats of the same recipe.

    Pairs that match no recipe are inert: they are dropped, not reported.
    Effects keep the order in which their recipe first appeared.
    """
    if not isinstance(recipes, RecipeBook):
        recipes = RecipeBook(recipes)
    counts: dict[int, int] = {}
    matched: dict[int, Recipe] = {}
    for first, second in pairs:
        recipe = recipes.for_pair(first, second)
        if recipe is None:
            logger.debug("No recipe for pair %s+%s, pair is inert", first, second)
            continue
        matched[recipe.id] = recipe
        counts[recipe.id] = counts.get(recipe.id, 0) + 1
    return [PairedEffect(recipe=matched[rid], count=count) for rid, count in counts.items()]


def effects_from_recipes(selected: Iterable[SelectedRecipe]) -> list[PairedEffect]:
    """By-recipe mode: every selected recipe is an effect with its count as potency."""
    return [PairedEffect(recipe=s.recipe, count=s.count) for s in selected]


def can_combine_effects(effects: Iterable[PairedEffect]) -> CombineCheck:
    """Check effects can go into one brew: they must all share an output type.

    No effects is valid but not ready (CombineCheck.ready is False).
    """
    types: list[RecipeType] = []
    for effect in effects:
        if effect.recipe.type not in types:
            types.append(effect.recipe.type)

    if not types:
        return CombineCheck(valid=True)

    if len(types) > 1:
        names = " and ".join(str(t) for t in sorted(types))
        return CombineCheck(valid=False, error=f"Cannot mix {names} effects in one brew")

    return CombineCheck(valid=True, type=types[0])
