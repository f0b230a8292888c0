"""Brew workflow guards — pure functions.

Each guard returns a list of error strings describing the unmet
conditions. Empty list means the transition may go ahead. Guards are
re-evaluated on every attempt, never cached.
"""

from collections.abc import Iterable, Mapping, Sequence

from herbalism.brewing.pairing import PairedEffect, SelectedRecipe, can_combine_effects
from herbalism.brewing.pool import build_element_pool, instance_counts, required_elements
from herbalism.helpers.templates import TemplateVariable, is_choice_made
from herbalism.models.catalogue import Herb
from herbalism.models.inventory import InventoryItem


def scaled_herb_cap(max_herbs_per_brew: int, batch_count: int = 1) -> int:
    """Herb instance limit for a brew of `batch_count` units."""
    return max_herbs_per_brew * max(1, batch_count)


def check_add_herb(
    item: InventoryItem | None, already_selected: int, total_selected: int, cap: int
) -> list[str]:
    """Validate selecting one more instance of an inventory item."""
    if item is None:
        return ["Herb is not in the inventory"]
    errors: list[str] = []
    if already_selected >= item.quantity:
        errors.append(f"No more {item.herb.name} available ({item.quantity} held)")
    if total_selected >= cap:
        errors.append(f"Herb limit reached ({cap} per brew)")
    return errors


def check_herb_selection(total_selected: int, cap: int) -> list[str]:
    """Validate the herb selection before pairing."""
    if total_selected < 1:
        return ["Select at least one herb"]
    if total_selected > cap:
        return [f"Too many herbs selected: {total_selected}/{cap}"]
    return []


def check_pairing(effects: Sequence[PairedEffect]) -> list[str]:
    """Validate assigned pairs: at least one effect, all of one type."""
    combine = can_combine_effects(effects)
    if not combine.valid:
        return [combine.error or "Effects cannot be combined"]
    if not combine.ready:
        return ["Pair elements into at least one effect"]
    return []


def check_choices(
    required: Iterable[TemplateVariable], choices: Mapping[str, str]
) -> list[str]:
    """Validate that every required choice has been made."""
    errors: list[str] = []
    for variable in required:
        if not is_choice_made(variable, choices):
            if variable.options is not None:
                errors.append(
                    f"Choose a {variable.name}: one of {', '.join(variable.options)}"
                )
            else:
                errors.append(f"Enter a value for {variable.name}")
    return errors


def check_recipe_selection(selected: Sequence[SelectedRecipe]) -> list[str]:
    """Validate the recipe selection before picking herbs for it."""
    if not selected:
        return ["Select at least one recipe"]
    combine = can_combine_effects(
        PairedEffect(recipe=s.recipe, count=s.count) for s in selected
    )
    if not combine.valid:
        return [combine.error or "Recipes cannot be combined"]
    return []


def check_recipe_herbs(
    selected: Sequence[SelectedRecipe],
    batch_count: int,
    selections: Sequence[tuple[Herb, int]],
    cap: int,
) -> list[str]:
    """Validate that the selected herbs cover the recipes for the whole batch.

    Two separate checks per element: the raw element count must reach
    count * batch_count, and for batches the number of herb instances
    carrying the element must reach batch_count.
    """
    errors = check_recipe_selection(selected)
    if errors:
        return errors

    total_selected = sum(qty for _, qty in selections if qty > 0)
    errors.extend(check_herb_selection(total_selected, cap))

    required = required_elements(
        ((s.recipe.elements, s.count) for s in selected), batch_count
    )
    available = build_element_pool(selections)
    for element, needed in required.items():
        have = available.get(element, 0)
        if have < needed:
            errors.append(f"Not enough {element}: {have}/{needed}")

    if batch_count > 1:
        instances = instance_counts(selections, required)
        for element, have in instances.items():
            if have < batch_count:
                errors.append(
                    f"Need {batch_count} herbs carrying {element} for "
                    f"{batch_count} brews, have {have}"
                )

    return errors
