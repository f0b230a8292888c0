"""Stochastic outcome resolution for brewing.

Each unit of a batch is an independent d20 + modifier check against the
brewing DC. No carry-over, no rerolls. Every roll is kept; the success
count is derived from them.
"""

import logging
import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from herbalism.brewing.pairing import PairedEffect, can_combine_effects
from herbalism.errors import InvalidArgument
from herbalism.helpers.dice import resolve_check
from herbalism.helpers.templates import compute_description
from herbalism.models.catalogue import RecipeType
from herbalism.models.results import BrewedItem, CheckRoll

logger = logging.getLogger(__name__)


def roll_brews(
    count: int,
    modifier: int,
    dc: int,
    rng: random.Random | None = None,
    sides: int = 20,
) -> list[CheckRoll]:
    """Roll `count` independent brewing checks."""
    if count < 1:
        raise InvalidArgument(f"Cannot brew {count} units")
    return [resolve_check(modifier, dc, rng, sides) for _ in range(count)]


@dataclass(frozen=True)
class BrewOutcome:
    """Rolls for a brew and what came out of it."""

    rolls: tuple[CheckRoll, ...]
    type: RecipeType
    description: str | None
    brewed: BrewedItem | None

    @property
    def success_count(self) -> int:
        return sum(1 for roll in self.rolls if roll.success)


def brewed_effect_names(effects: Sequence[PairedEffect]) -> tuple[str, ...]:
    """Effect names with one entry per potency, as stored on a brewed item."""
    return tuple(e.recipe.name for e in effects for _ in range(e.count))


def resolve_brew(
    effects: Sequence[PairedEffect],
    choices: Mapping[str, str],
    batch_count: int,
    modifier: int,
    dc: int,
    rng: random.Random | None = None,
    sides: int = 20,
) -> BrewOutcome:
    """Roll every unit of a brew and build the brewed item for the successes.

    The description is computed once, and only if at least one unit
    succeeded: a batch is uniform in kind and differs only in quantity.
    """
    combine = can_combine_effects(effects)
    if not combine.ready or combine.type is None:
        raise InvalidArgument(combine.error or "Nothing to brew")

    rolls = roll_brews(batch_count, modifier, dc, rng, sides)
    successes = sum(1 for roll in rolls if roll.success)

    description: str | None = None
    brewed: BrewedItem | None = None
    if successes:
        description = compute_description(effects, choices)
        brewed = BrewedItem(
            type=combine.type,
            effects=brewed_effect_names(effects),
            choices=dict(choices),
            description=description,
            quantity=successes,
        )

    logger.info(
        "Brewed %s: %d/%d succeeded (rolls %s, modifier %+d, DC %d)",
        combine.type,
        successes,
        batch_count,
        [roll.die for roll in rolls],
        modifier,
        dc,
    )
    return BrewOutcome(
        rolls=tuple(rolls), type=combine.type, description=description, brewed=brewed
    )
