"""Dice and weighted sampling.

Every function takes an optional `rng`. Without one, rolls come from a
module-level SystemRandom (OS entropy), so no seed is shared across
sessions. Tests pass a seeded random.Random instead.
"""

import logging
import random
from collections.abc import Sequence
from typing import TypeVar

from herbalism.errors import InvalidArgument
from herbalism.models.results import CheckRoll, QuantityRoll, TableRoll

logger = logging.getLogger(__name__)

T = TypeVar("T")

_system_random = random.SystemRandom()


def default_rng() -> random.Random:
    """The shared unpredictable random source."""
    return _system_random


def roll_die(sides: int, rng: random.Random | None = None) -> int:
    """Roll one die: a uniform integer in [1, sides]."""
    if sides < 1:
        raise InvalidArgument(f"A die needs at least one side, got {sides}")
    return (rng or _system_random).randint(1, sides)


def roll_d20(rng: random.Random | None = None) -> int:
    return roll_die(20, rng)


def roll_d4(rng: random.Random | None = None) -> int:
    return roll_die(4, rng)


def resolve_check(
    modifier: int, dc: int, rng: random.Random | None = None, sides: int = 20
) -> CheckRoll:
    """Roll one die, add the modifier, and compare against the DC (total >= dc)."""
    die = roll_die(sides, rng)
    total = die + modifier
    return CheckRoll(die=die, modifier=modifier, total=total, dc=dc, success=total >= dc)


def _roll_on_table(rng: random.Random | None) -> TableRoll:
    d20 = roll_d20(rng)
    if d20 <= 10:
        return TableRoll(d20=d20, herbs=1)
    if d20 == 20:
        return TableRoll(d20=d20, herbs=0, reroll=True)
    d4 = roll_d4(rng)
    if d20 <= 15:
        bonus = 0
    elif d20 <= 18:
        bonus = 1
    else:
        bonus = 2
    return TableRoll(d20=d20, d4=d4, bonus=bonus, herbs=d4 + bonus)


def roll_quantity(rng: random.Random | None = None) -> QuantityRoll:
    """Roll on the herb quantity table.

    d20 1-10: 1 herb, 11-15: 1d4, 16-18: 1d4+1, 19: 1d4+2,
    20: roll twice more (and a further 20 keeps chaining).
    """
    rolls: list[TableRoll] = []
    pending = 1
    while pending:
        pending -= 1
        roll = _roll_on_table(rng)
        rolls.append(roll)
        if roll.reroll:
            pending += 2
    total = sum(roll.herbs for roll in rolls)
    logger.debug("Quantity roll: %s = %d herbs", [r.d20 for r in rolls], total)
    return QuantityRoll(rolls=tuple(rolls), total=total)


def weighted_sample(
    entries: Sequence[tuple[T, float]], rng: random.Random | None = None
) -> T:
    """Pick one item with probability proportional to its weight.

    Entries with weight <= 0 are never picked. Raises InvalidArgument if
    there is nothing with a positive weight to pick from.
    """
    positive = [(item, weight) for item, weight in entries if weight > 0]
    if not positive:
        raise InvalidArgument("weighted_sample needs at least one positive weight")

    total = sum(weight for _, weight in positive)
    point = (rng or _system_random).random() * total
    for item, weight in positive:
        point -= weight
        if point < 0:
            return item
    # Float rounding can leave point at ~0 after the last entry
    return positive[-1][0]
