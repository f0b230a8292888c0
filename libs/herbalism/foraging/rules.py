"""Foraging resolution — the allocation guard and the session loop.

The loop only builds results. Budget and inventory are changed by the
caller once the whole loop has finished (see Forager.forage).
"""

import logging
import random
from collections.abc import Iterable, Mapping, Sequence
from typing import Protocol

from herbalism.errors import DataIntegrityError, ExternalFailure, HerbalismError
from herbalism.foraging.state import ForageAllocation, ForageBudget
from herbalism.helpers.dice import resolve_check, roll_quantity, weighted_sample
from herbalism.models.catalogue import Biome, BiomeHerb, Herb
from herbalism.models.results import SessionResult

logger = logging.getLogger(__name__)


class BiomeHerbSource(Protocol):
    """Where a biome's weighted herb table comes from."""

    async def fetch_biome_herbs(self, biome_id: int) -> Sequence[BiomeHerb]: ...


def check_allocation(allocation: ForageAllocation, budget: ForageBudget) -> list[str]:
    """Validate an allocation against the session budget.

    Returns a list of error strings. Empty list means valid.
    """
    total = allocation.total
    if total < 1:
        return ["Allocate at least one session to a biome"]
    if total > budget.sessions_remaining:
        return [
            f"Allocated {total} sessions but only "
            f"{budget.sessions_remaining} remain (take a long rest)"
        ]
    return []


async def _load_table(source: BiomeHerbSource, biome: Biome) -> list[BiomeHerb]:
    try:
        return list(await source.fetch_biome_herbs(biome.id))
    except HerbalismError:
        raise
    except Exception as e:
        raise ExternalFailure(f"Failed to load herbs for {biome.name}: {e}") from e


async def run_foraging_sessions(
    allocations: ForageAllocation | Iterable[tuple[int, int]],
    biomes: Mapping[int, Biome],
    source: BiomeHerbSource,
    modifier: int,
    dc: int,
    rng: random.Random | None = None,
    sides: int = 20,
) -> list[SessionResult]:
    """Roll every allocated session, biome by biome, in allocation order.

    Each session is a d20 + modifier check against the DC. A success rolls
    on the quantity table and draws that many herbs (with replacement) from
    the biome's weighted table.

    Raises ExternalFailure if a herb table cannot be fetched and
    DataIntegrityError for an unknown biome. Either way no results are
    returned, so nothing gets applied.
    """
    pairs = allocations.items() if isinstance(allocations, ForageAllocation) else allocations
    results: list[SessionResult] = []
    session_number = 0

    for biome_id, count in pairs:
        if count < 1:
            continue
        biome = biomes.get(biome_id)
        if biome is None:
            raise DataIntegrityError(f"Unknown biome {biome_id}")

        table = await _load_table(source, biome)
        entries = [(entry.herb, entry.weight) for entry in table]
        if not entries:
            logger.warning("Biome '%s' has no herbs to find", biome.name)

        for _ in range(count):
            session_number += 1
            check = resolve_check(modifier, dc, rng, sides)
            if not check.success:
                results.append(
                    SessionResult(session_number=session_number, biome=biome, check=check)
                )
                logger.debug(
                    "Session %d in %s failed (%d)", session_number, biome.name, check.total
                )
                continue

            quantity = roll_quantity(rng)
            found: list[Herb] = []
            if entries:
                found = [weighted_sample(entries, rng) for _ in range(quantity.total)]
            results.append(
                SessionResult(
                    session_number=session_number,
                    biome=biome,
                    check=check,
                    quantity=quantity,
                    herbs_found=tuple(found),
                )
            )
            logger.debug(
                "Session %d in %s succeeded (%d): %d herbs",
                session_number,
                biome.name,
                check.total,
                len(found),
            )

    return results
