"""Forager — allocate sessions to biomes, roll them, then apply the haul in one go."""

import logging
import random
from collections.abc import Iterable, Mapping

from herbalism.config import DEFAULT_CONFIG, RulesConfig
from herbalism.foraging.rules import (
    BiomeHerbSource,
    check_allocation,
    run_foraging_sessions,
)
from herbalism.foraging.state import ForageAllocation, ForageBudget
from herbalism.models.catalogue import Biome, Herb
from herbalism.models.inventory import HerbInventory
from herbalism.models.results import SessionResult

logger = logging.getLogger(__name__)


def tally_herbs(results: Iterable[SessionResult]) -> list[tuple[Herb, int]]:
    """Group every herb found across sessions by herb, in order of first find."""
    herbs: dict[int, Herb] = {}
    counts: dict[int, int] = {}
    for result in results:
        for herb in result.herbs_found:
            herbs[herb.id] = herb
            counts[herb.id] = counts.get(herb.id, 0) + 1
    return [(herbs[herb_id], count) for herb_id, count in counts.items()]


class Forager:
    """One player's foraging: budget, allocation and the inventory it fills."""

    def __init__(
        self,
        source: BiomeHerbSource,
        biomes: Mapping[int, Biome] | Iterable[Biome],
        budget: ForageBudget | None = None,
        inventory: HerbInventory | None = None,
        foraging_modifier: int = 0,
        config: RulesConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._source = source
        if isinstance(biomes, Mapping):
            self._biomes = dict(biomes)
        else:
            self._biomes = {biome.id: biome for biome in biomes}
        self._budget = budget or ForageBudget()
        self._inventory = inventory if inventory is not None else HerbInventory()
        self._modifier = foraging_modifier
        self._config = config or DEFAULT_CONFIG
        self._rng = rng
        self._allocation = ForageAllocation()
        self._errors: list[str] = []

    @property
    def budget(self) -> ForageBudget:
        return self._budget

    @property
    def inventory(self) -> HerbInventory:
        return self._inventory

    @property
    def allocation(self) -> ForageAllocation:
        return self._allocation

    @property
    def biomes(self) -> list[Biome]:
        return list(self._biomes.values())

    @property
    def errors(self) -> list[str]:
        """Why the last action was declined."""
        return list(self._errors)

    # --- Allocation ---

    def allocate(self, biome_id: int) -> bool:
        """Put one more session into a biome."""
        if biome_id not in self._biomes:
            self._errors = [f"Unknown biome {biome_id}"]
            return False
        if not self._allocation.increment(biome_id, self._budget.sessions_remaining):
            self._errors = [
                f"No foraging sessions left to allocate "
                f"({self._budget.sessions_remaining} remaining)"
            ]
            return False
        self._errors = []
        return True

    def deallocate(self, biome_id: int) -> bool:
        """Take one session back from a biome."""
        if not self._allocation.decrement(biome_id):
            self._errors = ["No sessions allocated to that biome"]
            return False
        self._errors = []
        return True

    def clear_allocation(self) -> None:
        self._allocation.clear()
        self._errors = []

    def discard(self, herb_id: int, quantity: int = 1) -> bool:
        """Throw away gathered herbs. Refused if the player holds fewer."""
        held = self._inventory.quantity(herb_id)
        if quantity < 1 or not self._inventory.remove(herb_id, quantity):
            self._errors = [f"Cannot discard {quantity} of herb {herb_id} ({held} held)"]
            return False
        logger.info("Discarded %d of herb %d", quantity, herb_id)
        self._errors = []
        return True

    def discard_all(self) -> None:
        """Empty the gathered herb inventory."""
        for item in self._inventory.items():
            self._inventory.remove(item.herb.id, item.quantity)
        self._errors = []

    def long_rest(self) -> None:
        """Restore every foraging session for the day."""
        self._budget.long_rest()

    def set_daily_sessions(self, daily_max: int) -> None:
        """Change the daily session limit, dropping an allocation that no longer fits."""
        self._budget.daily_max = max(0, daily_max)
        if self._allocation.trim_to(self._budget.sessions_remaining):
            logger.info(
                "Allocation cleared: only %d sessions remain",
                self._budget.sessions_remaining,
            )

    # --- Resolution ---

    async def forage(self) -> list[SessionResult]:
        """Run every allocated session and apply the results.

        Returns the per-session results. A refused allocation returns an
        empty list with the reason in `errors`. If the loop raises, the
        budget, inventory and allocation are left exactly as they were.
        """
        errors = check_allocation(self._allocation, self._budget)
        if errors:
            self._errors = errors
            logger.warning("Foraging refused: %s", "; ".join(errors))
            return []

        spent = self._allocation.total
        try:
            results = await run_foraging_sessions(
                self._allocation,
                self._biomes,
                self._source,
                self._modifier,
                self._config.foraging_dc,
                self._rng,
                self._config.check_die,
            )
        except Exception:
            logger.warning("Foraging aborted, nothing was applied", exc_info=True)
            raise

        # Commit: nothing above touched the state.
        self._budget.spend(spent)
        found = tally_herbs(results)
        for herb, count in found:
            self._inventory.add(herb, count)
        self._allocation.clear()
        self._errors = []

        logger.info(
            "Foraged %d sessions: %d succeeded, %d herbs found",
            spent,
            sum(1 for r in results if r.success),
            sum(count for _, count in found),
        )
        return results
