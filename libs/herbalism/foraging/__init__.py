"""Foraging — session budget, biome allocation and the gathering loop."""

from herbalism.foraging.forager import Forager, tally_herbs
from herbalism.foraging.rules import (
    BiomeHerbSource,
    check_allocation,
    run_foraging_sessions,
)
from herbalism.foraging.state import (
    DEFAULT_DAILY_SESSIONS,
    ForageAllocation,
    ForageBudget,
)

__all__ = [
    "DEFAULT_DAILY_SESSIONS",
    "BiomeHerbSource",
    "ForageAllocation",
    "ForageBudget",
    "Forager",
    "check_allocation",
    "run_foraging_sessions",
    "tally_herbs",
]
