"""In-memory foraging state: the daily session budget and biome allocations."""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_DAILY_SESSIONS = 1


@dataclass
class ForageBudget:
    """Foraging sessions per day, replenished only by a long rest."""

    daily_max: int = DEFAULT_DAILY_SESSIONS
    used_today: int = 0

    @property
    def sessions_remaining(self) -> int:
        return max(0, self.daily_max - self.used_today)

    def can_spend(self, sessions: int) -> bool:
        return 0 < sessions <= self.sessions_remaining

    def spend(self, sessions: int) -> bool:
        """Use up sessions. Returns False (and spends nothing) if over budget."""
        if not self.can_spend(sessions):
            return False
        self.used_today += sessions
        return True

    def long_rest(self) -> None:
        """Reset today's usage."""
        logger.info("Long rest: %d foraging sessions restored", self.used_today)
        self.used_today = 0


@dataclass
class ForageAllocation:
    """Sessions assigned to each biome, in the order biomes were first picked."""

    _sessions: dict[int, int] = field(default_factory=dict)  # biome_id -> sessions

    @property
    def total(self) -> int:
        return sum(self._sessions.values())

    def sessions_for(self, biome_id: int) -> int:
        return self._sessions.get(biome_id, 0)

    def items(self) -> list[tuple[int, int]]:
        """(biome_id, sessions) pairs in allocation order."""
        return list(self._sessions.items())

    def increment(self, biome_id: int, sessions_remaining: int) -> bool:
        """Assign one more session to a biome. Rejected once the budget is used up."""
        if self.total >= sessions_remaining:
            return False
        self._sessions[biome_id] = self._sessions.get(biome_id, 0) + 1
        return True

    def decrement(self, biome_id: int) -> bool:
        """Take one session back from a biome."""
        current = self._sessions.get(biome_id, 0)
        if current < 1:
            return False
        if current == 1:
            del self._sessions[biome_id]
        else:
            self._sessions[biome_id] = current - 1
        return True

    def clear(self) -> None:
        self._sessions.clear()

    def trim_to(self, sessions_remaining: int) -> bool:
        """Drop the whole allocation if the budget shrank below it. Returns True if cleared."""
        if self.total > sessions_remaining:
            self.clear()
            return True
        return False
