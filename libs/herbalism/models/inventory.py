"""Player herb inventory — rows handed to the workflow and the state behind them."""

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from herbalism.models.catalogue import Herb


class InventoryItem(BaseModel):
    """One inventory row: a herb and how many of it the player holds."""

    id: int
    herb: Herb
    quantity: int = Field(ge=0)


@dataclass
class HerbInventory:
    """In-memory herb quantities keyed by herb id.

    Entries that reach zero are removed, so a missing herb and a herb
    with quantity 0 look the same.
    """

    _quantities: dict[int, int] = field(default_factory=dict)
    _herbs: dict[int, Herb] = field(default_factory=dict)

    def quantity(self, herb_id: int) -> int:
        """Return how many of a herb the player holds."""
        return self._quantities.get(herb_id, 0)

    def add(self, herb: Herb, quantity: int = 1) -> None:
        """Add herbs to the inventory."""
        if quantity <= 0:
            return
        self._herbs[herb.id] = herb
        self._quantities[herb.id] = self._quantities.get(herb.id, 0) + quantity

    def remove(self, herb_id: int, quantity: int = 1) -> bool:
        """Remove herbs. Returns False if the player holds fewer than `quantity`."""
        current = self._quantities.get(herb_id, 0)
        if current < quantity:
            return False
        self._quantities[herb_id] = current - quantity
        if self._quantities[herb_id] == 0:
            del self._quantities[herb_id]
            del self._herbs[herb_id]
        return True

    def has_items(self, requirements: dict[int, int]) -> bool:
        """Check the inventory covers every (herb_id -> quantity) requirement."""
        return all(self.quantity(herb_id) >= qty for herb_id, qty in requirements.items())

    def items(self) -> list[InventoryItem]:
        """Snapshot of the non-empty rows, using the herb id as row id."""
        return [
            InventoryItem(id=herb_id, herb=self._herbs[herb_id], quantity=qty)
            for herb_id, qty in self._quantities.items()
        ]
