from herbalism.models.catalogue import (
    Biome,
    BiomeHerb,
    Herb,
    Rarity,
    Recipe,
    RecipeBook,
    RecipeType,
    pair_key,
)
from herbalism.models.inventory import HerbInventory, InventoryItem
from herbalism.models.results import (
    BrewedItem,
    CheckRoll,
    QuantityRoll,
    SessionResult,
    TableRoll,
)

__all__ = [
    "Biome",
    "BiomeHerb",
    "BrewedItem",
    "CheckRoll",
    "Herb",
    "HerbInventory",
    "InventoryItem",
    "QuantityRoll",
    "Rarity",
    "Recipe",
    "RecipeBook",
    "RecipeType",
    "SessionResult",
    "TableRoll",
    "pair_key",
]
