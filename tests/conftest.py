"""Shared test fixtures."""

import random
from collections.abc import Iterable

import pytest
from herbalism import Biome, BiomeHerb, Herb, InventoryItem, Recipe, RecipeBook, RecipeType


class ScriptedRandom(random.Random):
    """A Random whose integer rolls come from a script, in order.

    Float draws (used by weighted sampling) still come from the seeded
    generator underneath.
    """

    def __init__(self, rolls: Iterable[int], seed: int = 0) -> None:
        super().__init__(seed)
        self._rolls = list(rolls)

    def randint(self, a: int, b: int) -> int:
        if not self._rolls:
            raise AssertionError("Ran out of scripted rolls")
        value = self._rolls.pop(0)
        if not a <= value <= b:
            raise AssertionError(f"Scripted roll {value} outside [{a}, {b}]")
        return value

    @property
    def remaining(self) -> list[int]:
        return list(self._rolls)


@pytest.fixture
def scripted():
    """Factory for scripted dice: scripted([18, 5, 3])."""
    return ScriptedRandom


# --- Catalogue ---


@pytest.fixture
def emberroot() -> Herb:
    return Herb(id=1, name="Emberroot", elements=["fire", "water"])


@pytest.fixture
def cinderleaf() -> Herb:
    return Herb(id=2, name="Cinderleaf", rarity="uncommon", elements=["Fire", "Earth"])


@pytest.fixture
def mossbell() -> Herb:
    return Herb(id=3, name="Mossbell", elements=["earth", "earth"])


@pytest.fixture
def ashpetal() -> Herb:
    return Herb(id=4, name="Ashpetal", rarity="rare", elements=["fire", "fire"])


@pytest.fixture
def sunblaze() -> Herb:
    return Herb(id=5, name="Sunblaze", rarity="legendary", elements=["fire"] * 6)


@pytest.fixture
def steam_tonic() -> Recipe:
    return Recipe(
        id=1,
        name="Steam Tonic",
        type=RecipeType.ELIXIR,
        elements=("fire", "water"),
        description="Heals {n*2} hit points.",
    )


@pytest.fixture
def scorch_bomb() -> Recipe:
    return Recipe(
        id=2,
        name="Scorch Bomb",
        type=RecipeType.BOMB,
        elements=("earth", "fire"),
        description="Deals {n}d6 {damage:fire|acid} damage.",
    )


@pytest.fixture
def stone_skin() -> Recipe:
    return Recipe(id=3, name="Stone Skin", type=RecipeType.ELIXIR, elements=("earth", "earth"))


@pytest.fixture
def flame_draught() -> Recipe:
    return Recipe(
        id=4,
        name="Flame Draught",
        type=RecipeType.ELIXIR,
        elements=("fire", "fire"),
        description="Resist cold for {n+1} hours.",
    )


@pytest.fixture
def recipes(steam_tonic, scorch_bomb, stone_skin, flame_draught) -> list[Recipe]:
    return [steam_tonic, scorch_bomb, stone_skin, flame_draught]


@pytest.fixture
def recipe_book(recipes) -> RecipeBook:
    return RecipeBook(recipes)


@pytest.fixture
def inventory(emberroot, cinderleaf, mossbell, ashpetal, sunblaze) -> list[InventoryItem]:
    """Inventory rows use the herb id as row id, as HerbInventory.items() does."""
    return [
        InventoryItem(id=emberroot.id, herb=emberroot, quantity=4),
        InventoryItem(id=cinderleaf.id, herb=cinderleaf, quantity=2),
        InventoryItem(id=mossbell.id, herb=mossbell, quantity=1),
        InventoryItem(id=ashpetal.id, herb=ashpetal, quantity=3),
        InventoryItem(id=sunblaze.id, herb=sunblaze, quantity=1),
    ]


@pytest.fixture
def forest() -> Biome:
    return Biome(id=1, name="Forest")


@pytest.fixture
def swamp() -> Biome:
    return Biome(id=2, name="Swamp")


class FakeBiomeSource:
    """In-memory biome herb tables. Biome ids in `failing` raise on fetch."""

    def __init__(
        self,
        tables: dict[int, list[BiomeHerb]],
        failing: Iterable[int] = (),
    ) -> None:
        self.tables = tables
        self.failing = set(failing)
        self.fetched: list[int] = []

    async def fetch_biome_herbs(self, biome_id: int) -> list[BiomeHerb]:
        self.fetched.append(biome_id)
        if biome_id in self.failing:
            raise ConnectionError(f"biome {biome_id} unavailable")
        return self.tables.get(biome_id, [])


@pytest.fixture
def biome_source(forest, swamp, emberroot, mossbell) -> FakeBiomeSource:
    return FakeBiomeSource(
        {
            forest.id: [BiomeHerb(herb=emberroot, weight=1)],
            swamp.id: [BiomeHerb(herb=mossbell, weight=1)],
        }
    )


@pytest.fixture
def fake_source():
    """Factory for custom biome sources."""
    return FakeBiomeSource
