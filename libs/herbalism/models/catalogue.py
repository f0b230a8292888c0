"""Reference data — herbs, recipes, biomes and the recipe lookup table."""

from collections.abc import Iterable, Iterator
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from herbalism.errors import DataIntegrityError


class Rarity(StrEnum):
    """Herb rarity, ordered from most to least common."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    VERY_RARE = "very rare"
    LEGENDARY = "legendary"
    PRETERNATURAL = "preternatural"

    @property
    def rank(self) -> int:
        """Ordinal position: 0 for common, higher is rarer."""
        return list(Rarity).index(self)

    @classmethod
    def _coerce(cls, other: object) -> "Rarity | None":
        """Plain strings compare by rank too. Unknown names raise ValueError."""
        if isinstance(other, Rarity):
            return other
        if isinstance(other, str):
            return cls(other)
        return None

    def __lt__(self, other: object) -> bool:
        rarity = self._coerce(other)
        if rarity is None:
            return NotImplemented
        return self.rank < rarity.rank

    def __le__(self, other: object) -> bool:
        rarity = self._coerce(other)
        if rarity is None:
            return NotImplemented
        return self.rank <= rarity.rank

    def __gt__(self, other: object) -> bool:
        rarity = self._coerce(other)
        if rarity is None:
            return NotImplemented
        return self.rank > rarity.rank

    def __ge__(self, other: object) -> bool:
        rarity = self._coerce(other)
        if rarity is None:
            return NotImplemented
        return self.rank >= rarity.rank


class RecipeType(StrEnum):
    """What a brew turns into. Effects of different types never mix."""

    ELIXIR = "elixir"
    BOMB = "bomb"
    OIL = "oil"


def _normalise_elements(value: Iterable[str]) -> tuple[str, ...]:
    return tuple(str(element).strip().lower() for element in value)


class Herb(BaseModel):
    """A herb and the elemental tags it carries (a multiset)."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    rarity: Rarity = Rarity.COMMON
    elements: tuple[str, ...] = ()
    description: str | None = None

    @field_validator("elements", mode="before")
    @classmethod
    def _lower_elements(cls, value: Iterable[str]) -> tuple[str, ...]:
        return _normalise_elements(value)


class Recipe(BaseModel):
    """An effect produced by pairing two elements."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    type: RecipeType
    elements: tuple[str, str]
    description: str | None = None  # template, see herbalism.helpers.templates

    @field_validator("elements", mode="before")
    @classmethod
    def _lower_elements(cls, value: Iterable[str]) -> tuple[str, ...]:
        return _normalise_elements(value)

    @property
    def element_pair(self) -> tuple[str, str]:
        """The required pair in sorted order, used as the lookup key."""
        first, second = sorted(self.elements)
        return first, second


class Biome(BaseModel):
    """A foraging location."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str | None = None


class BiomeHerb(BaseModel):
    """One weighted entry of a biome's herb table."""

    model_config = ConfigDict(frozen=True)

    herb: Herb
    weight: int = Field(gt=0)


def pair_key(first: str, second: str) -> tuple[str, str]:
    """Order- and case-independent key for an element pair."""
    a, b = sorted((first.lower(), second.lower()))
    return a, b


class RecipeBook:
    """Immutable recipe table keyed by unordered element pair.

    Raises DataIntegrityError if two recipes claim the same pair, if a
    description template is malformed, or if two recipes declare the same
    choice with different options.
    """

    def __init__(self, recipes: Iterable[Recipe]) -> None:
        # deferred: herbalism.helpers imports the models package
        from herbalism.helpers.templates import parse_template_variables

        self._by_pair: dict[tuple[str, str], Recipe] = {}
        self._by_id: dict[int, Recipe] = {}
        for recipe in recipes:
            key = recipe.element_pair
            existing = self._by_pair.get(key)
            if existing is not None and existing.id != recipe.id:
                raise DataIntegrityError(
                    f"Recipes '{existing.name}' and '{recipe.name}' "
                    f"both require {key[0]}+{key[1]}"
                )
            self._by_pair[key] = recipe
            self._by_id[recipe.id] = recipe

        choices: dict[str, tuple[Recipe, tuple[str, ...] | None]] = {}
        for recipe in self._by_id.values():
            if not recipe.description:
                continue
            for variable in parse_template_variables(recipe.description):
                seen = choices.setdefault(variable.name, (recipe, variable.options))
                if seen[1] != variable.options:
                    raise DataIntegrityError(
                        f"Choice '{variable.name}' is declared with conflicting options "
                        f"in '{seen[0].name}' and '{recipe.name}'"
                    )

    def __iter__(self) -> Iterator[Recipe]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._by_id

    def get(self, recipe_id: int) -> Recipe | None:
        """Look up a recipe by id."""
        return self._by_id.get(recipe_id)

    def for_pair(self, first: str, second: str) -> Recipe | None:
        """Look up the recipe for an unordered element pair."""
        return self._by_pair.get(pair_key(first, second))
