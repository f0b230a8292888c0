"""Roll records and resolution results reported to the persistence layer."""

from pydantic import BaseModel, ConfigDict, Field

from herbalism.models.catalogue import Biome, Herb, RecipeType


class CheckRoll(BaseModel):
    """A single die + modifier check against a difficulty class."""

    model_config = ConfigDict(frozen=True)

    die: int = Field(ge=1)
    modifier: int
    total: int
    dc: int
    success: bool


class TableRoll(BaseModel):
    """One roll on the herb quantity table."""

    model_config = ConfigDict(frozen=True)

    d20: int = Field(ge=1, le=20)
    d4: int | None = None
    bonus: int = 0
    herbs: int = Field(ge=0)
    reroll: bool = False  # natural 20: roll twice more

    def describe(self) -> str:
        """Human-readable line, e.g. 'd20: 17 → 1d4+1 = 3+1 = 4 herbs'."""
        if self.reroll:
            return f"d20: {self.d20} → Roll twice more!"
        if self.d4 is None:
            return f"d20: {self.d20} → 1 herb"
        if self.bonus:
            return (
                f"d20: {self.d20} → 1d4+{self.bonus} = "
                f"{self.d4}+{self.bonus} = {self.herbs} herbs"
            )
        return f"d20: {self.d20} → 1d4 = {self.d4} herbs"


class QuantityRoll(BaseModel):
    """Every table roll made for one successful forage, and their sum."""

    model_config = ConfigDict(frozen=True)

    rolls: tuple[TableRoll, ...]
    total: int = Field(ge=0)

    def describe(self) -> list[str]:
        return [roll.describe() for roll in self.rolls]


class SessionResult(BaseModel):
    """Outcome of one foraging session. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    session_number: int = Field(gt=0)
    biome: Biome
    check: CheckRoll
    quantity: QuantityRoll | None = None
    herbs_found: tuple[Herb, ...] = ()

    @property
    def success(self) -> bool:
        return self.check.success


class BrewedItem(BaseModel):
    """What a successful brew adds to the player's brewed items."""

    model_config = ConfigDict(frozen=True)

    type: RecipeType
    effects: tuple[str, ...]  # effect names, repeated once per potency
    choices: dict[str, str] = Field(default_factory=dict)
    description: str
    quantity: int = Field(gt=0)
