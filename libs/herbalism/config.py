"""Rules configuration — difficulty classes and brew limits."""

import os

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BREWING_DC = 15
DEFAULT_FORAGING_DC = 13
DEFAULT_MAX_HERBS_PER_BREW = 6
DEFAULT_CHECK_DIE = 20

_ENV_PREFIX = "HERBALISM_"


class RulesConfig(BaseModel):
    """Tunable game constants shared by brewing and foraging."""

    model_config = ConfigDict(frozen=True)

    brewing_dc: int = DEFAULT_BREWING_DC
    foraging_dc: int = DEFAULT_FORAGING_DC
    max_herbs_per_brew: int = Field(gt=0, default=DEFAULT_MAX_HERBS_PER_BREW)
    check_die: int = Field(gt=1, default=DEFAULT_CHECK_DIE)

    @classmethod
    def from_env(cls) -> "RulesConfig":
        """Build a config, overriding defaults from HERBALISM_* variables.

        e.g. HERBALISM_BREWING_DC=12 lowers the brewing difficulty.
        """
        overrides: dict[str, str] = {}
        for name in cls.model_fields:
            value = os.environ.get(f"{_ENV_PREFIX}{name.upper()}")
            if value is not None:
                overrides[name] = value
        return cls.model_validate(overrides)


DEFAULT_CONFIG = RulesConfig()
