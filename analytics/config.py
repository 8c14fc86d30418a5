"""Handicap calculation settings.

Defaults live here; deployments override them with environment variables
(optionally from a local .env file).
"""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

load_dotenv()


# --- Configuration ---

ENV_PREFIX = "HANDICAP_"
STANDARD_SLOPE = 113
WHS_BONUS_FOR_EXCELLENCE = 0.96
WHS_MAX_INDEX = 54.0


class HandicapSettings(BaseModel):
    """Tunable parts of the handicap calculation."""
    model_config = ConfigDict(frozen=True)

    apply_bonus_for_excellence: bool = False
    bonus_for_excellence: float = Field(WHS_BONUS_FOR_EXCELLENCE, gt=0, le=1)
    max_index: Optional[float] = Field(WHS_MAX_INDEX, gt=0)
    window_size: int = Field(20, ge=1)
    minimum_rounds: int = Field(3, ge=1)
    trend_lookback: int = Field(5, ge=1)
    trend_deadband: float = Field(0.5, ge=0)

    @classmethod
    def from_env(cls) -> "HandicapSettings":
        """Build settings from HANDICAP_* environment variables, falling back to defaults."""
        values = {}
        for name in cls.model_fields:
            raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is None:
                continue
            raw = raw.strip()
            if name == "max_index" and raw == "":
                values[name] = None  # empty disables the cap
            else:
                values[name] = raw
        return cls.model_validate(values)


DEFAULT_SETTINGS = HandicapSettings()


@lru_cache(maxsize=1)
def get_settings() -> HandicapSettings:
    """Process-wide settings read once from the environment."""
    return HandicapSettings.from_env()
