from __future__ import annotations

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ROUNDING_MODES = {
    "half_up": ROUND_HALF_UP,
    "half_even": ROUND_HALF_EVEN,
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    money_rounding: Literal["half_up", "half_even"] = Field("half_up", alias="MONEY_ROUNDING")

    @property
    def rounding(self) -> str:
        return ROUNDING_MODES[self.money_rounding]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
