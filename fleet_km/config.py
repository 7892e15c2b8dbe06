"""
Runtime settings from FLEET_KM_* environment variables or a .env file.
"""
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .rankings import DEFAULT_TOP_N
from .snapshots import DEFAULT_STORE_FILE


class Settings(BaseSettings):
    """Environment wins over .env; empty variables count as unset."""

    model_config = SettingsConfigDict(
        env_prefix="FLEET_KM_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    store: Path = Field(default=Path(DEFAULT_STORE_FILE), description="Snapshot store JSON file")
    system_roster: Path = Field(default=Path("system.xlsx"), description="Default system roster")
    crew_roster: Path = Field(default=Path("crew.xlsx"), description="Default double-crew roster")
    top_n: int = Field(default=DEFAULT_TOP_N, description="Length of the top-N rankings")

    @field_validator("top_n", mode="before")
    @classmethod
    def positive_top_n(cls, value: Any) -> int:
        """Anything that is not a positive integer falls back to the default."""
        try:
            n = int(str(value).strip())
        except ValueError:
            return DEFAULT_TOP_N
        return n if n > 0 else DEFAULT_TOP_N


def load_settings() -> Settings:
    return Settings()
