from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Device Tracker"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    DATA_DIR: Path = Field(default_factory=lambda: Path(__file__).resolve().parent.parent / "data")
    DB_FILENAME: str = "devices.db"

    # "persist" keeps the database file across restarts, "recreate" wipes it
    # on every startup (demo deployments).
    DB_LIFECYCLE: Literal["persist", "recreate"] = "persist"
    SEED_SAMPLE_DATA: bool = True

    SQLITE_DISABLE_WAL: bool = False
    SQLITE_BUSY_TIMEOUT_MS: int = Field(default=5000, ge=0)

    ALLOWED_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"
    METRICS_ENABLED: bool = True

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def db_path(self) -> Path:
        return self.DATA_DIR / self.DB_FILENAME

    @property
    def db_url(self) -> str:
        return f"sqlite:///{self.db_path}"

    @property
    def allowed_origins(self) -> list[str]:
        return [item.strip() for item in self.ALLOWED_ORIGINS.split(",") if item.strip()]


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
