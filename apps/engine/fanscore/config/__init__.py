# App config package

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_HISTORY_MONTHS, DEFAULT_RECENT_LOG_LIMIT


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FANSCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field("fan-score-engine", description="Application name")
    snapshot_path: Optional[str] = Field(
        None,
        description="Default snapshot file (JSON or YAML) exported by the data store",
    )
    history_months: int = Field(DEFAULT_HISTORY_MONTHS, ge=1, description="Months shown in a fan's score history")
    recent_log_limit: int = Field(DEFAULT_RECENT_LOG_LIMIT, ge=0, description="Recent records shown per fan")


def get_settings() -> Settings:
    return Settings()
