"""
Homebase Configuration Settings
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Server (use HOMEBASE_ prefix)
    port: int = Field(default=8000, alias="HOMEBASE_PORT")
    host: str = Field(default="0.0.0.0", alias="HOMEBASE_HOST")

    log_level: str = Field(
        default="INFO",
        alias="HOMEBASE_LOG_LEVEL",
        description="Root log level for the API process"
    )

    # All day-boundary math (drift, streaks) happens at local midnight in this zone.
    # Naive timestamps coming from storage are read as wall-clock times here.
    timezone: str = Field(
        default="America/New_York",
        alias="HOMEBASE_TIMEZONE",
        description="IANA timezone used to normalize timestamps to calendar days"
    )

    # More than one completion per day can push the 30-day rate past 100%
    cap_completion_rate: bool = Field(
        default=True,
        alias="HOMEBASE_CAP_COMPLETION_RATE",
        description="Clamp the 30-day habit completion rate at 100"
    )


settings = Settings()
