"""Engine configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutrient_engine.domain.journal import Bucketing

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    environment: str = _ENVIRONMENT
    log_level: str = "INFO"
    suspicious_percent: float = 10000
    efficiency_window_days: int = 7
    default_bucketing: Bucketing = Bucketing.DAY

    model_config = SettingsConfigDict(
        env_prefix="NUTRIENT_ENGINE_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
