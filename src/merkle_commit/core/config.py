"""
merkle-commit - Configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings, read from MERKLE_* environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MERKLE_",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "merkle-commit"
    VERSION: str = "0.1.0"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Hashing
    DEFAULT_HASH_ALGORITHM: str = Field(default="sha3_256", min_length=1)

    # Metrics
    METRICS_ENABLED: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
