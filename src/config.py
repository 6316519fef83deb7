from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    DB_BACKEND: str = "sqlite"
    SQLITE_PATH: str = "./data/submissions.db"
    CORS_ORIGINS: str = ""  # Comma-separated origins, empty = same-origin only

    # School dataset
    DATASET_PATH: str = "./data/schools.csv"
    DATASET_NAME_COLUMN: str = "AAMC_Institution"
    DEFAULT_COST_VIEW: str = "in_state"  # in_state / out_of_state

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
