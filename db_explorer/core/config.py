from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DB_PATH: Optional[Path] = None
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"
    ECHO_SQL: bool = False

    # Read DB_EXPLORER_* variables from the environment or the .env file
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="DB_EXPLORER_", extra="ignore"
    )
