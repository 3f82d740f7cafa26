# backend/reliefmap/core/config.py
"""Application settings loaded from the environment (and `.env`)."""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_data_dir() -> Path:
    # /app/data inside the container, <repo>/data for local development
    container_data = Path("/app/data")
    if container_data.exists():
        return container_data
    return Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Relief Map API"
    LOG_LEVEL: str = "INFO"

    # DATABASE_URL wins over the SQLite file under DATA_DIR
    DATABASE_URL: Optional[str] = None
    DATA_DIR: Path = _default_data_dir()
    PUBLIC_DATA_URL: str = "/data"

    CORS_ORIGINS: str = "*"

    # photo intake limits
    MAX_FILES: int = 5
    MAX_FILE_SIZE_MB: int = 50
    COMPRESS_MAX_SIZE_MB: float = 5.0
    COMPRESS_MAX_DIMENSION: int = 1920

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{self.DATA_DIR / 'app.db'}"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def max_file_size_bytes(self) -> int:
        return self.MAX_FILE_SIZE_MB * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    return Settings()
