from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ORDERDESK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    DATA_DIR: Path = Path("data")
    DATABASE_URL: Optional[str] = None  # defaults to a SQLite file in DATA_DIR
    SQL_ECHO: bool = False
    DB_LOCK_TIMEOUT: float = 5.0  # seconds a SQLite writer waits for another

    # Session
    SESSION_TTL_HOURS: int = 3
    SECRET_KEY: Optional[str] = None  # falls back to a key generated in DATA_DIR/secret.key
    ALGORITHM: str = "HS256"

    # Logging
    LOG_LEVEL: str = "WARNING"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{self.DATA_DIR / 'orderdesk.db'}"

    @property
    def session_file(self) -> Path:
        return self.DATA_DIR / "session.token"

    @property
    def secret_key_file(self) -> Path:
        return self.DATA_DIR / "secret.key"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
