from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"
    APP_NAME: str = "countries-api"

    # Database configuration (PostgreSQL when a host is configured)
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_USERNAME: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_HOST: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str | None = None

    # Local fallback database
    SQLITE_PATH: str = "./countries.db"

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("logs")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # Authentication (bearer JWT)
    AUTH_ENABLED: bool = True
    JWT_SECRET: str | None = None
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str | None = None
    JWT_ISSUER: str | None = None

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT: str = "100/minute"

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the database URL for the current environment.

        PostgreSQL is used when `POSTGRES_HOST` is configured; otherwise the app
        falls back to a local SQLite file at `SQLITE_PATH` (handy for development
        and for running the test-suite without a database server).
        """
        if self.POSTGRES_HOST:
            return (
                f"postgresql+{self.POSTGRES_DRIVER}://"
                f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
                f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
                f"{self.POSTGRES_DB}"
            )
        return f"sqlite+aiosqlite:///{self.SQLITE_PATH}"

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str | None:
        # logging expects upper-case level names
        return v.upper() if isinstance(v, str) else v

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v: str | None) -> str | None:
        return v.lower() if isinstance(v, str) else v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Settings come from the environment only, so one cached instance is enough.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
