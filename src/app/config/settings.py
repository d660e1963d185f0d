from pydantic_settings import BaseSettings
from pydantic import ConfigDict, Field, field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, strip_trailing_slash

class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration
    POSTGRES_DRIVER: str = "psycopg"
    POSTGRES_USERNAME: str
    POSTGRES_PASSWORD: str
    POSTGRES_HOST: str
    POSTGRES_PORT: int
    POSTGRES_DB: str

    # Test database configuration
    TEST_POSTGRES_DB: str | None = None
    TESTING: bool = False

    # Full URL override (e.g. sqlite+aiosqlite:///./campus_coffee.db)
    DATABASE_URL_OVERRIDE: str | None = None

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/campus-coffee")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    LOG_USE_QUEUE: bool = False
    ENABLE_SQL_LOGGING: bool = False

    # Review approval: number of approvals a review needs before it is approved.
    # No default; every deployment sets its own quorum.
    APPROVAL_MIN_COUNT: int = Field(ge=1)

    # OpenStreetMap API
    OSM_API_BASE_URL: str = "https://www.openstreetmap.org/api/0.6"
    OSM_API_TIMEOUT_SECONDS: float = 10.0

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the appropriate database URL based on the current environment.

        - `DATABASE_URL_OVERRIDE` wins when set (SQLite for local runs, CI URLs, ...).
        - If `TESTING=True` and `TEST_POSTGRES_DB` is provided, the test database is used
          so tests never touch the regular database.
        - Otherwise the regular `POSTGRES_DB` is used.

        Returns:
            str: The constructed database connection URL.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        database = self.POSTGRES_DB
        if self.TESTING and self.TEST_POSTGRES_DB:
            database = self.TEST_POSTGRES_DB

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{database}"
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_LEVEL environment variable value to uppercase.

        Runs before the Literal check, so `LOG_LEVEL=debug` in `.env` is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    @field_validator("OSM_API_BASE_URL", mode="before")
    def normalize_osm_base_url(cls, v: str | None) -> str | None:
        return strip_trailing_slash(v)

    # --- ConfigDict settings ---
    model_config = ConfigDict(
        # Load environment variables from the .env file located two levels up relative to this file.
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() is good for performance.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
