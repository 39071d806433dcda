"""Application settings via Pydantic Settings."""

from functools import lru_cache
import json

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _aiosqlite_url(database_url: str) -> str:
    """
    Upgrade a plain SQLite URL to the async driver.

    `sqlite:///lit_clock.db` is what most tools print; the app needs
    `sqlite+aiosqlite:///lit_clock.db` for the async engine.
    """
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


def _read_only_sqlite_url(database_url: str) -> str:
    """
    Open a file database in read-only URI mode.

    A plain path lets SQLite create an empty file when the name is mistyped;
    `mode=ro` makes a missing file fail on connect instead. In-memory and
    URLs that already carry options are returned unchanged.
    """
    prefix = "sqlite+aiosqlite:///"
    if not database_url.startswith(prefix) or "?" in database_url:
        return database_url
    path = database_url[len(prefix):]
    if not path or path == ":memory:" or path.startswith("file:"):
        return database_url
    return f"{prefix}file:{path}?mode=ro&uri=true"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Literary Clock"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Quote database (SQLite)
    database_url: str = Field(
        default="sqlite+aiosqlite:///lit_clock.db",
        validation_alias=AliasChoices("DATABASE_URL", "LIT_CLOCK_DB"),
    )

    @property
    def async_database_url(self) -> str:
        """Get database URL with the aiosqlite driver."""
        return _aiosqlite_url(self.database_url)

    @property
    def read_only_database_url(self) -> str:
        """Async URL opened read-only, used for the startup quote load."""
        return _read_only_sqlite_url(self.async_database_url)

    # Clock
    timezone: str = Field(
        default="",
        validation_alias=AliasChoices("CLOCK_TIMEZONE", "TZ_NAME"),
        description="IANA zone for '/' and '/json'. Empty means system local time.",
    )
    template_path: str = Field(
        default="",
        validation_alias=AliasChoices("CLOCK_TEMPLATE", "TEMPLATE_PATH"),
        description="Override for the HTML template. Empty uses the packaged clock.html.",
    )

    # CORS
    cors_origins: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("CORS_ORIGINS", "ALLOWED_ORIGINS"),
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v: object) -> list[str]:
        """
        Accept either:
        - JSON array string: '["https://a.com","http://localhost:3000"]'
        - Comma-separated string: "https://a.com,http://localhost:3000"
        - Already-parsed list[str]
        """
        if v is None:
            return []
        if isinstance(v, list):
            return [str(x).strip() for x in v if str(x).strip()]
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            if s.startswith("["):
                try:
                    parsed = json.loads(s)
                except json.JSONDecodeError:
                    parsed = s.split(",")
                if isinstance(parsed, list):
                    return [str(x).strip() for x in parsed if str(x).strip()]
                return [str(parsed).strip()]
            return [part.strip() for part in s.split(",") if part.strip()]
        return [str(v).strip()] if str(v).strip() else []


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
