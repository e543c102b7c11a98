"""Application settings and configuration."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".fintrack"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FINTRACK_",
    )

    app_name: str = "FinTrack"
    app_version: str = "0.1.0"

    # Data directory (SQLite database lives here unless database_url is set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Storage backend: relational tables or process-local maps
    storage_backend: Literal["sqlalchemy", "memory"] = "sqlalchemy"

    # Market data settings
    market_data_provider: Literal["stub", "fmp", "yahoo"] = "stub"
    fmp_api_key: Optional[str] = None
    fmp_base_url: str = "https://financialmodelingprep.com/api/v3"
    quote_timeout_seconds: float = 8.0
    quote_max_concurrency: int = 10
    quote_cache_ttl_seconds: int = 60

    # Valuation behavior
    stale_warning_ratio: float = 0.5
    fail_on_quote_outage: bool = False
    history_default_days: int = 90

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "fintrack.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
