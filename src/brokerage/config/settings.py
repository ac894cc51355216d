"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".paper-brokerage"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Paper Brokerage Ledger"
    app_version: str = "0.1.0"

    # Data directory (the SQLite file lives here unless database_url is set)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Wallet seed used when the wallet row is first created
    seed_balance: Decimal = Decimal("10000")

    # Storage behavior
    storage_timeout_seconds: float = 5.0
    write_retry_attempts: int = 3
    write_retry_backoff_seconds: float = 0.05

    # Transaction history
    transactions_default_limit: int = 50
    transactions_max_limit: int = 500

    # Optional fixed price table; selects the static oracle when set
    static_prices: Optional[dict[str, Decimal]] = None

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "brokerage.db"
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
