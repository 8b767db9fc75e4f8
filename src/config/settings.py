"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from datetime import time
from pathlib import Path
from typing import Any, Literal
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local (SQLite) storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "inventory.db"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms
    acquire_timeout: float = 10.0  # seconds waiting for a free connection

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class RemoteSettings(BaseSettings):
    """Remote REST database configuration."""

    model_config = SettingsConfigDict(env_prefix="REMOTE_")

    url: str = ""
    api_key: str = ""
    schema_path: str = "/rest/v1"
    items_table: str = "items"
    movements_table: str = "movements"
    timeout: float = 15.0

    # Retry settings
    max_retries: int = 3
    retry_delay: float = 0.5
    retry_multiplier: float = 2.0

    @property
    def is_configured(self) -> bool:
        """True when the URL is a usable http(s) URL and a key is present."""
        if not self.api_key:
            return False
        try:
            parsed = urlparse(self.url)
        except ValueError:
            return False
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class InventorySettings(BaseSettings):
    """Inventory rules and report labels."""

    model_config = SettingsConfigDict(env_prefix="INVENTORY_")

    low_stock_threshold: int = 5
    unassigned_category: str = "Otros"  # exits whose item no longer exists
    removed_category: str = "Eliminado"  # report rows for deleted items
    entry_time_of_day: time = time(12, 0)
    default_categories: list[str] = ["Dulcería", "Jarcería", "Dorilocos"]


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Stock Ledger"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    storage: StorageSettings = Field(default_factory=StorageSettings)
    remote: RemoteSettings = Field(default_factory=RemoteSettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)
    api: APISettings = Field(default_factory=APISettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
