"""
Configuration management for the SKADAM café backend
"""


import threading
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STORAGE_BACKENDS = ("local", "database", "memory")
PERSISTENCE_MODES = ("background", "sync")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    environment: str = Field(default="development", description="Application environment")
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: str = Field(default="logs", description="Directory for rotating log files")

    # Persistence
    storage_backend: str = Field(
        default="local", description="local (JSON files), database (SQLAlchemy) or memory"
    )
    data_dir: str = Field(default="data", description="Directory for the JSON file backend")
    database_url: str = Field(
        default="sqlite:///data/skadam.db", description="Database connection URL"
    )
    persistence_mode: str = Field(
        default="background",
        description="background (fire-and-forget writes) or sync (write before returning)",
    )

    # Business settings
    currency: str = Field(default="TND", description="Currency code")
    admin_password: str = Field(default="skadam2024", description="Admin panel password")

    # Staff notifications over Telegram (optional)
    bot_token: Optional[str] = Field(default=None, description="Telegram bot token")
    admin_chat_id: Optional[int] = Field(
        default=None, description="Chat ID receiving staff notifications"
    )

    # HTTP surface
    api_host: str = Field(default="0.0.0.0", description="API bind host")
    api_port: int = Field(default=8000, description="API bind port", gt=0)

    @field_validator("storage_backend")
    @classmethod
    def _check_storage_backend(cls, value: str) -> str:
        value = value.lower()
        if value not in STORAGE_BACKENDS:
            raise ValueError(f"storage_backend must be one of {', '.join(STORAGE_BACKENDS)}")
        return value

    @field_validator("persistence_mode")
    @classmethod
    def _check_persistence_mode(cls, value: str) -> str:
        value = value.lower()
        if value not in PERSISTENCE_MODES:
            raise ValueError(f"persistence_mode must be one of {', '.join(PERSISTENCE_MODES)}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @field_validator("currency")
    @classmethod
    def _check_currency(cls, value: str) -> str:
        if not value or len(value) != 3 or not value.isalpha():
            raise ValueError("Currency must be a 3-letter code")
        return value.upper()

    @property
    def telegram_enabled(self) -> bool:
        """Whether staff notifications should also go to Telegram"""
        return bool(self.bot_token and self.admin_chat_id)


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_config() -> Settings:
    """Get the global settings instance, ensuring thread safety."""
    global _settings_instance
    if _settings_instance is None:
        with _settings_lock:
            if _settings_instance is None:
                _settings_instance = Settings()
    return _settings_instance


def reset_config() -> None:
    """Drop the cached settings so the next get_config() re-reads the environment."""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None
