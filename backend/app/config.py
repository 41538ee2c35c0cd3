"""Application configuration and settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from backend.app.models.defaults import STORAGE_KEY, SYNC_STATUS_TIMEOUT_S

_BASE_DIR = Path(__file__).resolve().parents[2]
_ENV_FILE = _BASE_DIR / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE, env_file_encoding="utf-8", extra="ignore"
    )

    # Database
    database_url: str = Field(
        default="sqlite:///./itinerary.db",
        description="Database URL for the trips persistence service",
    )

    # CORS
    ui_origin: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origin for the planner UI",
    )

    # Persistence gateway
    trips_api_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the remote trips API",
    )
    profile_id: str = Field(
        default="default-user",
        description="Profile whose trip collection is loaded and saved",
    )
    gateway_timeout_s: float = Field(
        default=10.0, description="Timeout for a single load/save call"
    )

    # Synchronization
    sync_debounce_s: float = Field(
        default=1.5,
        description="Quiet period after the last trip change before saving",
    )
    sync_status_timeout_s: float = Field(
        default=SYNC_STATUS_TIMEOUT_S, description="How long the 'saved' status is shown"
    )

    # Local snapshot
    storage_key: str = Field(
        default=STORAGE_KEY,
        description="Versioned key of the local state snapshot",
    )
    local_state_dir: Path = Field(
        default=Path(".itinerary"),
        description="Directory holding local state snapshots",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("database_url", mode="after")
    @classmethod
    def _normalize_sqlite_url(cls, value: str) -> str:
        """Ensure sqlite URLs always point to the repo root."""
        sqlite_prefixes = ("sqlite:///", "sqlite+pysqlite:///")
        for prefix in sqlite_prefixes:
            if value.startswith(prefix):
                path = value[len(prefix) :]
                if path and path != ":memory:" and not path.startswith("/"):
                    abs_path = (_BASE_DIR / path).resolve()
                    return f"{prefix}{abs_path.as_posix()}"
        return value

    @field_validator("sync_debounce_s", "sync_status_timeout_s", "gateway_timeout_s")
    @classmethod
    def _validate_positive(cls, value: float) -> float:
        """Timers and timeouts must be positive."""
        if value <= 0:
            raise ValueError("Must be a positive number of seconds")
        return value


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
