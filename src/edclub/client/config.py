"""Client settings via pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client configuration loaded from environment variables with EDCLUB_CLIENT_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="EDCLUB_CLIENT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    backend_url: str = "http://localhost:8000"
    session_path: Path = Path.home() / ".edclub" / "session.json"
    timeout_seconds: float = 10.0


@lru_cache
def get_client_settings() -> ClientSettings:
    """Get cached client settings."""
    return ClientSettings()
