"""
Audience Dice - Application Settings

Loads configuration from environment variables (or a local .env file)
using Pydantic Settings.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_allowed_origins: str = "*"
    static_dir: str | None = None

    # Socket.IO heartbeats (seconds)
    ping_interval: int = 25
    ping_timeout: int = 30

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origins(self) -> str | list[str]:
        """'*' for any origin, otherwise the comma-separated list."""
        origins = self.cors_allowed_origins.strip()
        if not origins or origins == "*":
            return "*"
        return [o.strip() for o in origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
