from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for the v0 Platform MCP server.

    All values are loaded from environment variables with `V0_` prefix.
    You can also use a `.env` file in the working directory during development.
    """

    model_config = SettingsConfigDict(
        env_prefix="V0_",
        env_file=".env",
        extra="ignore",
    )

    # General
    env: str = "dev"
    server_port: int = 8000
    server_host: str = "0.0.0.0"
    transport: str = "stdio"  # "stdio" or "http"
    log_level: str = "INFO"

    # Credentials. Over HTTP each caller supplies its own bearer key; the
    # process-wide key is only used by stdio, or by HTTP when explicitly allowed.
    api_key: Optional[str] = None
    allow_env_credential: bool = False

    # Upstream platform
    api_base_url: str = "https://api.v0.dev/v1"
    request_timeout: float = 60.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings from environment."""
    return Settings()
