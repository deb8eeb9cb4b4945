"""
Environment-driven settings for the product API.

Values are read from environment variables when this module is imported;
every field has a default so the service starts with no configuration.
Tests build their own ``Settings`` instead of touching the environment.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Product API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    debug: bool = _env_flag("DEBUG")

    # Shared secret expected in the ``x-api-key`` header on mutating routes.
    api_key: str = os.getenv("API_KEY", "secret-api-key-123")


settings = Settings()
