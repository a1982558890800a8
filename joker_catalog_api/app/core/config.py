"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service runs out of the box against the bundled dataset.  In a
production deployment override them via environment variables.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

DEFAULT_DATA_FILE = Path(__file__).resolve().parent.parent / "data" / "jokers.json"


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Balatro Joker Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    environment: str = os.getenv("ENVIRONMENT", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path of the JSON source.  Relative paths are resolved against the
    # current working directory.
    data_file: str = os.getenv("DATA_FILE", str(DEFAULT_DATA_FILE))

    # Maximum age of the in-memory dataset before the next request
    # triggers a reload.  Defaults to five minutes.
    cache_ttl_seconds: float = float(os.getenv("CACHE_TTL_SECONDS", "300"))

    # Comma‑separated list of allowed CORS origins; ``*`` allows all.
    cors_origins: List[str] = field(default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*")))

    # Per-client request budget.  A window of ``0`` disables the limiter.
    rate_limit_max: int = int(os.getenv("RATE_LIMIT_MAX", "100"))
    rate_limit_window_seconds: float = float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", str(15 * 60)))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
