# metarwx/settings.py
"""
Application settings.
"""

import os
from dataclasses import dataclass
from typing import List, Optional

# Load .env file
from dotenv import load_dotenv
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Application configuration."""

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = _env_bool("LOG_JSON", "true")
    log_file: Optional[str] = os.getenv("LOG_FILE")

    # Snapshot freshness
    snapshot_ttl_seconds: int = int(os.getenv("SNAPSHOT_TTL_SECONDS", "3600"))
    stale_after_seconds: int = int(os.getenv("STALE_AFTER_SECONDS", "21600"))
    default_source: str = os.getenv("DEFAULT_SOURCE", "METAR")

    # API settings
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    allowed_origins: str = os.getenv(
        "ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:8000"
    )

    def origins(self) -> List[str]:
        """Allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


# Global settings instance
settings = Settings()
