"""
Centralised configuration for jsonmend.

All environment variables are declared once in ``Settings`` (pydantic-settings).
The module-level ``settings`` singleton is the single source of truth; every
other module should import from here instead of calling ``os.getenv`` directly.

Usage:

    from jsonmend.utils.config import settings

    print(settings.max_depth)          # typed int, default 256
    print(settings.logs_dir)           # Optional[str]
"""

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env relative to this file so it's always found regardless of cwd
_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file.

    Every field maps to a ``JSONMEND_``-prefixed env var, so
    ``JSONMEND_MAX_DEPTH`` → ``settings.max_depth``.
    """

    model_config = SettingsConfigDict(
        env_prefix="JSONMEND_",
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",          # silently ignore unknown env vars
        case_sensitive=False,
    )

    # --- Parser --------------------------------------------------------------
    #: Deepest allowed nesting of objects, arrays and ObjectId(...)-style wrappers
    max_depth: int = 256

    # --- Logging -------------------------------------------------------------
    #: Level of the stderr sink
    log_level: str = "WARNING"
    #: When set, a DEBUG log file is also written to this directory
    logs_dir: Optional[str] = None

    @field_validator("max_depth")
    @classmethod
    def _check_max_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_depth must be at least 1")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


#: Singleton, import this in all consumer modules.
settings = Settings()
