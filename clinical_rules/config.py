"""
Rule Engine: Configuration

Process-level settings. Values come from environment variables prefixed
``CLINICAL_RULES_`` and from the project-level ``.env`` file.
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Engine settings. Catalog paths override the embedded catalogs."""

    model_config = SettingsConfigDict(env_prefix="CLINICAL_RULES_", extra="ignore")

    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Optional YAML/JSON catalog overrides
    rule_catalog_path: Optional[Path] = None
    checklist_catalog_path: Optional[Path] = None

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
