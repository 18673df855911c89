"""
Configuration for the chore board.
Holds the fixed reward tiers, default seed data, persistence timings, and
the environment-driven Settings model passed into the application factory.
"""
import logging
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

BASE_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = BASE_DIR / "data"
DB_PATH = DATA_DIR / "choreboard.sqlite3"

# Reward tiers, highest first. Not user-editable.
REWARD_TIER_1_CHORES = 5
REWARD_TIER_1_CATEGORIES = 2
REWARD_TIER_1_CASH = 2
REWARD_TIER_2_CHORES = 10
REWARD_TIER_2_CATEGORIES = 3
REWARD_TIER_2_CASH = 5

DEFAULT_CHILDREN: List[Dict[str, str]] = [
    {"id": "child1", "name": "Child 1", "avatar_id": "avatar1"},
    {"id": "child2", "name": "Child 2", "avatar_id": "avatar2"},
    {"id": "child3", "name": "Child 3", "avatar_id": "avatar3"},
]

DEFAULT_CATEGORIES: List[Dict[str, str]] = [
    {"id": "cat1", "name": "Set the table"},
    {"id": "cat2", "name": "Clear the table"},
    {"id": "cat3", "name": "Tidy your room"},
]

BACKEND_SQLITE = "sqlite"
BACKEND_JSONBIN = "jsonbin"

DEFAULT_SAVE_DEBOUNCE_SECONDS = 1.0

JSONBIN_BASE_URL = "https://api.jsonbin.io/v3/b"
JSONBIN_LOAD_TIMEOUT = 10
JSONBIN_SAVE_TIMEOUT = 15
JSONBIN_SAVE_RETRIES = 2
JSONBIN_RETRY_DELAY = 1.0

DEFAULT_SUGGESTION_MODEL = "gpt-4o-mini"
SUGGESTION_UNCONFIGURED_FALLBACK = "Feed the goldfish"
SUGGESTION_EMPTY_FALLBACK = "Make your bed"
SUGGESTION_ERROR_FALLBACK = "Help set the table"

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Runtime settings, read once from the environment at startup."""

    backend: str = BACKEND_SQLITE
    database_url: str = f"sqlite:///{DB_PATH}"
    jsonbin_bin_id: Optional[str] = None
    jsonbin_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    suggestion_model: str = DEFAULT_SUGGESTION_MODEL
    save_debounce_seconds: float = Field(DEFAULT_SAVE_DEBOUNCE_SECONDS, ge=0, allow_inf_nan=False)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        if not isinstance(logging.getLevelName(value.upper()), int):
            raise ValueError(f"Unknown log level '{value}'")
        return value

    @property
    def jsonbin_configured(self) -> bool:
        return bool((self.jsonbin_bin_id or "").strip()) and bool((self.jsonbin_api_key or "").strip())


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Settings with defaults applied for anything not set or invalid
    """
    env = os.environ if environ is None else environ
    values = {
        "backend": (_clean(env.get("CHOREBOARD_BACKEND")) or BACKEND_SQLITE).lower(),
        "jsonbin_bin_id": _clean(env.get("JSONBIN_BIN_ID")),
        "jsonbin_api_key": _clean(env.get("JSONBIN_API_KEY")),
        "openai_api_key": _clean(env.get("OPENAI_API_KEY")),
    }
    optional = {
        "database_url": _clean(env.get("CHOREBOARD_DATABASE_URL")),
        "suggestion_model": _clean(env.get("CHOREBOARD_SUGGESTION_MODEL")),
        "save_debounce_seconds": _clean(env.get("CHOREBOARD_SAVE_DEBOUNCE")),
        "log_level": _clean(env.get("CHOREBOARD_LOG_LEVEL")),
    }
    for key, value in optional.items():
        if value is None:
            continue
        try:
            Settings(**{key: value})
        except ValidationError as exc:
            logger.warning("Ignoring invalid value %r for %s, using the default: %s", value, key, exc)
            continue
        values[key] = value
    return Settings(**values)
