"""
Environment-driven configuration.

Values are read once per process from the environment (and an optional .env
file) into an immutable Settings object.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    """Runtime configuration for the API, the UI and the collaborators."""
    model_config = ConfigDict(frozen=True)

    extraction_model: str = "gpt-4o-mini"
    chat_model: str = "gpt-4o-mini"
    chat_history_limit: int = Field(default=10, ge=0)
    database_url: str = "sqlite:///./strukly.db"
    image_dir: str = "data/receipt_images"
    api_url: str = "http://localhost:8000"
    user_id: str = "demo-user"
    preferences_file: str = "data/preferences.json"
    log_level: str = "INFO"


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value not in (None, "") else default


def load_settings() -> Settings:
    """Builds Settings from the current environment."""
    load_dotenv()
    defaults = Settings()
    return Settings(
        extraction_model=_env("STRUKLY_EXTRACTION_MODEL", defaults.extraction_model),
        chat_model=_env("STRUKLY_CHAT_MODEL", defaults.chat_model),
        chat_history_limit=int(_env("STRUKLY_CHAT_HISTORY_LIMIT", str(defaults.chat_history_limit))),
        database_url=_env("STRUKLY_DATABASE_URL", defaults.database_url),
        image_dir=_env("STRUKLY_IMAGE_DIR", defaults.image_dir),
        api_url=_env("STRUKLY_API_URL", defaults.api_url),
        user_id=_env("STRUKLY_USER_ID", defaults.user_id),
        preferences_file=_env("STRUKLY_PREFERENCES_FILE", defaults.preferences_file),
        log_level=_env("STRUKLY_LOG_LEVEL", defaults.log_level),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings for the running process."""
    return load_settings()
