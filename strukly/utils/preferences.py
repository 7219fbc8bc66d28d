"""
Session preferences (theme and locale) persisted to a small JSON file.

Preferences are read once when a session starts and passed explicitly to
rendering code. Receipt normalization and revenue aggregation never read them.
"""

import json
import os
from typing import Literal

from pydantic import BaseModel, ValidationError

from strukly.utils.logging_config import logger

Theme = Literal["light", "dark"]
Locale = Literal["id", "en"]


class SessionPreferences(BaseModel):
    theme: Theme = "light"
    locale: Locale = "id"

    def toggle_theme(self) -> "SessionPreferences":
        return self.model_copy(update={"theme": "dark" if self.theme == "light" else "light"})

    def toggle_locale(self) -> "SessionPreferences":
        return self.model_copy(update={"locale": "en" if self.locale == "id" else "id"})


def load_preferences(path: str) -> SessionPreferences:
    """Load preferences from disk, falling back to defaults on a missing or bad file."""
    if not os.path.exists(path):
        return SessionPreferences()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return SessionPreferences.model_validate(json.load(f))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Ignoring unreadable preferences file {path}: {e}")
        return SessionPreferences()


def save_preferences(path: str, preferences: SessionPreferences) -> None:
    """Persist preferences as JSON, creating the parent directory if needed."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(preferences.model_dump(), f, indent=2)
