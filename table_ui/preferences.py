"""Player preferences that survive between sessions: language and mute."""

import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import Literal, Optional

from config import config

logger = logging.getLogger(__name__)

Language = Literal["es", "en"]
SUPPORTED_LANGUAGES: tuple[str, ...] = ("es", "en")


@dataclass
class Preferences:
    """Persisted presentation preferences."""

    language: Language = "es"
    muted: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Preferences":
        """Create from dictionary, ignoring unknown keys and invalid values."""
        prefs = cls()
        language = data.get("language")
        if language in SUPPORTED_LANGUAGES:
            prefs.language = language
        muted = data.get("muted")
        if isinstance(muted, bool):
            prefs.muted = muted
        return prefs


class PreferencesStore:
    """Loads and saves ``Preferences`` as JSON.

    Balance and round state are deliberately not stored here.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or config.settings_path
        self._preferences: Optional[Preferences] = None

    @property
    def preferences(self) -> Preferences:
        """Get current preferences, loading from disk if needed."""
        if self._preferences is None:
            self._preferences = self._load()
        return self._preferences

    def _load(self) -> Preferences:
        """Load preferences from disk."""
        try:
            if os.path.exists(self.path):
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return Preferences.from_dict(data)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable preferences %s: %s", self.path, e)
        return Preferences()

    def save(self) -> None:
        """Save preferences to disk."""
        if self._preferences is None:
            return
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._preferences.to_dict(), f, indent=2)
        except OSError as e:
            logger.warning("Could not save preferences to %s: %s", self.path, e)

    # Convenience accessors
    @property
    def language(self) -> Language:
        return self.preferences.language

    @language.setter
    def language(self, value: Language) -> None:
        if value not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {value}")
        self.preferences.language = value
        self.save()

    @property
    def muted(self) -> bool:
        return self.preferences.muted

    @muted.setter
    def muted(self, value: bool) -> None:
        self.preferences.muted = bool(value)
        self.save()

    def reset_to_defaults(self) -> None:
        """Reset all preferences to defaults."""
        self._preferences = Preferences()
        self.save()
