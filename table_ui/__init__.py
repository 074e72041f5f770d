"""Presentation collaborators: sound, labels, preferences and table snapshots."""

from table_ui.engine_adapter import DealerPacer, EngineAdapter, RenderHook
from table_ui.i18n import I18n
from table_ui.preferences import Preferences, PreferencesStore
from table_ui.sound_manager import SoundManager

__all__ = [
    "DealerPacer",
    "EngineAdapter",
    "RenderHook",
    "I18n",
    "Preferences",
    "PreferencesStore",
    "SoundManager",
]
