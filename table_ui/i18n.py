"""Display labels in Spanish and English."""

from typing import Callable, Optional

from table_ui.preferences import SUPPORTED_LANGUAGES, Language, PreferencesStore

TRANSLATIONS: dict[str, dict[str, str]] = {
    "es": {
        # Game UI
        "title": "Blackjack",
        "bet": "Apuesta",
        "deal": "Repartir",
        "hit": "Pedir",
        "stand": "Plantarse",
        "double": "Doblar",
        "new-game": "Nuevo Juego",
        "player": "Jugador",
        "dealer": "Crupier",
        "balance": "Saldo",
        "win": "¡Ganaste!",
        "lose": "Perdiste",
        "push": "Empate",
        "blackjack": "¡Blackjack!",
        "bust": "Te pasaste",
        "dealer-bust": "Crupier se pasó",
        # Settings
        "settings": "Configuración",
        "language": "Idioma",
        "sound": "Sonido",
        "on": "Activado",
        "off": "Desactivado",
        "spanish": "Español",
        "english": "Inglés",
        "save": "Guardar",
        "cancel": "Cancelar",
        "sound-unavailable": "Sonidos no disponibles",
    },
    "en": {
        # Game UI
        "title": "Blackjack",
        "bet": "Bet",
        "deal": "Deal",
        "hit": "Hit",
        "stand": "Stand",
        "double": "Double",
        "new-game": "New Game",
        "player": "Player",
        "dealer": "Dealer",
        "balance": "Balance",
        "win": "You Win!",
        "lose": "You Lose",
        "push": "Push",
        "blackjack": "Blackjack!",
        "bust": "Bust",
        "dealer-bust": "Dealer Bust",
        # Settings
        "settings": "Settings",
        "language": "Language",
        "sound": "Sound",
        "on": "On",
        "off": "Off",
        "spanish": "Spanish",
        "english": "English",
        "save": "Save",
        "cancel": "Cancel",
        "sound-unavailable": "Sounds unavailable",
    },
}


class I18n:
    """Label lookup for the active language.

    Lifecycle: ``init()`` reads the saved preference, ``get()`` and ``set()``
    read and change the language. Listeners are told about changes so the
    presentation can redraw; the engine never needs to know.
    """

    def __init__(self, store: Optional[PreferencesStore] = None, language: Language = "es"):
        self._store = store
        self._language: Language = language
        self._listeners: list[Callable[[Language], None]] = []

    def init(self) -> Language:
        """Load the saved language, if any."""
        if self._store is not None:
            self._language = self._store.language
        return self._language

    def get(self) -> Language:
        return self._language

    def set(self, language: Language) -> Language:
        """Switch language, persist it and notify listeners."""
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {language}")
        self._language = language
        if self._store is not None:
            self._store.language = language
        for listener in list(self._listeners):
            listener(language)
        return self._language

    def on_change(self, listener: Callable[[Language], None]) -> None:
        self._listeners.append(listener)

    def translate(self, key: str) -> str:
        """Return the label for ``key``; unknown keys come back unchanged."""
        return TRANSLATIONS[self._language].get(key, key)

    __call__ = translate
