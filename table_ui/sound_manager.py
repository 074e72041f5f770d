"""Sound manager for game audio cues."""

import logging
import math
import os
import struct
from typing import Dict, Optional

import pygame

from config import config
from table_ui.preferences import PreferencesStore

logger = logging.getLogger(__name__)


# Fallback tone per cue: (frequency Hz, duration s, volume)
FALLBACK_TONES = {
    "win": (880.0, 0.2, 0.3),
    "lose": (220.0, 0.3, 0.3),
    "bet": (440.0, 0.1, 0.2),
    "doubleDown": (440.0, 0.1, 0.2),
    "card": (660.0, 0.05, 0.1),
    "shuffle": (660.0, 0.05, 0.1),
}


def synthesize_tone(frequency: float, duration: float, volume: float = 0.5,
                    sample_rate: int = 44100, channels: int = 1) -> bytes:
    """Render a sine tone as signed 16-bit little-endian PCM."""
    frames = bytearray()
    num_samples = int(duration * sample_rate)
    for i in range(num_samples):
        value = math.sin(2 * math.pi * frequency * i / sample_rate)
        sample = max(-32768, min(32767, int(value * volume * 32767)))
        frames += struct.pack("<h", sample) * channels
    return bytes(frames)


class SoundManager:
    """Plays the cues announced by the game: bet, card, win, lose,
    shuffle and doubleDown.

    Sound files are optional. A cue without a file plays a short synthesized
    tone instead, and a machine without audio plays nothing. Audio problems
    are logged and never reach the caller.
    """

    # Sound cue names and default volumes
    SOUNDS = {
        "bet": 0.5,
        "card": 0.5,
        "win": 0.5,
        "lose": 0.5,
        "shuffle": 0.5,
        "doubleDown": 0.5,
    }

    def __init__(self, assets_path: Optional[str] = None,
                 store: Optional[PreferencesStore] = None,
                 init_mixer: bool = True):
        """Initialize the sound manager.

        Args:
            assets_path: Directory holding ``<cue>.wav/.ogg/.mp3`` files
            store: Preferences store for the persisted mute flag
            init_mixer: Set False to run without touching the audio device
        """
        self._initialized = False
        self._store = store
        self._muted = store.muted if store is not None else False
        self._master_volume = config.audio.volume
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._fallbacks: Dict[str, pygame.mixer.Sound] = {}

        if assets_path is None:
            assets_path = config.audio.assets_path or os.path.join(
                os.path.dirname(os.path.abspath(__file__)), "assets", "sounds"
            )
        self._assets_path = assets_path

        if init_mixer:
            self._init_mixer()

    def _init_mixer(self) -> None:
        """Initialize pygame mixer."""
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=512)
            self._initialized = True
            self._load_sounds()
        except pygame.error as e:
            logger.warning("Sound initialization failed: %s", e)
            self._initialized = False

    def _load_sounds(self) -> None:
        """Load every cue that has a file."""
        for name in self.SOUNDS:
            self._load_sound(name)

    def _load_sound(self, name: str) -> Optional[pygame.mixer.Sound]:
        """Load a single cue, trying each supported extension."""
        for ext in (".wav", ".ogg", ".mp3"):
            path = os.path.join(self._assets_path, f"{name}{ext}")
            if os.path.exists(path):
                try:
                    sound = pygame.mixer.Sound(path)
                    sound.set_volume(self.SOUNDS.get(name, 0.5) * self._master_volume)
                    self._sounds[name] = sound
                    return sound
                except pygame.error as e:
                    logger.warning("Could not load sound %s: %s", path, e)
        return None

    def _fallback(self, name: str) -> Optional[pygame.mixer.Sound]:
        """Build (once) the synthesized tone for a cue."""
        if name in self._fallbacks:
            return self._fallbacks[name]

        frequency, duration, volume = FALLBACK_TONES.get(name, FALLBACK_TONES["card"])
        mixer_format = pygame.mixer.get_init()
        if not mixer_format:
            return None
        sample_rate, _, channels = mixer_format
        sound = pygame.mixer.Sound(
            buffer=synthesize_tone(frequency, duration, volume, sample_rate, channels)
        )
        self._fallbacks[name] = sound
        return sound

    def play(self, name: str) -> None:
        """Play a cue. Muted or unavailable audio makes this a no-op."""
        if self._muted or not self._initialized:
            return

        try:
            sound = self._sounds.get(name) or self._fallback(name)
            if sound is not None:
                sound.play()
        except pygame.error as e:
            logger.warning("Error playing sound %s: %s", name, e)

    @property
    def available(self) -> bool:
        """Check if audio output could be initialized."""
        return self._initialized

    @property
    def muted(self) -> bool:
        return self._muted

    @muted.setter
    def muted(self, value: bool) -> None:
        self._muted = bool(value)
        if self._store is not None:
            self._store.muted = self._muted

    def toggle_mute(self) -> bool:
        """Toggle mute and persist it. Returns the new muted state."""
        self.muted = not self._muted
        return self._muted

    @property
    def volume(self) -> float:
        """Get master volume."""
        return self._master_volume

    @volume.setter
    def volume(self, value: float) -> None:
        """Set master volume (0.0 to 1.0)."""
        self._master_volume = max(0.0, min(1.0, value))
        for name, sound in self._sounds.items():
            sound.set_volume(self.SOUNDS.get(name, 0.5) * self._master_volume)

    def stop_all(self) -> None:
        """Stop all playing sounds."""
        if self._initialized:
            pygame.mixer.stop()
