"""Tests for the sound collaborator."""

import pygame
import pytest

from table_ui.preferences import PreferencesStore
from table_ui.sound_manager import FALLBACK_TONES, SoundManager, synthesize_tone


class FakeSound:
    """Stands in for pygame.mixer.Sound and records playback."""

    played: list = []

    def __init__(self, file=None, buffer=None):
        self.file = file
        self.buffer = buffer

    def set_volume(self, value):
        self.volume = value

    def play(self):
        FakeSound.played.append(self)


@pytest.fixture
def fake_mixer(monkeypatch):
    """Pretend a stereo mixer is already running."""
    FakeSound.played = []
    monkeypatch.setattr(pygame.mixer, "get_init", lambda: (44100, -16, 2))
    monkeypatch.setattr(pygame.mixer, "Sound", FakeSound)
    return FakeSound


class TestSynthesizeTone:
    """Tests for the fallback tone generator."""

    def test_length(self):
        data = synthesize_tone(440.0, 0.1, sample_rate=44100, channels=2)
        assert len(data) == int(0.1 * 44100) * 2 * 2

    def test_starts_silent(self):
        data = synthesize_tone(440.0, 0.01)
        assert data[:2] == b"\x00\x00"

    def test_every_cue_has_a_tone(self):
        assert set(FALLBACK_TONES) == set(SoundManager.SOUNDS)


class TestSoundManager:
    """Tests for SoundManager."""

    def test_without_audio_play_is_noop(self):
        sounds = SoundManager(init_mixer=False)
        assert not sounds.available
        sounds.play("win")

    def test_mixer_failure_disables_sound(self, monkeypatch):
        def broken_init(*args, **kwargs):
            raise pygame.error("no audio device")

        monkeypatch.setattr(pygame.mixer, "get_init", lambda: None)
        monkeypatch.setattr(pygame.mixer, "init", broken_init)

        sounds = SoundManager()

        assert not sounds.available
        sounds.play("card")

    def test_missing_file_uses_fallback_tone(self, fake_mixer, tmp_path):
        sounds = SoundManager(assets_path=str(tmp_path))
        sounds.play("win")

        assert len(fake_mixer.played) == 1
        frequency, duration, _ = FALLBACK_TONES["win"]
        assert len(fake_mixer.played[0].buffer) == int(duration * 44100) * 4

    def test_file_is_preferred(self, fake_mixer, tmp_path):
        (tmp_path / "card.wav").write_bytes(b"RIFF")
        sounds = SoundManager(assets_path=str(tmp_path))
        sounds.play("card")

        assert fake_mixer.played[0].file == str(tmp_path / "card.wav")

    def test_muted_plays_nothing(self, fake_mixer, tmp_path):
        sounds = SoundManager(assets_path=str(tmp_path))
        sounds.muted = True
        sounds.play("lose")
        assert fake_mixer.played == []

    def test_playback_error_is_swallowed(self, fake_mixer, tmp_path, monkeypatch):
        def broken_play(self):
            raise pygame.error("device lost")

        monkeypatch.setattr(FakeSound, "play", broken_play)
        sounds = SoundManager(assets_path=str(tmp_path))
        sounds.play("bet")

    def test_toggle_mute_persists(self, tmp_path):
        path = str(tmp_path / "prefs.json")
        sounds = SoundManager(store=PreferencesStore(path), init_mixer=False)

        assert sounds.toggle_mute() is True
        assert PreferencesStore(path).muted is True
        assert SoundManager(store=PreferencesStore(path), init_mixer=False).muted

    def test_volume_is_clamped(self):
        sounds = SoundManager(init_mixer=False)
        sounds.volume = 3.0
        assert sounds.volume == 1.0
        sounds.volume = -1.0
        assert sounds.volume == 0.0
