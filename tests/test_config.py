"""Tests for configuration classes."""

import logging
import os
from decimal import Decimal
from unittest.mock import patch

import pytest

from config import AppConfig, GameConfig, PacingConfig, configure_logging


class TestGameConfig:
    """Tests for GameConfig class."""

    def test_defaults(self):
        game = GameConfig()
        assert game.initial_balance == Decimal("10000")
        assert game.min_bet == 10
        assert game.max_bet == 1_000_000_000
        assert game.bet_step == 10
        assert game.dealer_stands_on == 17
        assert game.blackjack_multiplier == Decimal("2.5")

    def test_reshuffle_from_env(self):
        with patch.dict(os.environ, {"RESHUFFLE_BEFORE_DRAW": "false"}):
            assert GameConfig().reshuffle_before_draw is False
        with patch.dict(os.environ, {}, clear=True):
            assert GameConfig().reshuffle_before_draw is True

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_bet": 0},
            {"min_bet": 100, "max_bet": 50},
            {"bet_step": 0},
            {"initial_balance": Decimal("-1")},
        ],
    )
    def test_invalid_limits(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)

    def test_is_frozen(self):
        with pytest.raises(AttributeError):
            GameConfig().min_bet = 5


class TestAppConfig:
    """Tests for AppConfig class."""

    def test_debug_from_env(self):
        with patch.dict(os.environ, {"DEBUG": "true"}):
            app = AppConfig()
            assert app.debug is True
            assert app.effective_log_level == "DEBUG"

    def test_log_level_from_env(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "info"}, clear=True):
            assert AppConfig().effective_log_level == "INFO"

    def test_settings_path_from_env(self, tmp_path):
        path = str(tmp_path / "prefs.json")
        with patch.dict(os.environ, {"BLACKJACK_SETTINGS_PATH": path}):
            assert AppConfig().settings_path == path

    def test_pacing_from_env(self):
        with patch.dict(os.environ, {"DEALER_STEP_DELAY": "0.05"}):
            assert PacingConfig().dealer_step_delay == 0.05

    def test_configure_logging(self):
        with patch("logging.basicConfig") as basic_config:
            configure_logging(AppConfig(debug=True))
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG
