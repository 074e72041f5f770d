"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field
from decimal import Decimal


def _env_flag(name: str, default: str = "false") -> bool:
    """Parse a boolean environment variable."""
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class GameConfig:
    """House rules and betting limits."""

    initial_balance: Decimal = Decimal("10000")
    min_bet: int = 10
    max_bet: int = 1_000_000_000
    bet_step: int = 10
    dealer_stands_on: int = 17
    win_multiplier: Decimal = Decimal("2")
    blackjack_multiplier: Decimal = Decimal("2.5")
    reshuffle_before_draw: bool = field(
        default_factory=lambda: _env_flag("RESHUFFLE_BEFORE_DRAW", "true")
    )

    def __post_init__(self) -> None:
        """Validate limits."""
        if self.min_bet < 1:
            raise ValueError("min_bet must be at least 1")
        if self.max_bet < self.min_bet:
            raise ValueError("max_bet must not be lower than min_bet")
        if self.bet_step < 1:
            raise ValueError("bet_step must be at least 1")
        if self.initial_balance < 0:
            raise ValueError("initial_balance must be non-negative")


@dataclass(frozen=True)
class PacingConfig:
    """Presentation pacing for the dealer turn."""

    dealer_step_delay: float = field(
        default_factory=lambda: float(os.getenv("DEALER_STEP_DELAY", "0.3"))
    )


@dataclass(frozen=True)
class AudioConfig:
    """Sound collaborator configuration."""

    assets_path: str | None = field(default_factory=lambda: os.getenv("SOUND_ASSETS_PATH"))
    volume: float = 0.5


def _default_settings_path() -> str:
    return os.getenv(
        "BLACKJACK_SETTINGS_PATH",
        os.path.expanduser("~/.blackjack_table_settings.json"),
    )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("DEBUG"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper())
    settings_path: str = field(default_factory=_default_settings_path)

    game: GameConfig = field(default_factory=GameConfig)
    pacing: PacingConfig = field(default_factory=PacingConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)

    @property
    def effective_log_level(self) -> str:
        """DEBUG mode always logs at DEBUG level."""
        return "DEBUG" if self.debug else self.log_level


def configure_logging(app_config: AppConfig | None = None) -> None:
    """Configure root logging from the application config."""
    app_config = app_config or config
    logging.basicConfig(
        level=getattr(logging, app_config.effective_log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Global configuration instance
config = AppConfig()
