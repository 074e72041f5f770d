"""Game engine and state management."""

from core.game.events import GameEvent, EventEmitter, EventType
from core.game.state import GameState
from core.game.dealing import DealingService
from core.game.engine import BlackjackGame

__all__ = [
    "GameEvent",
    "EventEmitter",
    "EventType",
    "GameState",
    "DealingService",
    "BlackjackGame",
]
