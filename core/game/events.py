"""Game events for the event system."""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)

# Default number of events kept in an emitter history
HISTORY_LIMIT = 256


class EventType(Enum):
    """Types of game events."""

    # Round flow events
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()
    STATE_CHANGED = auto()
    NEW_GAME = auto()

    # Betting events
    BET_CHANGED = auto()
    BET_PLACED = auto()

    # Card events
    CARD_DEALT = auto()
    DECK_SHUFFLED = auto()
    DECK_EXHAUSTED = auto()

    # Player action events
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_BUSTS = auto()

    # Dealer events
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Outcome events
    PLAYER_WINS = auto()
    PLAYER_BLACKJACK = auto()
    PLAYER_LOSES = auto()
    PUSH = auto()

    # Error events
    INVALID_ACTION = auto()
    INSUFFICIENT_FUNDS = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable game event.

    Events are the only channel from the engine to its observers
    (sound, labels, rendering).
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


# Type alias for event handlers
EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Synchronous event emitter.

    Handlers subscribe to one event type, or to every event with ``None``.
    Handlers run in subscription order on the caller's stack.

    The history keeps the last ``history_limit`` events. ``None`` keeps
    all of them and ``0`` keeps none.
    """

    def __init__(self, history_limit: int | None = HISTORY_LIMIT) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: deque[GameEvent] = deque(maxlen=history_limit)

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        """Deliver an event to type-specific handlers, then catch-all handlers."""
        self._event_history.append(event)
        logger.debug("event %s", event)

        for handler in list(self._handlers.get(event.event_type, [])):
            handler(event)
        for handler in list(self._handlers.get(None, [])):
            handler(event)

    def emit_new(
        self,
        event_type: EventType,
        **data: Any,
    ) -> GameEvent:
        """Create and emit a new event."""
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Return the event history."""
        return list(self._event_history)

    def types_since(self, index: int = 0) -> list[EventType]:
        """Event types recorded from ``index`` on."""
        return [event.event_type for event in list(self._event_history)[index:]]

    def clear_history(self) -> None:
        """Clear the event history."""
        self._event_history.clear()
