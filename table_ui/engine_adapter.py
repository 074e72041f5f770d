"""Adapter connecting the core blackjack engine to its presentation collaborators."""

import logging
import time
from typing import Callable, Optional, Protocol

from config import config
from core.cards import Card
from core.game.engine import BlackjackGame
from core.game.events import EventType, GameEvent
from core.hand import Hand
from core.payout import RoundResult
from table_ui.i18n import I18n
from table_ui.preferences import PreferencesStore
from table_ui.schemas import BetView, CardView, ControlsView, HandView, TableSnapshot
from table_ui.sound_manager import SoundManager

logger = logging.getLogger(__name__)


# Engine events that announce a sound cue directly
SOUND_CUES = {
    EventType.BET_PLACED: "bet",
    EventType.CARD_DEALT: "card",
    EventType.DECK_SHUFFLED: "shuffle",
    EventType.PLAYER_DOUBLE: "doubleDown",
}


class RenderHook(Protocol):
    """Anything that can draw a card at a table position."""

    def render_card(self, card: CardView, is_player_side: bool, index: int) -> None:
        ...


def card_view(card: Card, index: int) -> CardView:
    """Describe a card for rendering without leaking a face-down identity."""
    if card.hidden:
        return CardView(hidden=True, index=index)
    return CardView(
        id=card.id,
        rank=card.rank.value,
        suit=card.suit.value,
        value=card.value,
        index=index,
    )


class DealerPacer:
    """Runs the dealer turn one step per ``delay`` seconds.

    Driven by a frame loop through ``update(dt)``, or synchronously with
    ``run()``. The pacing only decides when a step happens, never what it does.
    """

    def __init__(self, game: BlackjackGame, delay: Optional[float] = None):
        self.game = game
        self.delay = config.pacing.dealer_step_delay if delay is None else delay
        self._elapsed = 0.0

    @property
    def active(self) -> bool:
        return self.game.dealer_pending

    def update(self, dt: float) -> int:
        """Advance the clock by ``dt`` seconds. Returns the steps taken."""
        if not self.active:
            self._elapsed = 0.0
            return 0

        self._elapsed += dt
        steps = 0
        while self.active and self._elapsed >= self.delay:
            self._elapsed -= self.delay
            self.game.step()
            steps += 1
        return steps

    def run(self, sleep: Callable[[float], None] = time.sleep) -> int:
        """Play the dealer turn to the end, sleeping between steps."""
        steps = 0
        while self.active:
            sleep(self.delay)
            self.game.step()
            steps += 1
        self._elapsed = 0.0
        return steps


class EngineAdapter:
    """Adapter between the core BlackjackGame and presentation.

    Subscribes to engine events, turns them into sound cues, and offers
    snapshots and a render pass for whatever draws the table.
    """

    def __init__(
        self,
        game: Optional[BlackjackGame] = None,
        sounds: Optional[SoundManager] = None,
        i18n: Optional[I18n] = None,
        render: Optional[RenderHook] = None,
        dealer_delay: Optional[float] = None,
    ):
        self.game = game or BlackjackGame(game_config=config.game)
        self.sounds = sounds
        self.i18n = i18n or I18n()
        self.render_hook = render
        self.pacer = DealerPacer(self.game, dealer_delay)

        self._on_change: Optional[Callable[[TableSnapshot], None]] = None
        self.game.subscribe(self._handle_event)
        self.i18n.on_change(lambda _language: self.refresh())

    @classmethod
    def create(
        cls,
        settings_path: Optional[str] = None,
        init_audio: bool = True,
        render: Optional[RenderHook] = None,
    ) -> "EngineAdapter":
        """Wire a fresh session: saved preferences, labels, sound and game."""
        store = PreferencesStore(settings_path)
        i18n = I18n(store)
        i18n.init()
        sounds = SoundManager(store=store, init_mixer=init_audio)
        return cls(sounds=sounds, i18n=i18n, render=render)

    def set_on_change(self, callback: Callable[[TableSnapshot], None]) -> None:
        """Register a callback receiving a snapshot after every state change."""
        self._on_change = callback

    def _handle_event(self, event: GameEvent) -> None:
        """Handle events from the core engine."""
        etype = event.event_type

        cue = SOUND_CUES.get(etype)
        if etype == EventType.ROUND_ENDED:
            cue = RoundResult(event.data["result"]).sound
        if cue is not None:
            self._play(cue)

        if etype in (
            EventType.STATE_CHANGED,
            EventType.CARD_DEALT,
            EventType.DEALER_REVEALS,
            EventType.ROUND_ENDED,
            EventType.NEW_GAME,
            EventType.BET_CHANGED,
        ):
            self.refresh()

    def _play(self, cue: str) -> None:
        if self.sounds is None:
            return
        try:
            self.sounds.play(cue)
        except Exception:
            # Audio never interrupts the round
            logger.exception("Sound cue %r failed", cue)

    # Player inputs

    def select_bet(self, amount: int) -> bool:
        return self.game.set_bet(amount)

    def start(self) -> bool:
        return self.game.start_game()

    def hit(self) -> bool:
        return self.game.hit()

    def stand(self) -> bool:
        return self.game.stand()

    def double(self) -> bool:
        return self.game.double_down()

    def new_game(self) -> bool:
        return self.game.new_game()

    def update(self, dt: float) -> None:
        """Frame tick: paces the dealer turn."""
        self.pacer.update(dt)

    # Output

    def _hand_view(self, hand: Hand, label_key: str, is_player_side: bool) -> HandView:
        return HandView(
            label=self.i18n.translate(label_key),
            cards=[card_view(card, i) for i, card in enumerate(hand.cards)],
            value=hand.value,
            is_player_side=is_player_side,
        )

    def snapshot(self) -> TableSnapshot:
        """Build the current table snapshot."""
        game = self.game
        low, high = game.bet_limits
        result = game.result.value if game.result is not None else None
        return TableSnapshot(
            state=game.state.value,
            balance=game.balance,
            bet=BetView(
                current=game.current_bet,
                minimum=low,
                maximum=max(high, 0),
                step=game.config.bet_step,
            ),
            player=self._hand_view(game.player_hand, "player", True),
            dealer=self._hand_view(game.dealer_hand, "dealer", False),
            result=result,
            result_label=self.i18n.translate(result) if result else None,
            controls=ControlsView(
                can_start=game.can_start,
                can_hit=game.can_hit,
                can_stand=game.can_stand,
                can_double=game.can_double,
                can_new_game=game.can_new_game,
            ),
            language=self.i18n.get(),
        )

    def render(self) -> None:
        """Ask the render hook to draw every card on the table."""
        if self.render_hook is None:
            return
        for hand, is_player_side in ((self.game.dealer_hand, False), (self.game.player_hand, True)):
            for i, card in enumerate(hand.cards):
                self.render_hook.render_card(card_view(card, i), is_player_side, i)

    def refresh(self) -> None:
        """Push the latest state to the render hook and change callback.

        Presentation errors are logged and dropped; they never reach the game.
        """
        try:
            self.render()
            if self._on_change is not None:
                self._on_change(self.snapshot())
        except Exception:
            logger.exception("Table refresh failed")
