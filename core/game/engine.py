"""Blackjack game engine with state machine."""

import logging
from decimal import Decimal
from random import Random
from typing import Callable

from transitions import Machine

from config import GameConfig
from core.cards import Card
from core.hand import Hand
from core.payout import Payout, RoundResult, resolve
from core.game.dealing import DealingService
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import GameState

logger = logging.getLogger(__name__)

_OUTCOME_EVENTS = {
    RoundResult.WIN: EventType.PLAYER_WINS,
    RoundResult.BLACKJACK: EventType.PLAYER_BLACKJACK,
    RoundResult.LOSE: EventType.PLAYER_LOSES,
    RoundResult.PUSH: EventType.PUSH,
}


class BlackjackGame:
    """
    Single-player blackjack round engine using a state machine.

    This is the core game logic, completely UI-agnostic. Communication
    happens through events and return values only. Actions that are not
    allowed in the current state, or that the balance cannot cover, return
    False and leave the round untouched.

    The dealer turn does not run on its own: after the player stands the
    caller drives it with ``step()`` (one draw or the final resolution per
    call) so that presentation can pace the draws.
    """

    # State machine states
    STATES = [s.value for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal_round", "source": "betting", "dest": "player_turn"},
        {"trigger": "player_busts", "source": "player_turn", "dest": "game_over"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "game_over"},
        {"trigger": "next_round", "source": "game_over", "dest": "betting"},
    ]

    def __init__(
        self,
        game_config: GameConfig | None = None,
        initial_balance: Decimal | None = None,
        rng: Random | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        """
        Initialize a new blackjack session.

        Args:
            game_config: House rules and limits (defaults to ``GameConfig()``)
            initial_balance: Starting balance (defaults to the config value)
            rng: Random number generator for reproducible games
            events: Event emitter shared with observers
        """
        self.config = game_config or GameConfig()
        self.events = events or EventEmitter()
        self.dealing = DealingService(
            self.events,
            rng=rng,
            reshuffle_before_draw=self.config.reshuffle_before_draw,
        )

        start = self.config.initial_balance if initial_balance is None else initial_balance
        self.balance = Decimal(str(start))
        self.current_bet: int | Decimal = self.config.min_bet
        self.result: RoundResult | None = None
        self.last_payout: Payout | None = None

        self.player_hand = Hand()
        self.dealer_hand = Hand()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=GameState.BETTING.value,
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_announce_state",
        )

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState(self._machine_state)  # type: ignore[attr-defined]

    def _announce_state(self) -> None:
        self.events.emit_new(EventType.STATE_CHANGED, state=self.state.value)

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def _reject(self, message: str) -> bool:
        self.events.emit_new(EventType.INVALID_ACTION, message=message, state=self.state.value)
        return False

    # Betting

    @property
    def bet_limits(self) -> tuple[int, Decimal]:
        """Allowed bet range for the next round: (min, max)."""
        upper = min(Decimal(self.config.max_bet), self.balance)
        return self.config.min_bet, upper

    def set_bet(self, amount: int) -> bool:
        """
        Choose the bet for the next round.

        Args:
            amount: Bet amount

        Returns:
            True if the bet was accepted
        """
        if self.state != GameState.BETTING:
            return self._reject("Cannot change bet in current state")

        low, high = self.bet_limits
        if amount < low or amount > high:
            return self._reject(f"Bet must be between {low} and {high}")

        self.current_bet = amount
        self.events.emit_new(EventType.BET_CHANGED, amount=amount)
        return True

    def start_game(self) -> bool:
        """
        Deduct the bet and deal the opening cards.

        The player receives one card, the dealer two with the second face
        down.

        Returns:
            True if the round started
        """
        if self.state != GameState.BETTING:
            return self._reject("Cannot deal in current state")

        if self.balance < self.current_bet:
            self.events.emit_new(
                EventType.INSUFFICIENT_FUNDS,
                required=float(self.current_bet),
                available=float(self.balance),
            )
            return False

        self.balance -= Decimal(str(self.current_bet))
        self.events.emit_new(
            EventType.BET_PLACED,
            amount=float(self.current_bet),
            balance=float(self.balance),
        )

        self.player_hand.clear()
        self.dealer_hand.clear()
        self.result = None
        self.last_payout = None

        self.dealing.new_deck()
        self.dealing.draw(self.player_hand, side="player")
        self.dealing.draw(self.dealer_hand, side="dealer")
        self.dealing.draw(self.dealer_hand, hidden=True, side="dealer")

        self.deal_round()  # Trigger state transition
        logger.info("Round started: bet=%s balance=%s", self.current_bet, self.balance)
        self.events.emit_new(EventType.ROUND_STARTED, bet=float(self.current_bet))
        return True

    # Player actions

    def hit(self) -> bool:
        """
        Player takes another card.

        Busting ends the round as a loss; reaching exactly 21 stands
        automatically. On an exhausted deck the deck is regenerated and the
        hit is not performed.
        """
        if self.state != GameState.PLAYER_TURN:
            return self._reject("Cannot hit in current state")

        if self.dealing.deck.is_empty:
            self.dealing.regenerate(self.cards_in_play)
            return False

        card = self.dealing.draw(self.player_hand, side="player")
        if card is None:
            return False

        value = self.player_hand.value
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=value)

        if value > 21:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=value)
            self._finish_round(self.player_busts)
        elif value == 21:
            self._begin_dealer_turn()
        return True

    def stand(self) -> bool:
        """Player keeps the current hand; the dealer turn begins."""
        if self.state != GameState.PLAYER_TURN:
            return self._reject("Cannot stand in current state")

        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.player_hand.value)
        self._begin_dealer_turn()
        return True

    def double_down(self) -> bool:
        """
        Double the bet, take exactly one card and hand over to the dealer.

        Only allowed on a one-card hand when the balance covers the extra bet.
        """
        if self.state != GameState.PLAYER_TURN:
            return self._reject("Cannot double in current state")

        if len(self.player_hand) != 1:
            return self._reject("Can only double on the first card")

        if self.balance < self.current_bet:
            self.events.emit_new(
                EventType.INSUFFICIENT_FUNDS,
                required=float(self.current_bet),
                available=float(self.balance),
            )
            return False

        if self.dealing.deck.is_empty:
            self.dealing.regenerate(self.cards_in_play)
            return False

        self.balance -= Decimal(str(self.current_bet))
        self.current_bet *= 2
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            new_bet=float(self.current_bet),
            balance=float(self.balance),
        )

        self.dealing.draw(self.player_hand, side="player")
        self._begin_dealer_turn()
        return True

    # Dealer turn

    def _begin_dealer_turn(self) -> None:
        """Reveal the hole card. A busted player loses without dealer draws."""
        self.player_done()

        for card in self.dealer_hand.reveal_hidden():
            self.events.emit_new(
                EventType.DEALER_REVEALS,
                card=str(card),
                hand_value=self.dealer_hand.value,
            )

        if self.player_hand.is_busted:
            self._finish_round(self.dealer_done)

    def step(self) -> bool:
        """
        Advance the dealer turn by one action.

        The dealer draws while under the stand threshold, otherwise the
        round is resolved.

        Returns:
            True if another step is pending
        """
        if self.state != GameState.DEALER_TURN:
            return False

        if self.dealer_hand.value < self.config.dealer_stands_on:
            if self.dealing.deck.is_empty:
                self.dealing.regenerate(self.cards_in_play)

            card = self.dealing.draw(self.dealer_hand, side="dealer")
            if card is not None:
                self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer_hand.value)
                return True
            logger.error("No card available for the dealer, resolving at %d", self.dealer_hand.value)

        if self.dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)

        self._finish_round(self.dealer_done)
        return False

    def play_dealer(self) -> None:
        """Run the dealer turn to completion without pacing."""
        while self.step():
            pass

    @property
    def dealer_pending(self) -> bool:
        """Check if the dealer turn still has steps to run."""
        return self.state == GameState.DEALER_TURN

    # Resolution

    def _finish_round(self, transition: Callable[[], bool]) -> None:
        """Resolve the round, credit the payout and move to GAME_OVER."""
        payout = resolve(
            self.player_hand.value,
            self.dealer_hand.value,
            len(self.player_hand),
            self.current_bet,
            win_multiplier=self.config.win_multiplier,
            blackjack_multiplier=self.config.blackjack_multiplier,
        )

        self.balance += payout.winnings
        self.result = payout.result
        self.last_payout = payout
        transition()

        self.events.emit_new(
            _OUTCOME_EVENTS[payout.result],
            amount=float(payout.winnings),
        )
        logger.info(
            "Round ended: %s player=%d dealer=%d paid=%s balance=%s",
            payout.result,
            self.player_hand.value,
            self.dealer_hand.value,
            payout.winnings,
            self.balance,
        )
        self.events.emit_new(
            EventType.ROUND_ENDED,
            result=payout.result.value,
            winnings=float(payout.winnings),
            balance=float(self.balance),
        )

    def new_game(self) -> bool:
        """
        Clear the table for the next round.

        The bet returns to the minimum; the balance is kept.
        """
        if self.state == GameState.GAME_OVER:
            self.next_round()
        elif self.state != GameState.BETTING:
            return self._reject("Cannot start a new game during a round")

        self.player_hand.clear()
        self.dealer_hand.clear()
        self.result = None
        self.last_payout = None
        self.current_bet = self.config.min_bet
        self.events.emit_new(EventType.NEW_GAME, balance=float(self.balance))
        return True

    # Queries

    @property
    def cards_in_play(self) -> list[Card]:
        """Cards currently held by the player and the dealer."""
        return self.player_hand.cards + self.dealer_hand.cards

    @property
    def player_value(self) -> int:
        return self.player_hand.value

    @property
    def dealer_value(self) -> int:
        """Dealer value counting face-up cards only."""
        return self.dealer_hand.value

    @property
    def can_start(self) -> bool:
        """Check if a round can be dealt."""
        return self.state == GameState.BETTING and self.balance >= self.current_bet

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return self.state == GameState.PLAYER_TURN

    @property
    def can_stand(self) -> bool:
        """Check if standing is allowed."""
        return self.state == GameState.PLAYER_TURN

    @property
    def can_double(self) -> bool:
        """Check if doubling is allowed."""
        return (
            self.state == GameState.PLAYER_TURN
            and len(self.player_hand) == 1
            and self.balance >= self.current_bet
        )

    @property
    def can_new_game(self) -> bool:
        """Check if the table can be reset for the next round."""
        return self.state == GameState.GAME_OVER
