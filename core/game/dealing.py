"""Dealing service: moves cards from the deck into hands."""

import logging
from random import Random
from typing import Iterable

from core.cards import Card, Deck, DeckEmptyError, create_deck, reshuffle
from core.game.events import EventEmitter, EventType
from core.hand import Hand

logger = logging.getLogger(__name__)


class DealingService:
    """
    Owns the round's deck and transfers single cards into hands.

    Every draw is preceded by a reshuffle unless ``reshuffle_before_draw`` is
    off, so no card ever comes from an ordering that was visible earlier.
    """

    def __init__(
        self,
        events: EventEmitter,
        rng: Random | None = None,
        reshuffle_before_draw: bool = True,
    ) -> None:
        self._events = events
        self._rng = rng or Random()
        self.reshuffle_before_draw = reshuffle_before_draw
        self.deck: Deck = Deck([], rng=self._rng)

    def new_deck(self) -> Deck:
        """Replace the deck with a freshly shuffled 52-card deck."""
        self.deck = create_deck(self._rng)
        self._events.emit_new(EventType.DECK_SHUFFLED, cards_remaining=len(self.deck))
        return self.deck

    def regenerate(self, in_play: Iterable[Card] = ()) -> Deck:
        """
        Replace an exhausted deck.

        Cards still held in a hand are left out so that no identity exists
        twice at the table.
        """
        self.deck = self.deck.without(in_play)
        self.deck.shuffle()
        logger.warning("Deck exhausted, regenerated with %d cards", len(self.deck))
        self._events.emit_new(EventType.DECK_EXHAUSTED, cards_remaining=len(self.deck))
        self._events.emit_new(EventType.DECK_SHUFFLED, cards_remaining=len(self.deck))
        return self.deck

    def draw(self, hand: Hand, hidden: bool = False, side: str = "player") -> Card | None:
        """
        Deal one card from the deck into ``hand``.

        Args:
            hand: Hand receiving the card
            hidden: Deal the card face down
            side: "player" or "dealer", reported to observers

        Returns:
            The dealt card, or None if the deck is empty
        """
        if self.deck.is_empty:
            return None

        if self.reshuffle_before_draw:
            reshuffle(self.deck)
            self._events.emit_new(EventType.DECK_SHUFFLED, cards_remaining=len(self.deck))

        try:
            card = self.deck.draw()
        except DeckEmptyError:
            return None

        if hidden:
            card = card.as_hidden()
        hand.add_card(card)
        logger.debug("Dealt %r to %s", card, side)

        self._events.emit_new(
            EventType.CARD_DEALT,
            card=str(card),
            hand=side,
            index=len(hand) - 1,
            hidden=hidden,
            hand_value=hand.value,
            cards_remaining=len(self.deck),
        )
        return card

    @property
    def cards_remaining(self) -> int:
        return len(self.deck)
