"""Tests for the dealing service."""

from random import Random

from core.cards import Card, Deck, Rank, Suit
from core.game.dealing import DealingService
from core.game.events import EventType
from core.hand import Hand


class TestDealingService:
    """Tests for DealingService."""

    def test_new_deck_is_full_and_announced(self, events, rng):
        dealing = DealingService(events, rng=rng)
        deck = dealing.new_deck()
        assert len(deck) == 52
        assert events.types_since() == [EventType.DECK_SHUFFLED]

    def test_draw_moves_one_card(self, events, rng):
        """Dealing from N cards leaves N-1 and grows the hand by that card."""
        dealing = DealingService(events, rng=rng, reshuffle_before_draw=False)
        dealing.new_deck()
        hand = Hand()
        top = dealing.deck.cards[-1]

        card = dealing.draw(hand)

        assert card == top
        assert len(dealing.deck) == 51
        assert hand.cards == [top]
        assert card not in dealing.deck

    def test_draw_reshuffles_first(self, events, rng):
        dealing = DealingService(events, rng=rng, reshuffle_before_draw=True)
        dealing.new_deck()
        events.clear_history()

        dealing.draw(Hand())

        assert events.types_since() == [EventType.DECK_SHUFFLED, EventType.CARD_DEALT]

    def test_draw_without_reshuffle(self, events, rng):
        dealing = DealingService(events, rng=rng, reshuffle_before_draw=False)
        dealing.new_deck()
        events.clear_history()

        dealing.draw(Hand())

        assert events.types_since() == [EventType.CARD_DEALT]

    def test_draw_hidden(self, events, rng):
        dealing = DealingService(events, rng=rng)
        dealing.new_deck()
        hand = Hand()

        card = dealing.draw(hand, hidden=True, side="dealer")

        assert card.hidden
        assert hand.value == 0
        dealt = events.history[-1]
        assert dealt.data["card"] == "??"
        assert dealt.data["hand"] == "dealer"
        assert dealt.data["hidden"] is True

    def test_draw_from_empty_deck_returns_none(self, events):
        dealing = DealingService(events, rng=Random(1))
        hand = Hand()
        assert dealing.draw(hand) is None
        assert len(hand) == 0
        assert events.history == []

    def test_regenerate_skips_cards_in_play(self, events, rng):
        dealing = DealingService(events, rng=rng)
        dealing.deck = Deck([], rng=rng)
        in_play = [Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)]

        deck = dealing.regenerate(in_play)

        assert len(deck) == 50
        assert all(card not in deck for card in in_play)
        assert EventType.DECK_EXHAUSTED in events.types_since()
