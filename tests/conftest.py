"""Pytest fixtures for blackjack table tests."""

from decimal import Decimal
from random import Random

import pytest
from hypothesis import strategies as st

from config import GameConfig
from core.cards import Card, Deck, Rank, Suit
from core.game import BlackjackGame, EventEmitter
from core.hand import Hand


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    d = Deck(rng=rng)
    d.shuffle()
    return d


@pytest.fixture
def events():
    """A fresh event emitter that records every event."""
    return EventEmitter(history_limit=None)


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand([Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand([Card(Rank.TEN, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS)])


@pytest.fixture
def game_config():
    """House rules without the reshuffle before each draw, so decks can be stacked."""
    return GameConfig(reshuffle_before_draw=False)


@pytest.fixture
def game(rng):
    """A new game with default rules."""
    return BlackjackGame(
        game_config=GameConfig(reshuffle_before_draw=True),
        initial_balance=Decimal("10000"),
        rng=rng,
        events=EventEmitter(history_limit=None),
    )


@pytest.fixture
def stacked_game(rng, game_config):
    """A game whose deck can be arranged with ``stack_round``."""
    return BlackjackGame(game_config=game_config, rng=rng, events=EventEmitter(history_limit=None))


def cards(*codes: str) -> list[Card]:
    """Build cards from short codes like 'AS', '10H'."""
    return [Card.from_string(code) for code in codes]


def stack_round(game: BlackjackGame, player: list[str], dealer: list[str],
                deck: list[str] = (), bet: int = 100) -> BlackjackGame:
    """
    Start a round, then replace the dealt cards with known ones.

    ``deck`` lists cards in draw order (first entry is drawn first). The
    dealer's second card is dealt face down.
    """
    game.set_bet(bet)
    game.start_game()
    game.player_hand.cards = cards(*player)
    dealer_cards = cards(*dealer)
    if len(dealer_cards) > 1:
        dealer_cards[1] = dealer_cards[1].as_hidden()
    game.dealer_hand.cards = dealer_cards
    game.dealing.deck = Deck(list(reversed(cards(*deck))), rng=Random(0))
    return game


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=0, max_cards=8):
    """Generate a random list of cards."""
    return draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards))
