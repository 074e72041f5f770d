"""Core blackjack engine - 100% UI-agnostic."""

from core.cards import Card, Deck, DeckEmptyError, Rank, Suit, create_deck, reshuffle
from core.hand import Hand, hand_value
from core.payout import Payout, RoundResult, resolve

__all__ = [
    "Card",
    "Deck",
    "DeckEmptyError",
    "Rank",
    "Suit",
    "create_deck",
    "reshuffle",
    "Hand",
    "hand_value",
    "Payout",
    "RoundResult",
    "resolve",
]
