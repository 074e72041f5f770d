"""Card and Deck classes - immutable card identities and the 52-card deck."""

from dataclasses import dataclass, field, replace
from enum import Enum
from random import Random
from typing import Iterable, Iterator


class DeckEmptyError(IndexError):
    """Raised when drawing from an exhausted deck."""


class Suit(Enum):
    """Card suits."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks, valued by their label."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the nominal point value (Ace = 11, face cards = 10)."""
        if self is Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self is Rank.ACE


@dataclass(frozen=True, slots=True)
class Card:
    """
    Playing card.

    Identity (rank, suit) never changes. ``hidden`` marks a face-down card and
    is toggled by replacing the card with a copy, so equality and hashing only
    look at identity.
    """

    rank: Rank
    suit: Suit
    hidden: bool = field(default=False, compare=False)

    def __str__(self) -> str:
        if self.hidden:
            return "??"
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        flag = ", hidden" if self.hidden else ""
        return f"Card({self.rank.name}, {self.suit.name}{flag})"

    @property
    def id(self) -> str:
        """Stable identity string, e.g. ``hearts-A``."""
        return f"{self.suit.value}-{self.rank.value}"

    @property
    def value(self) -> int:
        """Return the nominal point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    def as_hidden(self) -> "Card":
        """Return this card face down."""
        return replace(self, hidden=True)

    def as_revealed(self) -> "Card":
        """Return this card face up."""
        return replace(self, hidden=False)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {rank.value: rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


def full_card_set() -> list[Card]:
    """All 52 identities in suit-major order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Deck:
    """
    An ordered deck of cards. The top of the deck is the end of the list.

    A deck is built for a single round and is never persisted across rounds.
    """

    def __init__(self, cards: Iterable[Card] | None = None, rng: Random | None = None) -> None:
        self._rng = rng or Random()
        self._cards: list[Card] = list(full_card_set() if cards is None else cards)

    def shuffle(self) -> None:
        """
        Fisher-Yates shuffle in place.

        Walks from the last index down to 1, swapping each position with a
        uniformly chosen index in ``[0, i]``.
        """
        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = self._rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def draw(self) -> Card:
        """Remove and return the top card."""
        if not self._cards:
            raise DeckEmptyError("Cannot draw from empty deck")
        return self._cards.pop()

    def without(self, in_play: Iterable[Card]) -> "Deck":
        """Build a new deck of every identity not currently in play."""
        taken = {(card.rank, card.suit) for card in in_play}
        remaining = [card for card in full_card_set() if (card.rank, card.suit) not in taken]
        return Deck(remaining, rng=self._rng)

    @property
    def cards(self) -> list[Card]:
        """A copy of the cards, bottom first."""
        return list(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def is_empty(self) -> bool:
        return not self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __contains__(self, card: object) -> bool:
        return card in self._cards


def create_deck(rng: Random | None = None) -> Deck:
    """Build the 52-card set and shuffle it."""
    deck = Deck(rng=rng)
    deck.shuffle()
    return deck


def reshuffle(deck: Deck) -> Deck:
    """Re-randomize an existing deck in place and return it."""
    deck.shuffle()
    return deck
