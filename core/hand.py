"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from core.cards import Card


def hand_value(cards: Iterable[Card]) -> int:
    """
    Calculate the best blackjack value of a set of cards.

    Face-down cards count 0. Every ace starts at 11 and is demoted to 1,
    one at a time, while the total is over 21.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.hidden:
            continue
        total += card.value
        if card.is_ace:
            aces += 1

    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return total


@dataclass
class Hand:
    """The cards a player or the dealer received during one round."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def clear(self) -> None:
        """Remove all cards from the hand."""
        self.cards.clear()

    @property
    def value(self) -> int:
        """Best value of the face-up cards."""
        return hand_value(self.cards)

    @property
    def is_soft(self) -> bool:
        """
        Check if the hand is soft (has an ace still counted as 11).
        """
        visible = [card for card in self.cards if not card.hidden]
        if not any(card.is_ace for card in visible):
            return False

        total_hard = sum(1 if card.is_ace else card.value for card in visible)
        return total_hard + 10 <= 21

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return len(self.cards) == 2 and self.value == 21

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    @property
    def has_hidden(self) -> bool:
        return any(card.hidden for card in self.cards)

    def reveal_hidden(self) -> list[Card]:
        """Turn every face-down card face up. Returns the revealed cards."""
        revealed = []
        for i, card in enumerate(self.cards):
            if card.hidden:
                self.cards[i] = card.as_revealed()
                revealed.append(self.cards[i])
        return revealed

    @property
    def num_cards(self) -> int:
        """Return the number of cards in the hand."""
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"
