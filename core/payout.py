"""Round resolution: outcome and amount credited back to the balance."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

WIN_MULTIPLIER = Decimal("2")
BLACKJACK_MULTIPLIER = Decimal("2.5")


class RoundResult(Enum):
    """Outcome of a finished round."""

    WIN = "win"
    LOSE = "lose"
    PUSH = "push"
    BLACKJACK = "blackjack"

    def __str__(self) -> str:
        return self.value

    @property
    def sound(self) -> str | None:
        """Sound cue announced with this result (none for a push)."""
        if self in (RoundResult.WIN, RoundResult.BLACKJACK):
            return "win"
        if self is RoundResult.LOSE:
            return "lose"
        return None


@dataclass(frozen=True)
class Payout:
    """Result of a round and the amount paid out.

    The bet was deducted when the round started, so ``winnings`` is the full
    amount credited: a push returns exactly the bet.
    """

    result: RoundResult
    winnings: Decimal

    def net_for(self, bet: int | Decimal) -> Decimal:
        """Profit or loss relative to the bet."""
        return self.winnings - Decimal(str(bet))


def resolve(
    player_value: int,
    dealer_value: int,
    player_card_count: int,
    bet: int | Decimal,
    win_multiplier: Decimal = WIN_MULTIPLIER,
    blackjack_multiplier: Decimal = BLACKJACK_MULTIPLIER,
) -> Payout:
    """
    Compare final hand values and compute the payout.

    Args:
        player_value: Player's final hand value
        dealer_value: Dealer's final hand value
        player_card_count: Number of cards in the player's hand
        bet: Bet on the table (already deducted from the balance)
        win_multiplier: Payout multiple for a regular win
        blackjack_multiplier: Payout multiple for a two-card 21

    Returns:
        Payout with the result and the amount to credit
    """
    stake = Decimal(str(bet))

    if player_value > 21:
        return Payout(RoundResult.LOSE, Decimal("0"))

    if dealer_value > 21:
        return Payout(RoundResult.WIN, stake * win_multiplier)

    if player_value > dealer_value:
        if player_value == 21 and player_card_count == 2:
            return Payout(RoundResult.BLACKJACK, stake * blackjack_multiplier)
        return Payout(RoundResult.WIN, stake * win_multiplier)

    if player_value < dealer_value:
        return Payout(RoundResult.LOSE, Decimal("0"))

    return Payout(RoundResult.PUSH, stake)
