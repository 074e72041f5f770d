"""Tests for round resolution and payouts."""

from decimal import Decimal

import pytest

from core.payout import Payout, RoundResult, resolve


class TestResolve:
    """Tests for the resolve function."""

    @pytest.mark.parametrize(
        "player, dealer, count, result, paid",
        [
            (20, 22, 3, RoundResult.WIN, 200),
            (21, 19, 2, RoundResult.BLACKJACK, 250),
            (21, 19, 3, RoundResult.WIN, 200),
            (18, 18, 2, RoundResult.PUSH, 100),
            (22, 17, 3, RoundResult.LOSE, 0),
            (22, 25, 3, RoundResult.LOSE, 0),
            (17, 19, 2, RoundResult.LOSE, 0),
            (19, 17, 2, RoundResult.WIN, 200),
        ],
    )
    def test_outcomes(self, player, dealer, count, result, paid):
        payout = resolve(player, dealer, count, 100)
        assert payout.result is result
        assert payout.winnings == paid

    def test_blackjack_on_odd_bet_pays_half_unit(self):
        payout = resolve(21, 20, 2, 15)
        assert payout.result is RoundResult.BLACKJACK
        assert payout.winnings == Decimal("37.5")

    def test_two_card_21_tied_is_push(self):
        """A two-card 21 against a dealer 21 is a push, not a blackjack."""
        payout = resolve(21, 21, 2, 100)
        assert payout.result is RoundResult.PUSH
        assert payout.winnings == 100

    def test_dealer_bust_with_two_card_21_is_win(self):
        assert resolve(21, 23, 2, 100).result is RoundResult.WIN

    def test_custom_multipliers(self):
        payout = resolve(21, 18, 2, 100, blackjack_multiplier=Decimal("2.2"))
        assert payout.winnings == 220

    def test_net_for(self):
        assert resolve(20, 18, 2, 100).net_for(100) == 100
        assert resolve(18, 18, 2, 100).net_for(100) == 0
        assert resolve(17, 18, 2, 100).net_for(100) == -100


class TestRoundResult:
    """Tests for result sound cues."""

    def test_sounds(self):
        assert RoundResult.WIN.sound == "win"
        assert RoundResult.BLACKJACK.sound == "win"
        assert RoundResult.LOSE.sound == "lose"
        assert RoundResult.PUSH.sound is None

    def test_payout_is_frozen(self):
        payout = Payout(RoundResult.WIN, Decimal("200"))
        with pytest.raises(AttributeError):
            payout.winnings = Decimal("0")
