"""Game state enumeration."""

from enum import Enum


class GameState(Enum):
    """
    Round state machine states.

    Flow: BETTING → PLAYER_TURN → DEALER_TURN → GAME_OVER → BETTING
    """

    # Choosing the bet for the next round
    BETTING = "betting"

    # Player may hit, stand or double
    PLAYER_TURN = "player_turn"

    # Dealer draws to 17, one step at a time
    DEALER_TURN = "dealer_turn"

    # Round resolved, result available
    GAME_OVER = "game_over"

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

