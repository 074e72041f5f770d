"""Pydantic snapshots of the table handed to render collaborators."""

from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CardView(BaseModel):
    """One card as drawn on the table. Face-down cards carry no identity."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    rank: Optional[str] = None
    suit: Optional[str] = None
    value: int = 0
    hidden: bool = False
    index: int = Field(..., ge=0)


class HandView(BaseModel):
    """A hand and its displayed total."""

    label: str
    cards: list[CardView]
    value: int
    is_player_side: bool


class ControlsView(BaseModel):
    """Which controls are enabled."""

    can_start: bool
    can_hit: bool
    can_stand: bool
    can_double: bool
    can_new_game: bool


class BetView(BaseModel):
    """Bet selection range."""

    current: Decimal
    minimum: int
    maximum: Decimal
    step: int


class TableSnapshot(BaseModel):
    """Everything a renderer needs after a state change."""

    state: Literal["betting", "player_turn", "dealer_turn", "game_over"]
    balance: Decimal = Field(..., ge=0)
    bet: BetView
    player: HandView
    dealer: HandView
    result: Optional[Literal["win", "lose", "push", "blackjack"]] = None
    result_label: Optional[str] = None
    controls: ControlsView
    language: str
