"""
Pydantic schemas for API request/response validation.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


# ============= Request Schemas =============

class ActionRequest(BaseModel):
    """Request to take a game action."""
    action_type: str = Field(..., description="Action type: FOLD, CHECK, CALL, BET, RAISE, ALL_IN")
    amount: Optional[int] = Field(default=0, ge=0, description="Total to bet or raise to")


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    text: str
    color: str


class PlayerSchema(BaseModel):
    """Player information; cards only for the viewer or at showdown."""
    id: str
    name: str
    seat: int
    stack: int
    bet: int
    total_bet: int
    folded: bool
    all_in: bool
    dealer: bool
    small_blind: bool
    big_blind: bool
    active: bool
    last_action: Optional[str] = None
    cards: Optional[List[CardSchema]] = None


class WinnerSchema(BaseModel):
    """Winner information."""
    model_config = ConfigDict(populate_by_name=True)

    player_id: str = Field(..., alias="id")
    amount: int = Field(..., alias="won")
    hand_type: Optional[str] = None
    description: Optional[str] = None
    cards: Optional[List[str]] = None


class TableStateSchema(BaseModel):
    """Table state as seen from the human seat."""
    state: str
    hand_number: int
    pot: int
    current_bet: int
    min_raise: int
    board: List[CardSchema]
    dealer_position: int
    small_blind_position: int
    big_blind_position: int
    current_player_index: int
    current_player: Optional[str] = None
    small_blind: int
    big_blind: int
    players: List[PlayerSchema]
    winners: List[WinnerSchema] = []
    human_to_act: bool = False
    legal_actions: List[str] = []


class ActionResultSchema(BaseModel):
    """Result of an action, with the table once the agents have played."""
    success: bool
    message: str
    action_type: Optional[str] = None
    amount: int = 0
    table: Optional[TableStateSchema] = None


class RecommendationSchema(BaseModel):
    """Betting hint for the human seat."""
    action: str
    suggested_amount: int
    confidence: float
    reasoning: str
    pot_odds: Optional[float] = None
    equity: Optional[float] = None


class RangeStrengthSchema(BaseModel):
    average: float
    minimum: float
    maximum: float
    distribution: Dict[str, float]


class LikelyHandSchema(BaseModel):
    cards: List[str]
    strength: float


class OpponentRangeSchema(BaseModel):
    """Estimated range of one opponent."""
    combinations: int
    probability: float
    strength: RangeStrengthSchema
    likely_hands: List[LikelyHandSchema]
