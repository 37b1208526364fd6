"""
Pydantic schemas for API request/response validation.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from holdem.core.rules import DEFAULT_BUY_IN


# ============= Request Schemas =============

class CreateRoomRequest(BaseModel):
    """Request to create a new table room."""
    room_id: Optional[str] = Field(default=None, min_length=1, max_length=64)


class SeatRequest(BaseModel):
    """Request to seat a player."""
    name: str = Field(..., min_length=1, max_length=64)
    chips: int = Field(ge=0, default=DEFAULT_BUY_IN)


class ActionRequest(BaseModel):
    """Request to take a game action."""
    action_type: str = Field(..., description="Action type: FOLD, CHECK, CALL, BET")
    amount: int = Field(default=0, ge=0, description="Street total for BET")
    player: Optional[str] = Field(default=None, description="Acting player; must be on turn")


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    text: str
    color: str


class PlayerSchema(BaseModel):
    """Seat information; `hand` only when visible to the viewer."""
    seat: int
    name: str
    chips: int
    folded: bool
    acted: bool
    street_bet: int
    committed: int
    hand: Optional[List[CardSchema]] = None


class HandRankSchema(BaseModel):
    category: str
    ranks: List[int]
    cards: List[str]
    description: str


class WinnerSchema(BaseModel):
    """Payout to one winner."""
    name: str
    amount: int
    hand: Optional[HandRankSchema] = None
    description: Optional[str] = None


class RoundStateSchema(BaseModel):
    """Complete round snapshot."""
    phase: str
    street: Optional[str] = None
    hand_number: int
    pot: int
    current_bet: int
    current_turn: Optional[int] = None
    current_player: Optional[str] = None
    community_cards: List[CardSchema]
    deck_remaining: int
    players: List[PlayerSchema]
    winners: List[WinnerSchema] = []


class ActionResultSchema(BaseModel):
    """Result of an action."""
    success: bool
    message: str
    action_type: Optional[str] = None
    amount: int = 0
    error: Optional[str] = None
    # Included once the hand is over
    winners: Optional[List[WinnerSchema]] = None


class RoomInfoSchema(BaseModel):
    """Room information."""
    room_id: str
    phase: str
    hand_number: int
    player_count: int
    connections: int = 0


# ============= WebSocket Message Schemas =============

class WSJoinMessage(BaseModel):
    """WebSocket join room message (always the first frame)."""
    type: str = "join"
    room_id: str = Field(..., min_length=1)
    player_id: str = Field(..., min_length=1)


class WSSitMessage(BaseModel):
    """Take a seat with a buy-in."""
    type: str = "sit"
    chips: int = Field(ge=0, default=DEFAULT_BUY_IN)


class WSActionMessage(BaseModel):
    """WebSocket action message."""
    type: str = "action"
    action: str  # FOLD, CHECK, CALL, BET
    amount: int = Field(default=0, ge=0)


class WSErrorMessage(BaseModel):
    """WebSocket error message."""
    type: str = "error"
    code: str
    message: str

    def to_frame(self) -> Dict[str, Any]:
        return self.model_dump()
