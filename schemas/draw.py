"""Draw input and record schemas."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from schemas.common import require_uuid
from schemas.prize import PRIZE_ID_ERROR
from schemas.raffle import RaffleIdSchema


class DrawWinnerSchema(RaffleIdSchema):
    prize_id: str = ""

    @field_validator("prize_id", mode="before")
    @classmethod
    def _prize_id(cls, value: Any) -> str:
        return require_uuid(value, PRIZE_ID_ERROR)


class WinnerRecord(BaseModel):
    id: str
    raffle_id: str
    prize_id: str
    user_id: str
    user_name: str
    tickets_at_win: int = Field(gt=0)
    won_at: str


class DrawWinnerResult(BaseModel):
    winner: WinnerRecord
    seed: int
    prize_name: str
    participant_count: int
    raffle_completed: bool = False


class DrawStatePrize(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    sort_order: int
    awarded_to: Optional[str] = None
    awarded_at: Optional[str] = None
    winner_name: Optional[str] = None


class DrawStateRaffle(BaseModel):
    id: str
    status: str
    name: str


class RaffleDrawState(BaseModel):
    raffle: DrawStateRaffle
    prizes: List[DrawStatePrize]
    current_prize_index: int
    awarded_count: int
    is_drawing: bool
    timestamp: str
