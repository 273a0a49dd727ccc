"""Participant listing and history record schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ParticipantRecord(BaseModel):
    id: str
    user_id: str
    ticket_count: int = Field(gt=0)
    joined_at: str
    user_name: Optional[str] = None
    user_avatar_url: Optional[str] = None


class RaffleStatistics(BaseModel):
    participant_count: int = Field(ge=0)
    total_tickets: int = Field(ge=0)


class RaffleHistoryItem(BaseModel):
    id: str
    name: str
    status: str
    created_at: str
    participant_count: int = Field(ge=0)
    prizes_awarded: int = Field(ge=0)
    total_prizes: int = Field(ge=0)


class WinnerDetail(BaseModel):
    id: str
    user_id: str
    user_name: Optional[str] = None
    user_avatar_url: Optional[str] = None
    prize_id: str = ""
    prize_name: str = "Unknown Prize"
    tickets_at_win: int
    won_at: str


class MultiWinnerStat(BaseModel):
    user_id: str
    user_name: Optional[str] = None
    user_avatar_url: Optional[str] = None
    win_count: int = Field(ge=2)
    last_win_at: str
