"""Prize schemas."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from core.constants import InputLimits
from schemas.common import InputSchema, optional_text, require_name, require_uuid
from schemas.raffle import RaffleIdSchema

PRIZE_ID_ERROR = "Invalid prize ID"


class CreatePrizeSchema(RaffleIdSchema):
    name: str = ""
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        return require_name(value, "Prize name")

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> Optional[str]:
        return optional_text(value, "Description", InputLimits.DESCRIPTION_MAX_LENGTH)


class PrizeIdSchema(InputSchema):
    prize_id: str = ""

    @field_validator("prize_id", mode="before")
    @classmethod
    def _prize_id(cls, value: Any) -> str:
        return require_uuid(value, PRIZE_ID_ERROR)


class UpdatePrizeSchema(PrizeIdSchema):
    name: str = ""
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        return require_name(value, "Prize name")

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, value: Any) -> Optional[str]:
        return optional_text(value, "Description", InputLimits.DESCRIPTION_MAX_LENGTH)


class ParticipantPrize(BaseModel):
    """Prize as shown to participants: who won it stays hidden."""

    id: str
    name: str
    description: Optional[str] = None
    sort_order: int
    is_awarded: bool
