"""Raffle management and join schemas."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from core.constants import QRDefaults, RaffleStatus
from schemas.common import InputSchema, require_name, require_uuid

RAFFLE_ID_ERROR = "Invalid raffle ID"


class RaffleIdSchema(InputSchema):
    raffle_id: str = ""

    @field_validator("raffle_id", mode="before")
    @classmethod
    def _raffle_id(cls, value: Any) -> str:
        return require_uuid(value, RAFFLE_ID_ERROR)


class JoinRaffleSchema(RaffleIdSchema):
    pass


class CreateRaffleSchema(InputSchema):
    name: str = ""

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        return require_name(value, "Raffle name")


def coerce_duration(value: Any) -> int:
    """Whole number of minutes between 15 minutes and 24 hours."""
    if isinstance(value, bool):
        raise ValueError("Duration must be a whole number")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as exc:
            raise ValueError("Duration must be a whole number") from exc
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("Duration must be a whole number")
        value = int(value)
    if not isinstance(value, int):
        raise ValueError("Duration must be a whole number")
    if value < QRDefaults.MIN_DURATION_MINUTES:
        raise ValueError(f"Duration must be at least {QRDefaults.MIN_DURATION_MINUTES} minutes")
    if value > QRDefaults.MAX_DURATION_MINUTES:
        raise ValueError("Duration cannot exceed 24 hours")
    return value


class ActivateRaffleSchema(RaffleIdSchema):
    duration_minutes: int = QRDefaults.DEFAULT_DURATION_MINUTES

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def _duration(cls, value: Any) -> int:
        return coerce_duration(value)


class UpdateRaffleStatusSchema(RaffleIdSchema):
    status: RaffleStatus = RaffleStatus.DRAFT

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> RaffleStatus:
        if value not in (RaffleStatus.DRAWING, RaffleStatus.COMPLETED,
                         RaffleStatus.DRAWING.value, RaffleStatus.COMPLETED.value):
            raise ValueError("Invalid status value")
        return RaffleStatus(value)
