"""Data access layer models implemented with handcrafted queries."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

T = TypeVar("T")


def row_to_model(model: Type[T], row: Mapping[str, Any]) -> T:
    """Build a dataclass from a row, ignoring columns the model doesn't declare."""
    keys = set(row.keys())
    values = {f.name: row[f.name] for f in fields(model) if f.name in keys}
    return model(**values)


@dataclass(slots=True)
class User:
    id: str
    email: str
    name: str
    created_at: str
    avatar_url: Optional[str] = None
    password_hash: str = ""

    def to_public_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("password_hash")
        return data


@dataclass(slots=True)
class Raffle:
    id: str
    name: str
    status: str
    created_at: str
    qr_code_expires_at: Optional[str] = None
    created_by: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class Participant:
    id: str
    raffle_id: str
    user_id: str
    ticket_count: int
    joined_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class Prize:
    id: str
    raffle_id: str
    name: str
    sort_order: int
    created_at: str
    description: Optional[str] = None
    awarded_to: Optional[str] = None
    awarded_at: Optional[str] = None

    @property
    def is_awarded(self) -> bool:
        return self.awarded_to is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class Winner:
    id: str
    raffle_id: str
    prize_id: Optional[str]
    user_id: str
    tickets_at_win: int
    won_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
