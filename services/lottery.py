"""Ticket-weighted winner selection for prize draws."""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence

from core import get_logger, DrawDefaults

logger = get_logger(__name__)


@dataclass(frozen=True)
class EligibleParticipant:
    user_id: str
    name: str
    tickets: int

    def to_dict(self) -> dict:
        return {"user_id": self.user_id, "name": self.name, "tickets": self.tickets}


def generate_wheel_seed() -> int:
    """Cryptographically random seed the wheel animation is driven by."""
    return secrets.randbelow(DrawDefaults.SEED_RANGE)


def accumulate_tickets(participations: Iterable[Mapping], last_win_at: Optional[str]) -> int:
    """Sum tickets of participations joined strictly after ``last_win_at``.

    Every participation counts when the user has never won.
    """
    return sum(
        int(p["ticket_count"])
        for p in participations
        if last_win_at is None or p["joined_at"] > last_win_at
    )


def select_weighted_winner(
    participants: Sequence[EligibleParticipant],
    seed: Optional[int] = None,
) -> Optional[EligibleParticipant]:
    """Pick a participant with probability proportional to their tickets.

    Each ticket is one entry. With ``seed`` the pick is deterministic;
    without it ``secrets`` supplies the randomness.

    Returns:
        The winner, or None when there are no participants or no tickets
    """
    if not participants:
        return None

    total = sum(p.tickets for p in participants)
    if total <= 0:
        return None

    if seed is not None:
        modulus = DrawDefaults.SEED_MODULUS
        position = int((seed % modulus) / modulus * total)
    else:
        position = secrets.randbelow(total)

    cumulative = 0
    for participant in participants:
        cumulative += participant.tickets
        if position < cumulative:
            return participant

    # Only reachable through float rounding at the upper edge
    return participants[-1]
