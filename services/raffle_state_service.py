"""Snapshot of a raffle's draw progress for viewers that (re)connect."""

from __future__ import annotations

from typing import Optional

from core import DrawDefaults, RaffleStatus
from database.repositories import PrizeRepository
from schemas import DrawStatePrize, DrawStateRaffle, RaffleDrawState, RaffleIdSchema, validate_input
from services.raffle_service import load_raffle
from services.results import server_action
from utils.dates import now_iso


@server_action("Failed to fetch raffle state")
async def get_raffle_draw_state(raffle_id: Optional[str]) -> RaffleDrawState:
    data = validate_input(RaffleIdSchema, raffle_id=raffle_id)
    raffle = await load_raffle(data.raffle_id)

    rows = await PrizeRepository.list_with_winner_names(data.raffle_id, DrawDefaults.MAX_PRIZES_IN_STATE)
    prizes = [DrawStatePrize(**row) for row in rows]

    current_index = next(
        (index for index, prize in enumerate(prizes) if prize.awarded_to is None),
        -1,
    )
    return RaffleDrawState(
        raffle=DrawStateRaffle(id=raffle.id, status=raffle.status, name=raffle.name),
        prizes=prizes,
        current_prize_index=current_index,
        awarded_count=sum(1 for prize in prizes if prize.awarded_to is not None),
        is_drawing=raffle.status == RaffleStatus.DRAWING,
        timestamp=now_iso(),
    )
