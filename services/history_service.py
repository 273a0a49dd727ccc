"""Admin history: past raffles, their winners and repeat winners."""

from __future__ import annotations

from typing import List, Optional

from database.repositories import RaffleRepository, WinnerRepository
from schemas import MultiWinnerStat, RaffleHistoryItem, RaffleIdSchema, WinnerDetail, validate_input
from services.access import Actor, require_admin
from services.raffle_service import load_raffle
from services.results import server_action


@server_action("Failed to fetch raffle history")
async def get_raffle_history(actor: Optional[Actor]) -> List[RaffleHistoryItem]:
    require_admin(actor)
    rows = await RaffleRepository.list_history()
    return [RaffleHistoryItem(**row) for row in rows]


@server_action("Failed to fetch raffle winners")
async def get_raffle_winners(actor: Optional[Actor], raffle_id: Optional[str]) -> List[WinnerDetail]:
    """Winners in draw order; deleted prizes show as "Unknown Prize"."""
    require_admin(actor)
    data = validate_input(RaffleIdSchema, raffle_id=raffle_id)
    await load_raffle(data.raffle_id)
    rows = await WinnerRepository.list_for_raffle(data.raffle_id)
    return [
        WinnerDetail(
            id=row["id"],
            user_id=row["user_id"],
            user_name=row["user_name"],
            user_avatar_url=row["user_avatar_url"],
            prize_id=row["prize_id"] or "",
            prize_name=row["prize_name"] or "Unknown Prize",
            tickets_at_win=row["tickets_at_win"],
            won_at=row["won_at"],
        )
        for row in rows
    ]


@server_action("Failed to fetch multi-winner statistics")
async def get_multi_winner_stats(actor: Optional[Actor]) -> List[MultiWinnerStat]:
    require_admin(actor)
    rows = await WinnerRepository.multi_winner_stats()
    return [MultiWinnerStat(**row) for row in rows]
