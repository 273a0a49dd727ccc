"""Admin views of raffle participants."""

from __future__ import annotations

from typing import List, Optional

from database.repositories import ParticipantRepository
from schemas import ParticipantRecord, RaffleIdSchema, RaffleStatistics, validate_input
from services.access import Actor, require_admin
from services.results import server_action


@server_action("Failed to fetch participants")
async def get_participants_with_details(
    actor: Optional[Actor], raffle_id: Optional[str]
) -> List[ParticipantRecord]:
    require_admin(actor)
    data = validate_input(RaffleIdSchema, raffle_id=raffle_id)
    rows = await ParticipantRepository.list_with_details(data.raffle_id)
    return [ParticipantRecord(**row) for row in rows]


@server_action("Failed to fetch raffle statistics")
async def get_raffle_statistics(actor: Optional[Actor], raffle_id: Optional[str]) -> RaffleStatistics:
    require_admin(actor)
    data = validate_input(RaffleIdSchema, raffle_id=raffle_id)
    participant_count, total_tickets = await ParticipantRepository.statistics(data.raffle_id)
    return RaffleStatistics(participant_count=participant_count, total_tickets=total_tickets)
