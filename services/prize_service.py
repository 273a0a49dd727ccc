"""Prize management actions."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from core import get_logger
from core.exceptions import ConflictError, NotFoundError
from database.models import Prize
from database.repositories import PrizeRepository
from schemas import (
    CreatePrizeSchema,
    ParticipantPrize,
    PrizeIdSchema,
    RaffleIdSchema,
    UpdatePrizeSchema,
    validate_input,
)
from services.access import Actor, require_admin, require_user
from services.raffle_service import load_raffle
from services.results import server_action

logger = get_logger(__name__)


async def _load_prize(prize_id: str) -> Prize:
    prize = await PrizeRepository.get(prize_id)
    if prize is None:
        raise NotFoundError("Prize not found")
    return prize


@server_action("Failed to create prize")
async def create_prize(
    actor: Optional[Actor],
    raffle_id: Optional[str],
    name: Optional[str],
    description: Optional[str] = None,
) -> Prize:
    """Append a prize; it is drawn after every existing prize of the raffle."""
    require_admin(actor)
    data = validate_input(CreatePrizeSchema, raffle_id=raffle_id, name=name, description=description)
    await load_raffle(data.raffle_id)
    prize = await PrizeRepository.create(data.raffle_id, data.name, data.description)
    logger.info(f"Prize {prize.id} added to raffle {data.raffle_id} at position {prize.sort_order}")
    return prize


@server_action("Failed to fetch prizes")
async def get_prizes(actor: Optional[Actor], raffle_id: Optional[str]) -> List[Prize]:
    require_admin(actor)
    data = validate_input(RaffleIdSchema, raffle_id=raffle_id)
    return await PrizeRepository.list_for_raffle(data.raffle_id)


@server_action("Failed to fetch prizes")
async def get_participant_prizes(actor: Optional[Actor], raffle_id: Optional[str]) -> List[ParticipantPrize]:
    """Prizes for the participant view, without winner identities."""
    require_user(actor)
    data = validate_input(RaffleIdSchema, raffle_id=raffle_id)
    prizes = await PrizeRepository.list_for_raffle(data.raffle_id)
    return [
        ParticipantPrize(
            id=prize.id,
            name=prize.name,
            description=prize.description,
            sort_order=prize.sort_order,
            is_awarded=prize.is_awarded,
        )
        for prize in prizes
    ]


@server_action("Failed to update prize")
async def update_prize(
    actor: Optional[Actor],
    prize_id: Optional[str],
    name: Optional[str],
    description: Optional[str] = None,
) -> Prize:
    require_admin(actor)
    data = validate_input(UpdatePrizeSchema, prize_id=prize_id, name=name, description=description)
    prize = await _load_prize(data.prize_id)
    if prize.is_awarded:
        raise ConflictError("Cannot edit a prize that has already been awarded")
    await PrizeRepository.update(data.prize_id, data.name, data.description)
    return await _load_prize(data.prize_id)


@server_action("Failed to delete prize")
async def delete_prize(actor: Optional[Actor], prize_id: Optional[str]) -> Dict[str, Any]:
    require_admin(actor)
    data = validate_input(PrizeIdSchema, prize_id=prize_id)
    prize = await _load_prize(data.prize_id)
    if prize.is_awarded:
        raise ConflictError("Cannot delete a prize that has already been awarded")
    await PrizeRepository.delete(data.prize_id)
    logger.info(f"Prize {data.prize_id} deleted from raffle {prize.raffle_id}")
    return {"success": True}


@server_action("Failed to count prizes")
async def get_prize_count(actor: Optional[Actor], raffle_id: Optional[str]) -> int:
    require_admin(actor)
    data = validate_input(RaffleIdSchema, raffle_id=raffle_id)
    return await PrizeRepository.count(data.raffle_id)
