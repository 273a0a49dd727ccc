"""Admin actions for raffle lifecycle management."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from core import get_logger, QRDefaults, RaffleStatus
from core.exceptions import ConflictError, NotFoundError
from database.models import Raffle
from database.repositories import PrizeRepository, RaffleRepository
from schemas import (
    ActivateRaffleSchema,
    CreateRaffleSchema,
    RaffleIdSchema,
    UpdateRaffleStatusSchema,
    validate_input,
)
from services.access import Actor, require_admin
from services.broadcast import broadcast_raffle_ended
from services.results import server_action
from utils.dates import expires_in
from utils.validators import sanitize_input

logger = get_logger(__name__)


async def load_raffle(raffle_id: str) -> Raffle:
    """Fetch a raffle or raise ``NotFoundError``."""
    raffle = await RaffleRepository.get(raffle_id)
    if raffle is None:
        raise NotFoundError("Raffle not found")
    return raffle


@server_action("Failed to create raffle")
async def create_raffle(actor: Optional[Actor], name: Optional[str]) -> Raffle:
    actor = require_admin(actor)
    data = validate_input(CreateRaffleSchema, name=sanitize_input(name or ""))
    raffle = await RaffleRepository.create(name=data.name, created_by=actor.id)
    logger.info(f"Raffle created: {raffle.id} by {actor.email}")
    return raffle


@server_action("Failed to fetch raffles")
async def get_raffles(actor: Optional[Actor]) -> List[Raffle]:
    require_admin(actor)
    return await RaffleRepository.list_all()


@server_action("Failed to fetch raffles")
async def get_raffles_with_winner_count(actor: Optional[Actor]) -> List[Dict[str, Any]]:
    require_admin(actor)
    return await RaffleRepository.list_with_winner_count()


@server_action("Failed to fetch raffle")
async def get_raffle(actor: Optional[Actor], raffle_id: Optional[str]) -> Raffle:
    require_admin(actor)
    data = validate_input(RaffleIdSchema, raffle_id=raffle_id)
    return await load_raffle(data.raffle_id)


@server_action("Failed to activate raffle")
async def activate_raffle(
    actor: Optional[Actor],
    raffle_id: Optional[str],
    duration_minutes: Any = QRDefaults.DEFAULT_DURATION_MINUTES,
) -> Raffle:
    """Open a draft raffle for joining until ``now + duration_minutes``."""
    require_admin(actor)
    data = validate_input(ActivateRaffleSchema, raffle_id=raffle_id, duration_minutes=duration_minutes)

    activated = await RaffleRepository.activate(data.raffle_id, expires_in(data.duration_minutes))
    if not activated:
        raise ConflictError("Raffle not found or already activated")

    logger.info(f"Raffle {data.raffle_id} activated for {data.duration_minutes} minutes")
    return await load_raffle(data.raffle_id)


@server_action("Failed to regenerate QR code")
async def regenerate_qr_code(
    actor: Optional[Actor],
    raffle_id: Optional[str],
    duration_minutes: Any = QRDefaults.DEFAULT_DURATION_MINUTES,
) -> Raffle:
    """Extend the join window of an active raffle."""
    require_admin(actor)
    data = validate_input(ActivateRaffleSchema, raffle_id=raffle_id, duration_minutes=duration_minutes)

    raffle = await load_raffle(data.raffle_id)
    if raffle.status == RaffleStatus.DRAFT:
        raise ConflictError("Cannot regenerate QR for draft raffle. Use activate instead.")
    if raffle.status != RaffleStatus.ACTIVE:
        raise ConflictError(f"Cannot regenerate QR for {raffle.status} raffle")

    if not await RaffleRepository.set_qr_expiry(data.raffle_id, expires_in(data.duration_minutes)):
        raise ConflictError(f"Cannot regenerate QR for {raffle.status} raffle")
    return await load_raffle(data.raffle_id)


@server_action("Failed to update raffle status")
async def update_raffle_status(
    actor: Optional[Actor],
    raffle_id: Optional[str],
    status: Any,
) -> Raffle:
    """Move a raffle to ``drawing`` or ``completed``.

    Completing a raffle announces ``RAFFLE_ENDED`` to its viewers.
    """
    require_admin(actor)
    data = validate_input(UpdateRaffleStatusSchema, raffle_id=raffle_id, status=status)

    raffle = await load_raffle(data.raffle_id)
    if raffle.status == RaffleStatus.DRAFT:
        raise ConflictError("Raffle must be activated first")

    await RaffleRepository.set_status(data.raffle_id, data.status.value)
    logger.info(f"Raffle {data.raffle_id} status: {raffle.status} -> {data.status.value}")

    if data.status == RaffleStatus.COMPLETED and raffle.status != RaffleStatus.COMPLETED:
        awarded = await PrizeRepository.count_awarded(data.raffle_id)
        await broadcast_raffle_ended(data.raffle_id, awarded)

    return await load_raffle(data.raffle_id)


@server_action("Failed to fetch raffle")
async def get_join_target(raffle_id: Optional[str]) -> Raffle:
    """Raffle summary for the QR join pages, readable before joining."""
    data = validate_input(RaffleIdSchema, raffle_id=raffle_id)
    return await load_raffle(data.raffle_id)
