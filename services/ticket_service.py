"""Participant actions: joining raffles and reading ticket balances."""

from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional

from core import get_logger, RaffleStatus
from core.exceptions import ConflictError, NotFoundError
from database.repositories import ParticipantRepository, RaffleRepository
from schemas import JoinRaffleSchema, RaffleIdSchema, validate_input
from services.access import Actor, require_user
from services.results import server_action
from utils.dates import is_expired
from utils.performance import monitor

logger = get_logger(__name__)


@server_action("Failed to join raffle")
async def join_raffle(actor: Optional[Actor], raffle_id: Optional[str]) -> Dict[str, Any]:
    """Join an active raffle with one ticket.

    Joining twice is not an error: the existing participation comes back
    with ``is_new_join`` set to False.
    """
    data = validate_input(JoinRaffleSchema, raffle_id=raffle_id)
    actor = require_user(actor)

    raffle = await RaffleRepository.get(data.raffle_id)
    if raffle is None:
        raise NotFoundError("Raffle not found")
    if raffle.status != RaffleStatus.ACTIVE:
        raise ConflictError("Raffle is not active")

    existing = await ParticipantRepository.get(data.raffle_id, actor.id)
    if existing is not None:
        return {"participant": existing, "is_new_join": False}

    if is_expired(raffle.qr_code_expires_at):
        raise ConflictError("Raffle QR code has expired")

    try:
        participant = await ParticipantRepository.create(data.raffle_id, actor.id)
    except sqlite3.IntegrityError:
        # Concurrent join for the same user won the insert
        participant = await ParticipantRepository.get(data.raffle_id, actor.id)
        if participant is None:
            raise
        return {"participant": participant, "is_new_join": False}

    monitor.record_join()
    logger.info(f"User {actor.id} joined raffle {data.raffle_id}")
    return {"participant": participant, "is_new_join": True}


@server_action("Failed to get participation")
async def get_participation(actor: Optional[Actor], raffle_id: Optional[str]):
    """The caller's participation in a raffle, or None."""
    data = validate_input(RaffleIdSchema, raffle_id=raffle_id)
    actor = require_user(actor)
    return await ParticipantRepository.get(data.raffle_id, actor.id)


@server_action("Failed to get ticket count")
async def get_accumulated_tickets(actor: Optional[Actor]) -> int:
    """Tickets collected since the caller's most recent win."""
    actor = require_user(actor)
    return await ParticipantRepository.accumulated_tickets(actor.id)


@server_action("Failed to fetch your raffles")
async def get_my_raffles(actor: Optional[Actor]) -> List[Dict[str, Any]]:
    actor = require_user(actor)
    return await ParticipantRepository.list_for_user(actor.id)
