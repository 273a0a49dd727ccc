"""Prize draw actions.

A draw announces itself (``DRAW_START``), hands viewers the wheel seed
(``WHEEL_SEED``), records the ticket-weighted winner and reveals it
(``WINNER_REVEALED``). Drawing the last prize completes the raffle and sends
``RAFFLE_ENDED``.
"""

from __future__ import annotations

from typing import List, Optional

from core import get_logger, RaffleStatus
from core.exceptions import ConflictError, DrawError, NoEligibleParticipantsError, NotFoundError
from database.models import Winner
from database.repositories import (
    ParticipantRepository,
    PrizeRepository,
    RaffleRepository,
    WinnerRepository,
    new_id,
)
from schemas import DrawWinnerResult, DrawWinnerSchema, RaffleIdSchema, WinnerRecord, validate_input
from services.access import Actor, require_admin
from services.broadcast import (
    broadcast_draw_start,
    broadcast_raffle_ended,
    broadcast_wheel_seed,
    broadcast_winner_revealed,
)
from services.lottery import EligibleParticipant, generate_wheel_seed, select_weighted_winner
from services.raffle_service import load_raffle
from services.results import server_action
from utils.dates import now_iso
from utils.performance import monitor

logger = get_logger(__name__)

DRAWABLE_STATUSES = (RaffleStatus.ACTIVE, RaffleStatus.DRAWING)


async def get_eligible_participants(raffle_id: str) -> List[EligibleParticipant]:
    """Participants who have not won in this raffle and hold at least one ticket.

    Tickets accumulate across raffles and reset when the user wins anywhere.
    """
    candidates = await ParticipantRepository.draw_candidates(raffle_id)
    eligible = [
        EligibleParticipant(
            user_id=row["user_id"],
            name=row["user_name"] or "Unknown",
            tickets=int(row["tickets"] or 0),
        )
        for row in candidates
    ]
    return [p for p in eligible if p.tickets > 0]


@server_action("Failed to get eligible participants")
async def get_eligible_participants_action(
    actor: Optional[Actor], raffle_id: Optional[str]
) -> List[EligibleParticipant]:
    require_admin(actor)
    data = validate_input(RaffleIdSchema, raffle_id=raffle_id)
    return await get_eligible_participants(data.raffle_id)


@server_action("Failed to draw winner")
async def draw_winner(
    actor: Optional[Actor],
    raffle_id: Optional[str],
    prize_id: Optional[str],
) -> DrawWinnerResult:
    require_admin(actor)
    data = validate_input(DrawWinnerSchema, raffle_id=raffle_id, prize_id=prize_id)

    raffle = await load_raffle(data.raffle_id)
    if raffle.status not in DRAWABLE_STATUSES:
        raise ConflictError(f"Cannot draw winners for a {raffle.status} raffle")

    prize = await PrizeRepository.get(data.prize_id)
    if prize is None:
        raise NotFoundError("Prize not found")
    if prize.is_awarded:
        raise ConflictError("Prize already awarded")
    if prize.raffle_id != data.raffle_id:
        raise ConflictError("Prize does not belong to this raffle")

    try:
        participants = await get_eligible_participants(data.raffle_id)
    except Exception as exc:
        logger.exception(f"Eligibility lookup failed for raffle {data.raffle_id}")
        raise DrawError("Failed to get eligible participants") from exc
    if not participants:
        raise NoEligibleParticipantsError("No eligible participants")

    with monitor.track_draw():
        seed = generate_wheel_seed()

        if raffle.status == RaffleStatus.ACTIVE:
            await RaffleRepository.set_status(data.raffle_id, RaffleStatus.DRAWING.value)

        # Viewers start spinning before the result exists; failures are not fatal
        result = await broadcast_draw_start(data.raffle_id, prize.id, prize.name)
        if not result.success:
            logger.warning(f"DRAW_START broadcast failed: {result.error}")
        result = await broadcast_wheel_seed(data.raffle_id, prize.id, seed)
        if not result.success:
            logger.warning(f"WHEEL_SEED broadcast failed: {result.error}")

        chosen = select_weighted_winner(participants)
        if chosen is None:
            raise DrawError("Failed to select winner")

        winner = Winner(
            id=new_id(),
            raffle_id=data.raffle_id,
            prize_id=prize.id,
            user_id=chosen.user_id,
            tickets_at_win=chosen.tickets,
            won_at=now_iso(),
        )
        await WinnerRepository.record_win(winner)
        monitor.record_draw()
        logger.info(
            f"Prize {prize.id} of raffle {data.raffle_id} won by {chosen.user_id} "
            f"with {chosen.tickets} tickets ({len(participants)} eligible)"
        )

        await broadcast_winner_revealed(
            data.raffle_id,
            prize.id,
            chosen.user_id,
            chosen.name,
            chosen.tickets,
            prize.name,
        )

        raffle_completed = await PrizeRepository.count_unawarded(data.raffle_id) == 0
        if raffle_completed:
            await RaffleRepository.set_status(data.raffle_id, RaffleStatus.COMPLETED.value)
            awarded = await PrizeRepository.count_awarded(data.raffle_id)
            await broadcast_raffle_ended(data.raffle_id, awarded)
            logger.info(f"Raffle {data.raffle_id} completed with {awarded} prizes awarded")

    return DrawWinnerResult(
        winner=WinnerRecord(
            id=winner.id,
            raffle_id=winner.raffle_id,
            prize_id=prize.id,
            user_id=winner.user_id,
            user_name=chosen.name,
            tickets_at_win=winner.tickets_at_win,
            won_at=winner.won_at,
        ),
        seed=seed,
        prize_name=prize.name,
        participant_count=len(participants),
        raffle_completed=raffle_completed,
    )
