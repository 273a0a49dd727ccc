"""Realtime broadcast of raffle draw events.

Every event is published to the raffle's channel (``raffle:{id}:draw``) as
an envelope ``{"type", "payload", "timestamp"}``. Delivery is best effort:
failures are reported through :class:`BroadcastResult` and never raised, so a
draw keeps going when nobody is listening.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from core import get_logger, RaffleEvent, raffle_channel
from core.exceptions import BroadcastError
from utils.dates import now_iso
from utils.performance import monitor

logger = get_logger(__name__)

# (channel, event name, envelope) -> None; raises on delivery failure
Publisher = Callable[[str, str, Dict[str, Any]], None]

_publisher: Optional[Publisher] = None


@dataclass(frozen=True)
class BroadcastResult:
    success: bool
    error: Optional[str] = None


def set_publisher(publisher: Optional[Publisher]) -> None:
    global _publisher
    _publisher = publisher


def build_event(event_type: RaffleEvent, payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": RaffleEvent(event_type).value,
        "payload": payload,
        "timestamp": now_iso(),
    }


async def broadcast_draw_event(
    raffle_id: str,
    event_type: RaffleEvent,
    payload: Dict[str, Any],
) -> BroadcastResult:
    """Publish one draw event to every subscriber of the raffle channel."""
    event = RaffleEvent(event_type)
    channel = raffle_channel(raffle_id)
    envelope = build_event(event, payload)

    logger.info(f"[Broadcast] Sending {event.value} to raffle: {raffle_id}")

    try:
        if _publisher is None:
            raise BroadcastError("Realtime publisher is not configured")
        _publisher(channel, event.value, envelope)
    except Exception as e:
        logger.warning(f"[Broadcast] Failed to send {event.value} to raffle {raffle_id}: {e}")
        monitor.record_broadcast_failure(event.value)
        return BroadcastResult(success=False, error=str(e) or "Broadcast failed")

    return BroadcastResult(success=True)


async def broadcast_draw_start(raffle_id: str, prize_id: str, prize_name: str) -> BroadcastResult:
    return await broadcast_draw_event(
        raffle_id,
        RaffleEvent.DRAW_START,
        {"raffleId": raffle_id, "prizeId": prize_id, "prizeName": prize_name},
    )


async def broadcast_wheel_seed(raffle_id: str, prize_id: str, seed: int) -> BroadcastResult:
    return await broadcast_draw_event(
        raffle_id,
        RaffleEvent.WHEEL_SEED,
        {"raffleId": raffle_id, "prizeId": prize_id, "seed": seed},
    )


async def broadcast_winner_revealed(
    raffle_id: str,
    prize_id: str,
    winner_id: str,
    winner_name: str,
    tickets_at_win: int,
    prize_name: str,
) -> BroadcastResult:
    return await broadcast_draw_event(
        raffle_id,
        RaffleEvent.WINNER_REVEALED,
        {
            "raffleId": raffle_id,
            "prizeId": prize_id,
            "winnerId": winner_id,
            "winnerName": winner_name,
            "ticketsAtWin": tickets_at_win,
            "prizeName": prize_name,
        },
    )


async def broadcast_raffle_ended(raffle_id: str, total_prizes_awarded: int) -> BroadcastResult:
    return await broadcast_draw_event(
        raffle_id,
        RaffleEvent.RAFFLE_ENDED,
        {"raffleId": raffle_id, "totalPrizesAwarded": total_prizes_awarded},
    )
