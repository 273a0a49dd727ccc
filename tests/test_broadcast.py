"""Tests for draw event broadcasting."""

import pytest

from core import RaffleEvent
from services.broadcast import (
    broadcast_draw_event,
    broadcast_raffle_ended,
    broadcast_wheel_seed,
    build_event,
    set_publisher,
)

RAFFLE_ID = "123e4567-e89b-12d3-a456-426614174000"


def test_event_envelope_shape():
    envelope = build_event(RaffleEvent.DRAW_START, {"raffleId": RAFFLE_ID})
    assert envelope["type"] == "DRAW_START"
    assert envelope["payload"] == {"raffleId": RAFFLE_ID}
    assert envelope["timestamp"].endswith("+00:00")


@pytest.mark.asyncio
async def test_events_go_to_raffle_channel(published):
    result = await broadcast_wheel_seed(RAFFLE_ID, "prize-1", 42)

    assert result.success
    channel, event, envelope = published[0]
    assert channel == f"raffle:{RAFFLE_ID}:draw"
    assert event == "WHEEL_SEED"
    assert envelope["payload"] == {"raffleId": RAFFLE_ID, "prizeId": "prize-1", "seed": 42}


@pytest.mark.asyncio
async def test_raffle_ended_payload(published):
    await broadcast_raffle_ended(RAFFLE_ID, 3)
    assert published[0][2]["payload"] == {"raffleId": RAFFLE_ID, "totalPrizesAwarded": 3}


@pytest.mark.asyncio
async def test_publisher_failure_is_reported_not_raised():
    def broken(channel, event, envelope):
        raise ConnectionError("socket closed")

    set_publisher(broken)
    try:
        result = await broadcast_draw_event(RAFFLE_ID, RaffleEvent.DRAW_START, {})
    finally:
        set_publisher(None)

    assert not result.success
    assert result.error == "socket closed"


@pytest.mark.asyncio
async def test_missing_publisher_is_reported():
    set_publisher(None)
    result = await broadcast_draw_event(RAFFLE_ID, RaffleEvent.RAFFLE_ENDED, {})
    assert not result.success
    assert result.error == "Realtime publisher is not configured"
