"""Tests for joining raffles and ticket accumulation."""

import uuid
from datetime import timedelta

import pytest

from conftest import add_prizes, create_active_raffle, create_user, join
from database.models import Winner
from database.repositories import RaffleRepository, WinnerRepository, new_id
from services import ticket_service
from utils.dates import now_iso, to_iso, utc_now


@pytest.mark.asyncio
async def test_join_creates_single_ticket(admin, participant):
    raffle = await create_active_raffle(admin)

    result = await ticket_service.join_raffle(participant, raffle.id)

    assert result.data["is_new_join"] is True
    assert result.data["participant"].ticket_count == 1
    assert result.data["participant"].user_id == participant.id


@pytest.mark.asyncio
async def test_join_twice_returns_existing_participation(admin, participant):
    raffle = await create_active_raffle(admin)
    first = await ticket_service.join_raffle(participant, raffle.id)
    second = await ticket_service.join_raffle(participant, raffle.id)

    assert second.data["is_new_join"] is False
    assert second.data["participant"].id == first.data["participant"].id


@pytest.mark.asyncio
async def test_join_rejections(admin, participant):
    draft = await RaffleRepository.create(name="Draft", created_by=admin.id)

    assert (await ticket_service.join_raffle(participant, "nope")).error == "Invalid raffle ID"
    assert (await ticket_service.join_raffle(None, draft.id)).error == "Not authenticated"
    assert (await ticket_service.join_raffle(participant, str(uuid.uuid4()))).error == "Raffle not found"
    assert (await ticket_service.join_raffle(participant, draft.id)).error == "Raffle is not active"


@pytest.mark.asyncio
async def test_join_after_qr_expiry_is_rejected(admin, participant):
    raffle = await RaffleRepository.create(name="Late", created_by=admin.id)
    await RaffleRepository.activate(raffle.id, to_iso(utc_now() - timedelta(minutes=1)))

    result = await ticket_service.join_raffle(participant, raffle.id)
    assert result.error == "Raffle QR code has expired"


@pytest.mark.asyncio
async def test_tickets_accumulate_until_a_win(admin, participant):
    first = await create_active_raffle(admin, "First")
    second = await create_active_raffle(admin, "Second")
    await join(first.id, participant)
    await join(second.id, participant)

    assert (await ticket_service.get_accumulated_tickets(participant)).data == 2

    prize, = await add_prizes(first.id, "Mug")
    await WinnerRepository.record_win(Winner(
        id=new_id(),
        raffle_id=first.id,
        prize_id=prize.id,
        user_id=participant.id,
        tickets_at_win=2,
        won_at=now_iso(),
    ))
    assert (await ticket_service.get_accumulated_tickets(participant)).data == 0

    third = await create_active_raffle(admin, "Third")
    await join(third.id, participant)
    assert (await ticket_service.get_accumulated_tickets(participant)).data == 1


@pytest.mark.asyncio
async def test_ticket_count_requires_session(db):
    assert (await ticket_service.get_accumulated_tickets(None)).error == "Not authenticated"


@pytest.mark.asyncio
async def test_my_raffles_and_participation(admin, participant):
    raffle = await create_active_raffle(admin, "Mine")
    other = await create_user("other@example.com", "Other")
    await join(raffle.id, participant)

    mine = await ticket_service.get_my_raffles(participant)
    assert [row["raffle_name"] for row in mine.data] == ["Mine"]
    assert (await ticket_service.get_participation(participant, raffle.id)).data.raffle_id == raffle.id
    assert (await ticket_service.get_participation(other, raffle.id)).data is None
