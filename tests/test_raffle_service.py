"""Tests for raffle lifecycle actions."""

import uuid

import pytest

from conftest import add_prizes, create_active_raffle
from database.repositories import RaffleRepository
from services import raffle_service
from utils.dates import is_expired, parse_iso, utc_now


@pytest.mark.asyncio
async def test_create_raffle_requires_admin(db, participant):
    result = await raffle_service.create_raffle(participant, "Party")
    assert result.error == "Unauthorized: Admin access required"
    assert (await raffle_service.create_raffle(None, "Party")).error == "Not authenticated"


@pytest.mark.asyncio
async def test_create_raffle_stores_encoded_draft(admin):
    result = await raffle_service.create_raffle(admin, "  <i>Winter</i> party ")

    assert result.ok
    raffle = result.data
    assert raffle.status == "draft"
    assert raffle.name == "&lt;i&gt;Winter&lt;/i&gt; party"
    assert raffle.qr_code_expires_at is None
    assert raffle.created_by == admin.id


@pytest.mark.asyncio
async def test_create_raffle_validates_name(admin):
    assert (await raffle_service.create_raffle(admin, "  ")).error == "Raffle name is required"

    too_long = await raffle_service.create_raffle(admin, "x" * 300)
    assert too_long.error == "Raffle name must be 255 characters or less"

    # 253 characters plus "&b" grows to 259 once encoded
    grows = await raffle_service.create_raffle(admin, "a" * 253 + "&b")
    assert grows.error == "Raffle name must be 255 characters or less"

    assert (await raffle_service.get_raffles(admin)).data == []


@pytest.mark.asyncio
async def test_activate_sets_expiry_once(admin):
    raffle = (await raffle_service.create_raffle(admin, "Party")).data

    result = await raffle_service.activate_raffle(admin, raffle.id, 60)
    assert result.data.status == "active"
    remaining = (parse_iso(result.data.qr_code_expires_at) - utc_now()).total_seconds()
    assert 3500 < remaining <= 3600

    again = await raffle_service.activate_raffle(admin, raffle.id, 60)
    assert again.error == "Raffle not found or already activated"


@pytest.mark.asyncio
async def test_activate_validates_duration(admin):
    raffle = (await raffle_service.create_raffle(admin, "Party")).data
    result = await raffle_service.activate_raffle(admin, raffle.id, 5)
    assert result.error == "Duration must be at least 15 minutes"


@pytest.mark.asyncio
async def test_regenerate_qr_code(admin):
    draft = (await raffle_service.create_raffle(admin, "Draft")).data
    result = await raffle_service.regenerate_qr_code(admin, draft.id, 60)
    assert result.error == "Cannot regenerate QR for draft raffle. Use activate instead."

    active = await create_active_raffle(admin, minutes=15)
    result = await raffle_service.regenerate_qr_code(admin, active.id, 240)
    assert result.ok
    assert result.data.qr_code_expires_at > active.qr_code_expires_at

    await RaffleRepository.set_status(active.id, "completed")
    result = await raffle_service.regenerate_qr_code(admin, active.id, 60)
    assert result.error == "Cannot regenerate QR for completed raffle"


@pytest.mark.asyncio
async def test_get_raffle_not_found(admin):
    assert (await raffle_service.get_raffle(admin, str(uuid.uuid4()))).error == "Raffle not found"
    assert (await raffle_service.get_raffle(admin, "bogus")).error == "Invalid raffle ID"


@pytest.mark.asyncio
async def test_list_raffles_with_winner_count(admin):
    await raffle_service.create_raffle(admin, "One")
    await raffle_service.create_raffle(admin, "Two")

    result = await raffle_service.get_raffles_with_winner_count(admin)

    assert {row["name"] for row in result.data} == {"One", "Two"}
    assert all(row["winner_count"] == 0 for row in result.data)


@pytest.mark.asyncio
async def test_update_status_rejects_drafts(admin):
    draft = (await raffle_service.create_raffle(admin, "Draft")).data
    result = await raffle_service.update_raffle_status(admin, draft.id, "completed")
    assert result.error == "Raffle must be activated first"


@pytest.mark.asyncio
async def test_completing_announces_raffle_end(admin, published):
    raffle = await create_active_raffle(admin)
    await add_prizes(raffle.id, "Mug")

    result = await raffle_service.update_raffle_status(admin, raffle.id, "completed")

    assert result.data.status == "completed"
    assert [event for _, event, _ in published] == ["RAFFLE_ENDED"]
    assert published[0][2]["payload"]["totalPrizesAwarded"] == 0


@pytest.mark.asyncio
async def test_join_target_needs_no_session(admin):
    raffle = await create_active_raffle(admin)
    result = await raffle_service.get_join_target(raffle.id)
    assert result.data.id == raffle.id
    assert not is_expired(result.data.qr_code_expires_at)
