"""Tests for admin participant listings."""

import pytest

from conftest import create_active_raffle, create_user, join
from services import participant_service


@pytest.mark.asyncio
async def test_participants_with_details_and_statistics(admin, participant):
    raffle = await create_active_raffle(admin)
    other = await create_user("other@example.com", "Other")
    await join(raffle.id, participant)
    await join(raffle.id, other)

    details = await participant_service.get_participants_with_details(admin, raffle.id)
    stats = await participant_service.get_raffle_statistics(admin, raffle.id)

    assert {row.user_name for row in details.data} == {"Guest", "Other"}
    assert all(row.ticket_count == 1 for row in details.data)
    assert (stats.data.participant_count, stats.data.total_tickets) == (2, 2)


@pytest.mark.asyncio
async def test_statistics_of_empty_raffle(admin):
    raffle = await create_active_raffle(admin)
    stats = await participant_service.get_raffle_statistics(admin, raffle.id)
    assert (stats.data.participant_count, stats.data.total_tickets) == (0, 0)


@pytest.mark.asyncio
async def test_participant_listing_is_admin_only(admin, participant):
    raffle = await create_active_raffle(admin)
    result = await participant_service.get_participants_with_details(participant, raffle.id)
    assert result.error == "Unauthorized: Admin access required"
