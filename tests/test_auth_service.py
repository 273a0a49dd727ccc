"""Tests for account actions."""

import pytest

from services import auth_service
from services.access import Actor


@pytest.mark.asyncio
async def test_sign_up_returns_public_profile(db):
    result = await auth_service.sign_up("New@Example.com", "password1", "  Newbie ")

    assert result.ok
    assert result.data["email"] == "new@example.com"
    assert result.data["name"] == "Newbie"
    assert result.data["is_admin"] is False
    assert "password_hash" not in result.data


@pytest.mark.asyncio
async def test_sign_up_flags_admin_accounts(db):
    result = await auth_service.sign_up("admin@example.com", "password1", "Boss")
    assert result.data["is_admin"] is True


@pytest.mark.asyncio
async def test_sign_up_requires_email_and_name(db):
    result = await auth_service.sign_up("someone@example.com", "password1", "")
    assert result.error == "Email and name are required"


@pytest.mark.asyncio
async def test_sign_up_rejects_short_password(db):
    result = await auth_service.sign_up("someone@example.com", "short", "Someone")
    assert result.error == "Password must be at least 8 characters"


@pytest.mark.asyncio
async def test_sign_up_rejects_duplicate_email(db):
    await auth_service.sign_up("twin@example.com", "password1", "Twin")
    result = await auth_service.sign_up("TWIN@example.com", "password2", "Twin again")
    assert result.error == "An account with this email already exists"


@pytest.mark.asyncio
async def test_sign_in_checks_password(db):
    await auth_service.sign_up("member@example.com", "password1", "Member")

    ok = await auth_service.sign_in("member@example.com", "password1")
    wrong = await auth_service.sign_in("member@example.com", "password2")
    unknown = await auth_service.sign_in("ghost@example.com", "password1")

    assert ok.data["name"] == "Member"
    assert wrong.error == "Invalid email or password"
    assert unknown.error == "Invalid email or password"


@pytest.mark.asyncio
async def test_get_current_user(db, participant):
    result = await auth_service.get_current_user(participant)
    assert result.data["id"] == participant.id

    assert (await auth_service.get_current_user(None)).error == "Not authenticated"
    missing = Actor(id="missing", email="missing@example.com")
    assert (await auth_service.get_current_user(missing)).error == "Profile not found"
