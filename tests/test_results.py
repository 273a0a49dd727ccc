"""Tests for the server action result wrapper and access checks."""

import pytest

from core.exceptions import AuthenticationError, AuthorizationError, ConflictError
from services.access import Actor, require_admin, require_user
from services.results import ActionResult, server_action


@server_action("Something broke")
async def _explode():
    raise KeyError("internal detail")


@server_action("Something broke")
async def _conflict():
    raise ConflictError("Already done")


@server_action("Something broke")
async def _value():
    return {"answer": 42}


@pytest.mark.asyncio
async def test_unexpected_errors_use_default_message():
    result = await _explode()
    assert result == ActionResult(data=None, error="Something broke")


@pytest.mark.asyncio
async def test_application_errors_keep_their_message():
    assert (await _conflict()).error == "Already done"


@pytest.mark.asyncio
async def test_success_wraps_value():
    result = await _value()
    assert result.ok
    assert result.to_dict() == {"data": {"answer": 42}, "error": None}


def test_access_checks(monkeypatch):
    monkeypatch.setenv("ADMIN_EMAILS", "boss@example.com")
    boss = Actor(id="1", email="Boss@Example.com")
    guest = Actor(id="2", email="guest@example.com")

    assert require_admin(boss) is boss
    assert require_user(guest) is guest
    with pytest.raises(AuthorizationError, match="Unauthorized: Admin access required"):
        require_admin(guest)
    with pytest.raises(AuthenticationError, match="Not authenticated"):
        require_user(None)
