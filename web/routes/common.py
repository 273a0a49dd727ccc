"""Helpers shared by the blueprints."""

from __future__ import annotations

from typing import Any, Awaitable

from flask import abort, jsonify

from services.async_runner import run_coroutine_sync
from services.results import ActionResult
from utils.validators import is_valid_uuid

# Errors that mean "this thing does not exist" for page routes
NOT_FOUND_ERRORS = {"Raffle not found", "Prize not found", "Invalid raffle ID", "Invalid prize ID"}


def run_action(coro: Awaitable[ActionResult[Any]]) -> ActionResult[Any]:
    """Run a server action on the main loop and wait for its result."""
    return run_coroutine_sync(coro)


def require_data(result: ActionResult[Any]) -> Any:
    """Return the action data, or abort with 404 when the record is missing."""
    if result.error in NOT_FOUND_ERRORS:
        abort(404)
    if result.error:
        abort(500)
    return result.data


def require_uuid_or_404(value: str) -> str:
    if not is_valid_uuid(value):
        abort(404)
    return value


def json_result(result: ActionResult[Any]):
    """``{data, error}`` body; status reflects whether the action failed."""
    status = 200 if result.ok else _status_for(result.error or "")
    return jsonify(result.to_dict()), status


def _status_for(error: str) -> int:
    if error == "Not authenticated":
        return 401
    if error.startswith("Unauthorized"):
        return 403
    if error in NOT_FOUND_ERRORS - {"Invalid raffle ID", "Invalid prize ID"}:
        return 404
    return 400
