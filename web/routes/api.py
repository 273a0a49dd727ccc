"""JSON endpoints used by the live draw screen.

Every response body is ``{"data": ..., "error": ...}``.
"""

from __future__ import annotations

from flask import Blueprint, request

from services import participant_service, raffle_service
from services.draw_service import draw_winner, get_eligible_participants_action
from services.raffle_state_service import get_raffle_draw_state
from services.results import failure
from web.auth import current_actor
from web.config_middleware import invalidate_history_cache
from web.routes.common import json_result, run_action

api_bp = Blueprint("api", __name__, url_prefix="/api")


def _payload() -> dict:
    return request.get_json(silent=True) or request.form.to_dict()


@api_bp.route("/raffles/<raffle_id>/draw", methods=["POST"])
def draw(raffle_id: str):
    prize_id = _payload().get("prizeId")
    result = run_action(draw_winner(current_actor(), raffle_id, prize_id))
    if result.ok:
        invalidate_history_cache()
    return json_result(result)


@api_bp.route("/raffles/<raffle_id>/eligible")
def eligible(raffle_id: str):
    return json_result(run_action(get_eligible_participants_action(current_actor(), raffle_id)))


@api_bp.route("/raffles/<raffle_id>/status", methods=["POST"])
def update_status(raffle_id: str):
    status = _payload().get("status")
    result = run_action(raffle_service.update_raffle_status(current_actor(), raffle_id, status))
    if result.ok:
        invalidate_history_cache()
    return json_result(result)


@api_bp.route("/raffles/<raffle_id>/state")
def state(raffle_id: str):
    if current_actor() is None:
        return json_result(failure("Not authenticated"))
    return json_result(run_action(get_raffle_draw_state(raffle_id)))


@api_bp.route("/raffles/<raffle_id>/statistics")
def statistics(raffle_id: str):
    return json_result(run_action(participant_service.get_raffle_statistics(current_actor(), raffle_id)))
