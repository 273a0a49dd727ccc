"""Participant pages: joined raffles and the per-raffle view."""

from __future__ import annotations

from flask import Blueprint, render_template, request

from services import prize_service, ticket_service
from services.raffle_state_service import get_raffle_draw_state
from web.auth import current_actor
from web.routes.common import require_data, require_uuid_or_404, run_action

participant_bp = Blueprint("participant", __name__, url_prefix="/participant")


@participant_bp.route("")
@participant_bp.route("/")
def dashboard():
    actor = current_actor()
    raffles = run_action(ticket_service.get_my_raffles(actor))
    tickets = run_action(ticket_service.get_accumulated_tickets(actor))
    return render_template(
        "participant/dashboard.html",
        raffles=raffles.data or [],
        accumulated_tickets=tickets.data or 0,
        error=raffles.error or tickets.error,
    )


@participant_bp.route("/raffle/<raffle_id>")
def raffle_view(raffle_id: str):
    require_uuid_or_404(raffle_id)
    actor = current_actor()
    state = require_data(run_action(get_raffle_draw_state(raffle_id)))
    participation = run_action(ticket_service.get_participation(actor, raffle_id))
    prizes = run_action(prize_service.get_participant_prizes(actor, raffle_id))
    tickets = run_action(ticket_service.get_accumulated_tickets(actor))

    return render_template(
        "participant/raffle.html",
        state=state,
        participation=participation.data,
        prizes=prizes.data or [],
        accumulated_tickets=tickets.data or 0,
        joined=request.args.get("joined"),
    )
