"""QR join flow: ``/join/<raffle_id>`` is what the QR code encodes."""

from __future__ import annotations

from flask import Blueprint, abort, redirect, render_template
from flask_login import current_user

from core import RaffleStatus
from services import raffle_service, ticket_service
from utils.dates import is_expired
from web.auth import current_actor
from web.config_middleware import invalidate_history_cache
from web.middleware import login_url
from web.routes.common import require_uuid_or_404, run_action

join_bp = Blueprint("join", __name__, url_prefix="/join")


@join_bp.route("/<raffle_id>")
def join(raffle_id: str):
    require_uuid_or_404(raffle_id)

    if not current_user.is_authenticated:
        return redirect(login_url(f"/join/{raffle_id}"))

    raffle = run_action(raffle_service.get_join_target(raffle_id)).data
    if raffle is None or raffle.status != RaffleStatus.ACTIVE:
        abort(404)
    if is_expired(raffle.qr_code_expires_at):
        return redirect(f"/join/{raffle_id}/expired")

    result = run_action(ticket_service.join_raffle(current_actor(), raffle_id))
    if not result.ok:
        return render_template("join_error.html", raffle=raffle, error=result.error), 400
    invalidate_history_cache()

    joined = "true" if result.data["is_new_join"] else "false"
    return redirect(f"/participant/raffle/{raffle_id}?joined={joined}")


@join_bp.route("/<raffle_id>/expired")
def expired(raffle_id: str):
    require_uuid_or_404(raffle_id)
    raffle = run_action(raffle_service.get_join_target(raffle_id)).data
    return render_template("join_expired.html", raffle=raffle)
