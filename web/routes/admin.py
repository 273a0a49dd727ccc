"""Admin pages for raffles, prizes, participants and history."""
from __future__ import annotations

import base64
import io

import qrcode
from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from services import history_service, participant_service, prize_service, raffle_service
from services.draw_service import get_eligible_participants_action
from utils.dates import DEFAULT_DURATION_MINUTES, DURATION_OPTIONS
from web.auth import current_actor
from web.config_middleware import cache, invalidate_history_cache
from web.middleware import safe_redirect_target
from web.routes.common import require_data, require_uuid_or_404, run_action

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


def generate_qr_code(data: str) -> str:
    """Render ``data`` as a PNG QR code, base64 encoded for an ``<img>`` tag."""
    qr = qrcode.QRCode(version=1, box_size=10, border=2)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode()


def join_url(raffle_id: str) -> str:
    return f"{current_app.config['APP_URL']}/join/{raffle_id}"


def _flash_result(result, message: str) -> None:
    if result.ok:
        flash(message, "success")
    else:
        flash(result.error, "error")


@admin_bp.route("")
@admin_bp.route("/")
def dashboard():
    result = run_action(raffle_service.get_raffles_with_winner_count(current_actor()))
    return render_template("admin/dashboard.html", raffles=result.data or [], error=result.error)


@admin_bp.route("/raffles")
def raffles():
    result = run_action(raffle_service.get_raffles(current_actor()))
    return render_template("admin/raffles.html", raffles=result.data or [], error=result.error)


@admin_bp.route("/raffles/new", methods=["GET", "POST"])
def new_raffle():
    if request.method == "POST":
        result = run_action(raffle_service.create_raffle(current_actor(), request.form.get("name", "")))
        if result.ok:
            invalidate_history_cache()
            flash("Raffle created", "success")
            return redirect(url_for("admin.raffle_detail", raffle_id=result.data.id))
        flash(result.error, "error")
    return render_template("admin/new_raffle.html")


@admin_bp.route("/raffles/<raffle_id>")
def raffle_detail(raffle_id: str):
    require_uuid_or_404(raffle_id)
    actor = current_actor()
    raffle = require_data(run_action(raffle_service.get_raffle(actor, raffle_id)))
    prizes = run_action(prize_service.get_prizes(actor, raffle_id))
    stats = run_action(participant_service.get_raffle_statistics(actor, raffle_id))
    return render_template(
        "admin/raffle_detail.html",
        raffle=raffle,
        prizes=prizes.data or [],
        stats=stats.data,
        duration_options=DURATION_OPTIONS,
        default_duration=DEFAULT_DURATION_MINUTES,
    )


@admin_bp.route("/raffles/<raffle_id>/activate", methods=["POST"])
def activate_raffle(raffle_id: str):
    result = run_action(raffle_service.activate_raffle(
        current_actor(), raffle_id, request.form.get("duration_minutes", DEFAULT_DURATION_MINUTES)
    ))
    _flash_result(result, "Raffle activated")
    if result.ok:
        invalidate_history_cache()
        return redirect(url_for("admin.raffle_qr", raffle_id=raffle_id))
    return redirect(url_for("admin.raffle_detail", raffle_id=raffle_id))


@admin_bp.route("/raffles/<raffle_id>/regenerate", methods=["POST"])
def regenerate_qr(raffle_id: str):
    result = run_action(raffle_service.regenerate_qr_code(
        current_actor(), raffle_id, request.form.get("duration_minutes", DEFAULT_DURATION_MINUTES)
    ))
    _flash_result(result, "QR code extended")
    return redirect(url_for("admin.raffle_qr", raffle_id=raffle_id))


@admin_bp.route("/raffles/<raffle_id>/complete", methods=["POST"])
def complete_raffle(raffle_id: str):
    result = run_action(raffle_service.update_raffle_status(current_actor(), raffle_id, "completed"))
    if result.ok:
        invalidate_history_cache()
    _flash_result(result, "Raffle completed")
    return redirect(url_for("admin.raffle_detail", raffle_id=raffle_id))


@admin_bp.route("/raffles/<raffle_id>/qr")
def raffle_qr(raffle_id: str):
    require_uuid_or_404(raffle_id)
    raffle = require_data(run_action(raffle_service.get_raffle(current_actor(), raffle_id)))
    url = join_url(raffle.id)
    return render_template(
        "admin/raffle_qr.html",
        raffle=raffle,
        join_url=url,
        qr_code=generate_qr_code(url),
        duration_options=DURATION_OPTIONS,
        default_duration=DEFAULT_DURATION_MINUTES,
    )


@admin_bp.route("/raffles/<raffle_id>/participants")
def raffle_participants(raffle_id: str):
    require_uuid_or_404(raffle_id)
    actor = current_actor()
    raffle = require_data(run_action(raffle_service.get_raffle(actor, raffle_id)))
    participants = run_action(participant_service.get_participants_with_details(actor, raffle_id))
    stats = run_action(participant_service.get_raffle_statistics(actor, raffle_id))
    return render_template(
        "admin/participants.html",
        raffle=raffle,
        participants=participants.data or [],
        stats=stats.data,
        error=participants.error,
    )


@admin_bp.route("/raffles/<raffle_id>/prizes", methods=["GET", "POST"])
def raffle_prizes(raffle_id: str):
    require_uuid_or_404(raffle_id)
    actor = current_actor()
    if request.method == "POST":
        result = run_action(prize_service.create_prize(
            actor, raffle_id, request.form.get("name", ""), request.form.get("description")
        ))
        if result.ok:
            invalidate_history_cache()
        _flash_result(result, "Prize added")
        return redirect(url_for("admin.raffle_prizes", raffle_id=raffle_id))

    raffle = require_data(run_action(raffle_service.get_raffle(actor, raffle_id)))
    prizes = run_action(prize_service.get_prizes(actor, raffle_id))
    return render_template("admin/prizes.html", raffle=raffle, prizes=prizes.data or [])


@admin_bp.route("/prizes/<prize_id>/edit", methods=["POST"])
def edit_prize(prize_id: str):
    result = run_action(prize_service.update_prize(
        current_actor(), prize_id, request.form.get("name", ""), request.form.get("description")
    ))
    if result.ok:
        invalidate_history_cache()
    _flash_result(result, "Prize updated")
    return redirect(safe_redirect_target(request.form.get("back"), url_for("admin.dashboard")))


@admin_bp.route("/prizes/<prize_id>/delete", methods=["POST"])
def delete_prize(prize_id: str):
    result = run_action(prize_service.delete_prize(current_actor(), prize_id))
    if result.ok:
        invalidate_history_cache()
    _flash_result(result, "Prize deleted")
    return redirect(safe_redirect_target(request.form.get("back"), url_for("admin.dashboard")))


@admin_bp.route("/raffles/<raffle_id>/live")
def raffle_live(raffle_id: str):
    """Draw screen; the wheel is driven by Socket.IO events."""
    require_uuid_or_404(raffle_id)
    actor = current_actor()
    raffle = require_data(run_action(raffle_service.get_raffle(actor, raffle_id)))
    eligible = run_action(get_eligible_participants_action(actor, raffle_id))
    return render_template("admin/live.html", raffle=raffle, eligible=eligible.data or [])


@admin_bp.route("/history")
def history():
    actor = current_actor()
    raffles = cache.get("raffle_history")
    if raffles is None:
        result = run_action(history_service.get_raffle_history(actor))
        raffles = result.data or []
        if result.ok:
            cache.set("raffle_history", raffles)

    multi_winners = cache.get("multi_winner_stats")
    if multi_winners is None:
        result = run_action(history_service.get_multi_winner_stats(actor))
        multi_winners = result.data or []
        if result.ok:
            cache.set("multi_winner_stats", multi_winners)

    return render_template("admin/history.html", raffles=raffles, multi_winners=multi_winners)


@admin_bp.route("/history/<raffle_id>")
def history_detail(raffle_id: str):
    require_uuid_or_404(raffle_id)
    actor = current_actor()
    raffle = require_data(run_action(raffle_service.get_raffle(actor, raffle_id)))
    winners = run_action(history_service.get_raffle_winners(actor, raffle_id))
    return render_template("admin/history_detail.html", raffle=raffle, winners=winners.data or [])
