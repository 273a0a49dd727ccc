"""Tests for pages, redirects and JSON endpoints."""

from datetime import timedelta

import pytest

from conftest import run_sync, sign_up
from database.repositories import PrizeRepository, RaffleRepository
from utils.dates import to_iso, utc_now


def _create_active_raffle(admin_client, name="Meetup") -> str:
    response = admin_client.post("/admin/raffles/new", data={"name": name})
    assert response.status_code == 302
    raffle_id = response.headers["Location"].rsplit("/", 1)[-1]
    admin_client.post(f"/admin/raffles/{raffle_id}/activate", data={"duration_minutes": "60"})
    return raffle_id


def _add_prize(admin_client, raffle_id, name="Mug") -> str:
    admin_client.post(f"/admin/raffles/{raffle_id}/prizes", data={"name": name})
    prizes = run_sync(PrizeRepository.list_for_raffle(raffle_id))
    return next(prize.id for prize in prizes if prize.name == name)


# Session gate

def test_anonymous_requests_are_sent_to_login(client):
    response = client.get("/admin/raffles")
    assert response.status_code == 302
    assert response.headers["Location"] == "/login?redirect=%2Fadmin%2Fraffles"

    assert client.get("/participant").headers["Location"] == "/login?redirect=%2Fparticipant"
    assert client.get("/").headers["Location"] == "/login"


def test_non_admins_are_kept_out_of_admin(guest_client):
    response = guest_client.get("/admin")
    assert response.status_code == 302
    assert response.headers["Location"] == "/participant"


def test_signed_in_users_skip_auth_pages(guest_client, admin_client):
    assert guest_client.get("/login").headers["Location"] == "/"
    assert guest_client.get("/").headers["Location"] == "/participant"
    assert admin_client.get("/").headers["Location"] == "/admin"


def test_public_pages_need_no_session(client):
    assert client.get("/login").status_code == 200
    assert client.get("/signup").status_code == 200
    assert client.get("/health").status_code == 200


# Auth pages

def test_login_flow(client):
    sign_up(client, "member@example.com", "Member")
    client.post("/logout")

    bad = client.post("/login", data={"email": "member@example.com", "password": "wrong-pass"})
    assert bad.status_code == 200
    assert b"Invalid email or password" in bad.data

    good = client.post(
        "/login",
        data={"email": "member@example.com", "password": "secret123", "redirect": "/participant"},
    )
    assert good.headers["Location"] == "/participant"


def test_login_ignores_offsite_redirects(client):
    sign_up(client, "member@example.com", "Member")
    client.post("/logout")
    response = client.post(
        "/login",
        data={"email": "member@example.com", "password": "secret123", "redirect": "//evil.example"},
    )
    assert response.headers["Location"] == "/"


def test_signup_errors_are_shown(client):
    response = client.post("/signup", data={"email": "x@example.com", "password": "short", "name": "X"})
    assert response.status_code == 200
    assert b"Password must be at least 8 characters" in response.data


# Admin pages

def test_admin_pages_render(admin_client):
    raffle_id = _create_active_raffle(admin_client, "Summer party")
    _add_prize(admin_client, raffle_id)

    for path in (
        "/admin",
        "/admin/raffles",
        f"/admin/raffles/{raffle_id}",
        f"/admin/raffles/{raffle_id}/participants",
        f"/admin/raffles/{raffle_id}/prizes",
        f"/admin/raffles/{raffle_id}/live",
        "/admin/history",
        f"/admin/history/{raffle_id}",
    ):
        response = admin_client.get(path)
        assert response.status_code == 200, path
        assert b"Summer party" in response.data, path


def test_history_page_follows_raffle_changes(admin_client, guest_client):
    raffle_id = _create_active_raffle(admin_client, "Summer party")
    assert b"0 / 0" in admin_client.get("/admin/history").data

    _add_prize(admin_client, raffle_id)
    assert b"0 / 1" in admin_client.get("/admin/history").data

    guest_client.get(f"/join/{raffle_id}")
    assert b"<td>1</td>" in admin_client.get("/admin/history").data

    _create_active_raffle(admin_client, "Winter party")
    assert b"Winter party" in admin_client.get("/admin/history").data


def test_qr_page_embeds_join_link(admin_client):
    raffle_id = _create_active_raffle(admin_client)
    response = admin_client.get(f"/admin/raffles/{raffle_id}/qr")
    assert b"data:image/png;base64," in response.data
    assert f"http://localhost:5000/join/{raffle_id}".encode() in response.data


def test_unknown_raffle_pages_404(admin_client):
    assert admin_client.get("/admin/raffles/not-a-uuid").status_code == 404
    assert admin_client.get("/admin/raffles/123e4567-e89b-12d3-a456-426614174000").status_code == 404


# QR join flow

def test_join_flow(admin_client, guest_client):
    raffle_id = _create_active_raffle(admin_client)

    first = guest_client.get(f"/join/{raffle_id}")
    second = guest_client.get(f"/join/{raffle_id}")

    assert first.headers["Location"] == f"/participant/raffle/{raffle_id}?joined=true"
    assert second.headers["Location"] == f"/participant/raffle/{raffle_id}?joined=false"
    page = guest_client.get(f"/participant/raffle/{raffle_id}?joined=true")
    assert page.status_code == 200
    assert b"You're in!" in page.data


def test_join_requires_login(admin_client, client):
    raffle_id = _create_active_raffle(admin_client)
    response = client.get(f"/join/{raffle_id}")
    assert response.headers["Location"] == f"/login?redirect=%2Fjoin%2F{raffle_id}"


def test_join_rejects_unknown_and_draft_raffles(admin_client, guest_client):
    assert guest_client.get("/join/abc").status_code == 404
    draft = admin_client.post("/admin/raffles/new", data={"name": "Draft"})
    draft_id = draft.headers["Location"].rsplit("/", 1)[-1]
    assert guest_client.get(f"/join/{draft_id}").status_code == 404


def test_join_after_expiry_shows_expired_page(admin_client, guest_client):
    raffle = run_sync(RaffleRepository.create(name="Late", created_by=None))
    run_sync(RaffleRepository.activate(raffle.id, to_iso(utc_now() - timedelta(minutes=5))))

    response = guest_client.get(f"/join/{raffle.id}")
    assert response.headers["Location"] == f"/join/{raffle.id}/expired"
    assert guest_client.get(f"/join/{raffle.id}/expired").status_code == 200


# JSON API

def test_draw_api(admin_client, guest_client):
    raffle_id = _create_active_raffle(admin_client)
    prize_id = _add_prize(admin_client, raffle_id)
    guest_client.get(f"/join/{raffle_id}")

    response = admin_client.post(f"/api/raffles/{raffle_id}/draw", json={"prizeId": prize_id})

    assert response.status_code == 200
    body = response.get_json()
    assert body["error"] is None
    assert body["data"]["winner"]["user_name"] == "Guest"
    assert body["data"]["raffle_completed"] is True

    history = admin_client.get(f"/admin/history/{raffle_id}")
    assert b"Guest" in history.data


@pytest.mark.parametrize(
    "client_name, status, error",
    [
        ("client", 401, "Not authenticated"),
        ("guest_client", 403, "Unauthorized: Admin access required"),
    ],
)
def test_draw_api_access(request, admin_client, client_name, status, error):
    raffle_id = _create_active_raffle(admin_client)
    prize_id = _add_prize(admin_client, raffle_id)
    caller = request.getfixturevalue(client_name)

    response = caller.post(f"/api/raffles/{raffle_id}/draw", json={"prizeId": prize_id})

    assert response.status_code == status
    assert response.get_json() == {"data": None, "error": error}


def test_draw_api_validation(admin_client):
    response = admin_client.post("/api/raffles/nope/draw", json={"prizeId": "nope"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Invalid raffle ID"


def test_state_api(admin_client, client):
    raffle_id = _create_active_raffle(admin_client)
    _add_prize(admin_client, raffle_id)

    assert client.get(f"/api/raffles/{raffle_id}/state").status_code == 401
    body = admin_client.get(f"/api/raffles/{raffle_id}/state").get_json()
    assert body["data"]["current_prize_index"] == 0
    assert body["data"]["raffle"]["status"] == "active"


def test_status_api_completes_raffle(admin_client):
    raffle_id = _create_active_raffle(admin_client)
    response = admin_client.post(f"/api/raffles/{raffle_id}/status", json={"status": "completed"})
    assert response.get_json()["data"]["status"] == "completed"

    bad = admin_client.post(f"/api/raffles/{raffle_id}/status", json={"status": "draft"})
    assert bad.status_code == 400
    assert bad.get_json()["error"] == "Invalid status value"


def test_metrics_endpoint(client):
    response = client.get("/metrics")
    assert response.status_code == 200
    assert b"raffle_draws_total" in response.data
