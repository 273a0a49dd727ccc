"""Sign-in, sign-up and sign-out pages."""

from __future__ import annotations

from flask import Blueprint, flash, redirect, render_template, request
from flask_login import login_required, login_user, logout_user

from services import auth_service
from web.auth import SessionUser
from web.middleware import safe_redirect_target
from web.routes.common import run_action

auth_bp = Blueprint("auth", __name__)


def _next_target() -> str:
    return safe_redirect_target(request.values.get("redirect"))


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "POST":
        result = run_action(auth_service.sign_in(
            request.form.get("email", ""),
            request.form.get("password", ""),
        ))
        if result.ok:
            login_user(SessionUser.from_profile(result.data))
            return redirect(_next_target())
        flash(result.error, "error")

    return render_template("login.html", redirect_to=request.values.get("redirect", ""))


@auth_bp.route("/signup", methods=["GET", "POST"])
def signup():
    if request.method == "POST":
        result = run_action(auth_service.sign_up(
            request.form.get("email", ""),
            request.form.get("password", ""),
            request.form.get("name", ""),
        ))
        if result.ok:
            login_user(SessionUser.from_profile(result.data))
            return redirect(_next_target())
        flash(result.error, "error")

    return render_template("signup.html", redirect_to=request.values.get("redirect", ""))


@auth_bp.route("/logout", methods=["POST", "GET"])
@login_required
def logout():
    logout_user()
    return redirect("/login")
