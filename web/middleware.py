"""Per-request session gate.

* Anonymous requests to protected prefixes go to ``/login?redirect=<path>``.
* Signed-in users visiting the login or sign-up page go to ``/``.
* Signed-in non-admins visiting ``/admin`` go to ``/participant``.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from flask import Flask, redirect, request
from flask_login import current_user

from core.constants import RoutePrefixes


def _matches(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def is_protected(path: str) -> bool:
    return any(_matches(path, prefix) for prefix in RoutePrefixes.PROTECTED)


def login_url(next_path: str) -> str:
    return f"/login?{urlencode({'redirect': next_path})}"


def safe_redirect_target(target: Optional[str], default: str = "/") -> str:
    """Accept only same-site absolute paths as post-login destinations."""
    if not target or not target.startswith("/") or target.startswith("//") or "\\" in target:
        return default
    return target


def init_auth_gate(app: Flask) -> None:
    @app.before_request
    def auth_gate():
        path = request.path

        if is_protected(path):
            if not current_user.is_authenticated:
                return redirect(login_url(path))
            if _matches(path, RoutePrefixes.ADMIN) and not current_user.is_admin:
                return redirect("/participant")
            return None

        if path in RoutePrefixes.AUTH_PAGES and current_user.is_authenticated:
            return redirect("/")
        return None
