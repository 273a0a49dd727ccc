"""Session handling for participants and admins.

Accounts live in the ``users`` table; Flask-Login keeps the user id in the
session cookie and reloads the profile on each request.
"""

from __future__ import annotations

from typing import Optional

from flask import Flask
from flask_login import LoginManager, UserMixin, current_user

from core.logger import get_logger
from database.repositories import UserRepository
from services.access import Actor
from services.async_runner import run_coroutine_sync
from utils.admin import is_admin

logger = get_logger(__name__)

login_manager = LoginManager()


class SessionUser(UserMixin):
    """Represents the signed-in account."""

    def __init__(self, user_id: str, email: str, name: str = "", avatar_url: Optional[str] = None) -> None:
        self.id = user_id
        self.email = email
        self.name = name
        self.avatar_url = avatar_url

    @property
    def is_admin(self) -> bool:
        return is_admin(self.email)

    def to_actor(self) -> Actor:
        return Actor(id=self.id, email=self.email, name=self.name)

    @classmethod
    def from_profile(cls, profile: dict) -> "SessionUser":
        return cls(
            user_id=profile["id"],
            email=profile["email"],
            name=profile.get("name", ""),
            avatar_url=profile.get("avatar_url"),
        )


def current_actor() -> Optional[Actor]:
    """Actor for the current request, or None for anonymous visitors."""
    if current_user.is_authenticated:
        return current_user.to_actor()
    return None


def init_login_manager(app: Flask) -> None:
    """Initialize the Flask-Login manager.

    Args:
        app: Flask application instance
    """
    login_manager.init_app(app)
    login_manager.login_view = "auth.login"

    @login_manager.user_loader
    def load_user(user_id: str) -> Optional[SessionUser]:
        """Load the session user from the database."""
        user = run_coroutine_sync(UserRepository.get_by_id(user_id))
        if user is None:
            logger.info("Session refers to a missing user; treating as anonymous")
            return None
        return SessionUser(user.id, user.email, user.name, user.avatar_url)
