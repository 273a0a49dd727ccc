"""Identity passed from the web layer into server actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.exceptions import AuthenticationError, AuthorizationError
from utils.admin import is_admin


@dataclass(frozen=True)
class Actor:
    """The signed-in user on whose behalf an action runs."""

    id: str
    email: str
    name: str = ""

    @property
    def is_admin(self) -> bool:
        return is_admin(self.email)


def require_user(actor: Optional[Actor]) -> Actor:
    if actor is None:
        raise AuthenticationError("Not authenticated")
    return actor


def require_admin(actor: Optional[Actor]) -> Actor:
    actor = require_user(actor)
    if not actor.is_admin:
        raise AuthorizationError("Unauthorized: Admin access required")
    return actor
