"""Account actions: sign-up, sign-in and profile lookup."""

from __future__ import annotations

import sqlite3
from typing import Any, Dict, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from core import get_logger
from core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from database.repositories import UserRepository
from schemas import SignInSchema, SignUpSchema, validate_input
from services.access import Actor, require_user
from services.results import server_action
from utils.validators import strip_markup

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _public_profile(user) -> Dict[str, Any]:
    profile = user.to_public_dict()
    profile["is_admin"] = Actor(id=user.id, email=user.email, name=user.name).is_admin
    return profile


@server_action("Failed to create account")
async def sign_up(email: Optional[str], password: Optional[str], name: Optional[str]) -> Dict[str, Any]:
    """Create an account and return its public profile."""
    clean_email = (email or "").strip().lower()
    clean_name = strip_markup(name or "")
    if not clean_email or not clean_name:
        raise ValidationError("Email and name are required")

    data = validate_input(SignUpSchema, email=clean_email, password=password, name=clean_name)

    if await UserRepository.get_by_email(data.email):
        raise ConflictError("An account with this email already exists")

    try:
        user = await UserRepository.create(
            email=data.email,
            password_hash=generate_password_hash(data.password),
            name=data.name or clean_name,
        )
    except sqlite3.IntegrityError as exc:
        raise ConflictError("An account with this email already exists") from exc

    logger.info(f"Account created: {user.id}")
    return _public_profile(user)


@server_action("Failed to sign in")
async def sign_in(email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
    """Check credentials; unknown e-mail and wrong password get the same message."""
    data = validate_input(SignInSchema, email=email, password=password)

    user = await UserRepository.get_by_email(data.email)
    if user is None or not check_password_hash(user.password_hash, data.password):
        raise AuthenticationError(INVALID_CREDENTIALS)

    return _public_profile(user)


@server_action("Failed to fetch user profile")
async def get_current_user(actor: Optional[Actor]) -> Dict[str, Any]:
    actor = require_user(actor)
    user = await UserRepository.get_by_id(actor.id)
    if user is None:
        raise NotFoundError("Profile not found")
    return _public_profile(user)
