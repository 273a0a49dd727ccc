"""Admin allowlist checks."""

from __future__ import annotations

import os
from typing import Iterable, Optional

ADMIN_EMAILS_ENV = "ADMIN_EMAILS"


def parse_admin_emails(value: Optional[str]) -> frozenset[str]:
    """Split a comma-separated allowlist into normalized addresses."""
    if not value:
        return frozenset()
    return frozenset(
        email.strip().lower() for email in value.split(",") if email.strip()
    )


def admin_allowlist() -> frozenset[str]:
    """Current allowlist from the ``ADMIN_EMAILS`` environment variable."""
    return parse_admin_emails(os.getenv(ADMIN_EMAILS_ENV))


def is_admin(email: Optional[str], allowlist: Optional[Iterable[str]] = None) -> bool:
    """Check an e-mail against the admin allowlist, ignoring case.

    The ``ADMIN_EMAILS`` environment variable is read on every call when no
    explicit allowlist is given, so changes apply without a restart.
    """
    if not email or not email.strip():
        return False

    if allowlist is None:
        admins = admin_allowlist()
    else:
        admins = frozenset(item.strip().lower() for item in allowlist if item and item.strip())

    if not admins:
        return False
    return email.strip().lower() in admins
