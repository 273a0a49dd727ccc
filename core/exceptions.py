"""Application-wide exception classes.

Messages carried by these exceptions are user-facing: server actions return
``str(error)`` as the ``error`` field of their result.
"""

from __future__ import annotations


class ApplicationError(Exception):
    """Base exception for all application errors."""
    pass


class DatabaseError(ApplicationError):
    """Base exception for database-related errors."""
    pass


class ConnectionPoolError(DatabaseError):
    """Raised when database connection pool has issues."""
    pass


class RepositoryError(DatabaseError):
    """Raised when repository operation fails."""
    pass


class ServiceError(ApplicationError):
    """Base exception for service-level errors."""
    pass


class BroadcastError(ServiceError):
    """Raised when a realtime broadcast cannot be delivered."""
    pass


class DrawError(ServiceError):
    """Base exception for draw operations."""
    pass


class NoEligibleParticipantsError(DrawError):
    """Raised when nobody can win the prize being drawn."""
    pass


class ValidationError(ApplicationError):
    """Raised when data validation fails."""
    pass


class NotFoundError(ApplicationError):
    """Raised when a requested record does not exist."""
    pass


class ConflictError(ApplicationError):
    """Raised when an operation conflicts with the current state."""
    pass


class AuthenticationError(ApplicationError):
    """Raised when authentication fails."""
    pass


class AuthorizationError(ApplicationError):
    """Raised when authorization fails."""
    pass
