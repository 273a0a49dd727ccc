"""Core application components."""

# Import in correct order to avoid circular dependencies
from core.logger import setup_logger, get_logger
from core.constants import (
    DatabaseDefaults,
    InputLimits,
    QRDefaults,
    DrawDefaults,
    RaffleStatus,
    RaffleEvent,
    RoutePrefixes,
    raffle_channel,
)
from core.exceptions import (
    ApplicationError,
    DatabaseError,
    RepositoryError,
    ServiceError,
    BroadcastError,
    DrawError,
    NoEligibleParticipantsError,
    ValidationError,
    NotFoundError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
)

__all__ = [
    # Logging
    'setup_logger',
    'get_logger',
    # Constants
    'DatabaseDefaults',
    'InputLimits',
    'QRDefaults',
    'DrawDefaults',
    'RaffleStatus',
    'RaffleEvent',
    'RoutePrefixes',
    'raffle_channel',
    # Exceptions
    'ApplicationError',
    'DatabaseError',
    'RepositoryError',
    'ServiceError',
    'BroadcastError',
    'DrawError',
    'NoEligibleParticipantsError',
    'ValidationError',
    'NotFoundError',
    'ConflictError',
    'AuthenticationError',
    'AuthorizationError',
]
