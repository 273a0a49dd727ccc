"""Validation schemas for server action input and output records."""

from schemas.auth import SignInSchema, SignUpSchema
from schemas.common import validate_input
from schemas.draw import (
    DrawStatePrize,
    DrawStateRaffle,
    DrawWinnerResult,
    DrawWinnerSchema,
    RaffleDrawState,
    WinnerRecord,
)
from schemas.history import (
    MultiWinnerStat,
    ParticipantRecord,
    RaffleHistoryItem,
    RaffleStatistics,
    WinnerDetail,
)
from schemas.prize import CreatePrizeSchema, ParticipantPrize, PrizeIdSchema, UpdatePrizeSchema
from schemas.raffle import (
    ActivateRaffleSchema,
    CreateRaffleSchema,
    JoinRaffleSchema,
    RaffleIdSchema,
    UpdateRaffleStatusSchema,
)

__all__ = [
    "validate_input",
    "SignInSchema",
    "SignUpSchema",
    "JoinRaffleSchema",
    "RaffleIdSchema",
    "CreateRaffleSchema",
    "ActivateRaffleSchema",
    "UpdateRaffleStatusSchema",
    "CreatePrizeSchema",
    "UpdatePrizeSchema",
    "PrizeIdSchema",
    "ParticipantPrize",
    "DrawWinnerSchema",
    "DrawWinnerResult",
    "WinnerRecord",
    "DrawStatePrize",
    "DrawStateRaffle",
    "RaffleDrawState",
    "ParticipantRecord",
    "RaffleStatistics",
    "RaffleHistoryItem",
    "WinnerDetail",
    "MultiWinnerStat",
]
