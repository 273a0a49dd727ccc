"""Services package: server actions and their supporting helpers."""

from .async_runner import (
    set_main_loop,
    run_coroutine_sync,
    start_background_loop,
    stop_background_loop,
)
from .access import Actor, require_admin, require_user
from .results import ActionResult, failure, server_action, success
from .broadcast import BroadcastResult, broadcast_draw_event, set_publisher
from .lottery import EligibleParticipant, generate_wheel_seed, select_weighted_winner

__all__ = [
    "set_main_loop",
    "run_coroutine_sync",
    "start_background_loop",
    "stop_background_loop",
    "Actor",
    "require_admin",
    "require_user",
    "ActionResult",
    "failure",
    "server_action",
    "success",
    "BroadcastResult",
    "broadcast_draw_event",
    "set_publisher",
    "EligibleParticipant",
    "generate_wheel_seed",
    "select_weighted_winner",
]
