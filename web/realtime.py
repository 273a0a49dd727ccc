"""Socket.IO transport for raffle draw events.

Each raffle channel (``raffle:{id}:draw``) is a Socket.IO room. Clients
``subscribe`` with a raffle id, receive draw events by their event name and
can ask for a ``draw_state`` snapshot after reconnecting.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Flask, request
from flask_login import current_user
from flask_socketio import SocketIO, emit, join_room, leave_room

from core import get_logger, raffle_channel
from services.async_runner import run_coroutine_sync
from services.broadcast import set_publisher
from services.raffle_state_service import get_raffle_draw_state
from utils.validators import is_valid_uuid

logger = get_logger(__name__)

socketio = SocketIO()


class RealtimeManager:
    """Registers Socket.IO handlers and publishes draw events to rooms."""

    def __init__(self, socketio: SocketIO) -> None:
        self.socketio = socketio
        self._register_handlers()

    def _register_handlers(self) -> None:

        @self.socketio.on('connect')
        def handle_connect(auth=None):
            if not current_user.is_authenticated:
                return False
            logger.debug(f"Socket {request.sid} connected for user {current_user.id}")
            return True

        @self.socketio.on('disconnect')
        def handle_disconnect(*args):
            logger.debug(f"Socket {request.sid} disconnected")

        @self.socketio.on('subscribe')
        def handle_subscribe(data):
            raffle_id = _raffle_id_from(data)
            if raffle_id is None:
                return {"error": "Invalid raffle ID"}
            channel = raffle_channel(raffle_id)
            join_room(channel)
            logger.debug(f"Socket {request.sid} subscribed to {channel}")
            return {"channel": channel}

        @self.socketio.on('unsubscribe')
        def handle_unsubscribe(data):
            raffle_id = _raffle_id_from(data)
            if raffle_id is None:
                return {"error": "Invalid raffle ID"}
            channel = raffle_channel(raffle_id)
            leave_room(channel)
            return {"channel": channel}

        @self.socketio.on('request_state')
        def handle_request_state(data):
            raffle_id = _raffle_id_from(data)
            result = run_coroutine_sync(get_raffle_draw_state(raffle_id))
            emit('draw_state', result.to_dict())

    def publish(self, channel: str, event: str, envelope: Dict[str, Any]) -> None:
        """Send a draw event envelope to every socket in ``channel``."""
        self.socketio.emit(event, envelope, to=channel)


def _raffle_id_from(data: Any) -> Optional[str]:
    raffle_id = data.get("raffleId") if isinstance(data, dict) else None
    return raffle_id if is_valid_uuid(raffle_id) else None


realtime_manager: Optional[RealtimeManager] = None


def init_realtime(app: Flask) -> RealtimeManager:
    """Bind Socket.IO to the app and route draw broadcasts through it."""
    global realtime_manager
    socketio.init_app(app, async_mode="threading", manage_session=False)
    realtime_manager = RealtimeManager(socketio)
    set_publisher(realtime_manager.publish)
    return realtime_manager

