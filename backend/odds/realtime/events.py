from __future__ import annotations

import logging
from typing import Any, Protocol

from flask_socketio import SocketIO


logger = logging.getLogger(__name__)

PLAYER_LEFT = "player-left"
PLAYER_PROMOTED = "player-promoted"
NUMBER_SUBMITTED = "number-submitted"
GAME_STARTING = "game-starting"
GAME_RESULT = "game-result"


def room_channel(room_id: str) -> str:
    return f"room-{room_id}"


class Notifier(Protocol):
    def publish(self, channel: str, event: str, payload: dict[str, Any]) -> None:
        ...


class LoggingNotifier:
    """Logs events without delivering them anywhere."""

    def publish(self, channel: str, event: str, payload: dict[str, Any]) -> None:
        logger.info("Event triggered: %s - %s %s", channel, event, payload)


class SocketIONotifier:
    """Broadcasts events to every client subscribed to the channel."""

    def __init__(self, socketio: SocketIO) -> None:
        self.socketio = socketio

    def publish(self, channel: str, event: str, payload: dict[str, Any]) -> None:
        logger.debug("Emitting %s to %s", event, channel)
        self.socketio.emit(event, payload, to=channel)


def build_notifier(kind: str, socketio: SocketIO) -> Notifier:
    if kind == "log":
        return LoggingNotifier()
    if kind == "socketio":
        return SocketIONotifier(socketio)
    raise ValueError(f"Unknown notifier: {kind!r}")
