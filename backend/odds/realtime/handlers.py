from __future__ import annotations

import logging

from flask import request
from flask_socketio import SocketIO, emit, join_room, leave_room

from ..game.exceptions import RoomNotFound
from ..game.service import RoomManager
from .events import room_channel


logger = logging.getLogger(__name__)


def register_socketio_handlers(socketio: SocketIO, manager: RoomManager) -> None:
    @socketio.on("room:subscribe")
    def room_subscribe(data):
        payload = data if isinstance(data, dict) else {}
        room_id = str(payload.get("roomId", "")).strip()
        if not room_id:
            emit("room:error", {"error": "invalid_room"})
            return {"ok": False, "error": "invalid_room"}

        try:
            state = manager.get_state(room_id)
        except RoomNotFound:
            emit("room:error", {"error": "room_not_found"})
            return {"ok": False, "error": "room_not_found"}

        join_room(room_channel(room_id))
        logger.info("Socket %s subscribed to %s", request.sid, room_channel(room_id))
        emit("room:state", {"roomState": state}, to=request.sid)
        return {"ok": True}

    @socketio.on("room:unsubscribe")
    def room_unsubscribe(data):
        payload = data if isinstance(data, dict) else {}
        room_id = str(payload.get("roomId", "")).strip()
        if not room_id:
            emit("room:error", {"error": "invalid_room"})
            return {"ok": False, "error": "invalid_room"}

        leave_room(room_channel(room_id))
        return {"ok": True}

    @socketio.on("disconnect")
    def on_disconnect(*args):
        # Room membership is HTTP-driven; clients leave via /room/<id>/leave.
        logger.debug("Socket %s disconnected", request.sid)
