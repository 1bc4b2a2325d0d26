from __future__ import annotations

import json
import logging

from flask import Blueprint, current_app, jsonify, request

from ..game.exceptions import InvalidInput, NotAPlayer
from ..game.service import RoomManager
from ..utils.ip import get_client_ip
from .errors import error_response

bp = Blueprint("rooms", __name__)

logger = logging.getLogger(__name__)


def _manager() -> RoomManager:
    return current_app.extensions["odds"]


def _client_ip() -> str:
    return get_client_ip(request, trust_headers=current_app.config.get("TRUST_PROXY_HEADERS", False))


def _read_json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        # navigator.sendBeacon posts the JSON as text/plain.
        try:
            data = json.loads(request.get_data(as_text=True))
        except ValueError:
            raise InvalidInput("Invalid JSON in request body") from None
    if not isinstance(data, dict):
        raise InvalidInput("Invalid JSON in request body")
    return data


# ---------------------------------------------------------------------------
# Singleton endpoints
# ---------------------------------------------------------------------------


@bp.get("/room")
def room_state():
    return jsonify({"roomState": _manager().find_or_create_room()})


@bp.post("/room")
def join_room():
    data = _read_json_body()
    result = _manager().join(data.get("name"))
    logger.info("join from %s -> %s", _client_ip(), result.player.id)
    return jsonify({
        "roomId": result.room["id"],
        "playerId": result.player.id,
        "roomState": result.room,
        "isSpectator": result.is_spectator,
    })


@bp.delete("/room")
def leave_room():
    data = _read_json_body()
    result = _manager().leave(data.get("playerId"))
    return jsonify({"success": result.success, "roomState": result.room})


@bp.patch("/room")
def submit_number():
    data = _read_json_body()
    result = _manager().submit_number(data.get("playerId"), data.get("number"))
    return jsonify({"success": result.success, "roomState": result.room})


# ---------------------------------------------------------------------------
# Room-addressed endpoints
# ---------------------------------------------------------------------------


@bp.get("/room/<room_id>")
def get_room(room_id: str):
    return jsonify({"roomState": _manager().get_state(room_id)})


@bp.post("/room/<room_id>/leave")
def leave_room_by_id(room_id: str):
    data = _read_json_body()
    _manager().leave(data.get("playerId"), room_id=room_id)
    return jsonify({"success": True})


@bp.post("/room/<room_id>/number")
def submit_number_by_id(room_id: str):
    data = _read_json_body()
    try:
        result = _manager().submit_number(data.get("playerId"), data.get("number"), room_id=room_id)
    except NotAPlayer as exc:
        return error_response(exc, 400)
    return jsonify({"success": result.success, "roomState": result.room})
