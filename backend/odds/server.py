from __future__ import annotations

import logging
import sys

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config
from .game.service import RoomManager
from .realtime.events import build_notifier
from .realtime.handlers import register_socketio_handlers
from .routes.errors import register_error_handlers
from .routes.health import bp as health_bp
from .routes.rooms import bp as rooms_bp


def _default_async_mode() -> str:
    # - Windows: threading (eventlet has known compatibility issues on newer Python)
    # - Python >= 3.13: threading (safer default)
    # - Otherwise: eventlet
    if sys.platform.startswith("win") or sys.version_info >= (3, 13):
        return "threading"
    return "eventlet"


def create_app(config_class=Config, notifier=None, scheduler=None) -> tuple[Flask, SocketIO]:
    """Build the Flask app, its SocketIO server and the room manager.

    ``notifier`` and ``scheduler`` default to the SocketIO server; tests pass
    fakes to observe events and drive the reveal timer by hand.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if app.config.get("TRUST_PROXY_HEADERS", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    cors_origins = app.config.get("CORS_ORIGINS", "*")
    CORS(app, resources={r"/api/*": {"origins": cors_origins}})

    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=app.config.get("SOCKETIO_ASYNC_MODE") or _default_async_mode(),
    )

    manager = RoomManager(
        notifier=notifier or build_notifier(app.config.get("NOTIFIER", "socketio"), socketio),
        scheduler=scheduler or socketio,
        room_id=app.config.get("ROOM_ID", "main-room"),
        reveal_delay_sec=app.config.get("REVEAL_DURATION_SEC", 5),
    )
    app.extensions["odds"] = manager

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(rooms_bp, url_prefix="/api")
    register_error_handlers(app)

    register_socketio_handlers(socketio, manager)

    app.logger.info("Odds room %s ready (reveal after %ss)", manager.room_id, manager.reveal_delay_sec)
    return app, socketio
