import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Reverse proxy / IP headers
    TRUST_PROXY_HEADERS = os.environ.get("TRUST_PROXY_HEADERS", "1") == "1"

    # Socket.IO async mode; empty picks eventlet or threading by platform
    SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE", "").strip()

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Notifications: "socketio" broadcasts to subscribers, "log" only logs events
    NOTIFIER = os.environ.get("NOTIFIER", "socketio")

    # Game
    ROOM_ID = os.environ.get("ROOM_ID", "main-room")
    REVEAL_DURATION_SEC = int(os.environ.get("REVEAL_DURATION_SEC", "5"))
