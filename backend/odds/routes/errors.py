from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..game.exceptions import OddsGameException


logger = logging.getLogger(__name__)


def error_response(exc: OddsGameException, status_code: int | None = None):
    return jsonify({"error": str(exc), "code": exc.code}), status_code or exc.status_code


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(OddsGameException)
    def handle_game_error(exc: OddsGameException):
        return error_response(exc)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error", "code": "internal_error"}), 500
