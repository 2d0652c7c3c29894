"""
AnonBoard Web Interface

Flask application exposing the board service over HTTP. Request bodies
may be JSON objects or form-encoded; every response is JSON.
"""

import logging
from typing import Any, Optional

from flask import Blueprint, Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from .. import __version__
from ..config import Config
from ..core.boards import BoardService
from ..core.crypto import SecretHasher
from ..core.errors import BoardError, InternalError, ValidationError
from ..db.store import ThreadStore

logger = logging.getLogger(__name__)

SERVICE_KEY = "anonboard"

board_api = Blueprint("board_api", __name__)


def build_service(config: Config) -> BoardService:
    """Construct a board service with an empty store from configuration."""
    hasher = SecretHasher(
        time_cost=config.crypto.argon2_time_cost,
        memory_cost_kb=config.crypto.argon2_memory_kb,
        parallelism=config.crypto.argon2_parallelism
    )
    return BoardService(ThreadStore(), hasher, config.board)


def create_app(config: Optional[Config] = None, service: Optional[BoardService] = None) -> Flask:
    """
    Create the Flask application.

    Args:
        config: Loaded configuration (defaults if omitted)
        service: Board service to serve (a fresh one is built if omitted)
    """
    config = config if config is not None else Config()
    if service is None:
        service = build_service(config)

    app = Flask(__name__)
    app.config.update(
        MAX_CONTENT_LENGTH=config.web.max_content_length,
        BOARD_NAME=config.board.name,
    )
    app.extensions[SERVICE_KEY] = service

    app.register_blueprint(board_api, url_prefix=config.web.url_prefix or None)
    _register_error_handlers(app)

    logger.info(f"Web app created for {config.board.name}")
    return app


def _register_error_handlers(app: Flask):
    @app.errorhandler(BoardError)
    def handle_board_error(error: BoardError):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        if error.code is None or error.code < 400:
            return error
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        internal = InternalError("Internal server error")
        return jsonify(internal.to_dict()), internal.status_code


def _service() -> BoardService:
    return current_app.extensions[SERVICE_KEY]


def _payload() -> dict[str, Any]:
    """Request fields from a JSON object body, form data or the query string."""
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return body
    data = request.args.to_dict()
    data.update(request.form.to_dict())
    return data


def _int_field(data: dict[str, Any], name: str) -> int:
    """Read an identifier that may arrive as an int or a numeric string."""
    value = data.get(name)
    if value is None or value == "":
        raise ValidationError(f"Missing required field: {name}")
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {name}: {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"Invalid {name}: {value!r}")
    try:
        return int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {name}: {value!r}")


@board_api.get("/")
def index():
    return jsonify({
        "service": current_app.config["BOARD_NAME"],
        "version": __version__,
        "status": "running",
        "stats": _service().stats(),
    })


# Threads

@board_api.get("/threads/<board>")
def list_threads(board: str):
    threads = _service().list_recent_threads(board)
    return jsonify([t.to_dict() for t in threads])


@board_api.post("/threads/<board>")
def create_thread(board: str):
    data = _payload()
    thread = _service().create_thread(board, data.get("text"), data.get("delete_password"))
    body = thread.to_dict()
    body["id"] = thread.thread_id
    return jsonify(body), 201


@board_api.put("/threads/<board>")
def report_thread(board: str):
    data = _payload()
    _service().report_thread(board, _int_field(data, "thread_id"))
    return jsonify({"message": "Thread reported successfully"})


@board_api.delete("/threads/<board>")
def delete_thread(board: str):
    data = _payload()
    _service().delete_thread(board, _int_field(data, "thread_id"), data.get("delete_password"))
    return jsonify({"message": "Thread deleted successfully"})


# Replies

@board_api.get("/replies/<board>")
def show_thread(board: str):
    thread_id = _int_field(request.args.to_dict(), "thread_id")
    return jsonify(_service().get_thread(board, thread_id).to_dict())


@board_api.post("/replies/<board>")
def create_reply(board: str):
    data = _payload()
    reply = _service().create_reply(
        board,
        _int_field(data, "thread_id"),
        data.get("text"),
        data.get("delete_password")
    )
    return jsonify(reply.to_dict()), 201


@board_api.put("/replies/<board>")
def report_reply(board: str):
    data = _payload()
    _service().report_reply(board, _int_field(data, "thread_id"), _int_field(data, "reply_id"))
    return jsonify({"message": "Reply reported successfully"})


@board_api.delete("/replies/<board>")
def delete_reply(board: str):
    data = _payload()
    _service().delete_reply(
        board,
        _int_field(data, "thread_id"),
        _int_field(data, "reply_id"),
        data.get("delete_password")
    )
    return jsonify({"message": "Reply deleted successfully"})
