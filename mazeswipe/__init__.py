"""
project: MazeSwipe
module: __init__.py
License: MIT

Flask application and Socket.IO setup.

The game core (maze generation, slide resolution, round state machine) lives
in ``mazeswipe.maze`` and ``mazeswipe.services``; this module wires the thin
web surface around it: the JSON round API blueprint and the Socket.IO game
handlers. Configuration is sourced from environment variables (optionally
from a ``.env`` file) with defaults from ``GameConfig``.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_socketio import SocketIO

# Load .env if present so MAZESWIPE_* overrides can be supplied without
# exporting shell variables during development.
load_dotenv()

app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # read-only install; server._configure_logging retries before opening app.log
    pass

app.config.update(
    SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
)
# Copy MAZESWIPE_* environment overrides into app config; GameConfig.from_mapping reads them.
app.config.update({k: v for k, v in os.environ.items() if k.startswith("MAZESWIPE_")})

# Let Flask-SocketIO select best async_mode based on installed deps (eventlet/gevent/threading)
socketio = SocketIO(
    app,
    async_mode=os.getenv("SOCKETIO_ASYNC_MODE") or None,
    cors_allowed_origins=os.getenv("CORS_ALLOWED_ORIGINS", "*"),
    ping_interval=20,
    ping_timeout=10,
)

# Register HTTP blueprints (import after app/socketio created)
from mazeswipe.routes.round_api import bp_round  # noqa: E402

app.register_blueprint(bp_round)

# Import websocket handlers so their event decorators register with Socket.IO (side-effect)
from mazeswipe.websockets import game as _ws_game  # noqa: F401,E402


def create_app():
    """Return the Flask app instance (module-level singleton)."""
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal error", "error_id": error_id}), 500
