"""
project: MazeSwipe
module: server.py
License: MIT

Server bootstrap.

Starts the Socket.IO server and configures process logging (console plus a
rotating file in the Flask instance folder).
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from mazeswipe import app, socketio
from mazeswipe.config import GameConfig
from mazeswipe.logging_utils import log

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Start the Socket.IO server after validating configuration.

    Invalid MAZESWIPE_* settings fail here, before any client connects.
    """
    cfg = GameConfig.from_mapping(app.config)
    _configure_logging()
    log.info(event="config", **{k: v for k, v in cfg.to_dict().items() if v is not None})
    try:
        print(f"[INFO] Starting Socket.IO server on {host}:{port} (async_mode={socketio.async_mode})")
        socketio.run(app, host=host, port=port, debug=debug, allow_unsafe_werkzeug=True)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging():
    """Configure logging to both console and a rotating file in instance/.

    The file path will be instance/app.log. Safe to call repeatedly.
    """
    log_dir = app.instance_path
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "app.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(LOG_FORMAT))

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
