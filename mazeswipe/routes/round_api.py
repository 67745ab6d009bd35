"""
project: MazeSwipe
module: round_api.py
License: MIT

Round API routes.

JSON endpoints over the per-client game session: the render query, swipe
input, wellness dismissal, hard-mode toggle and restart, plus a stateless
maze generation endpoint. Clients are identified by a random id kept in the
Flask session cookie.
"""

import uuid

from flask import Blueprint, current_app, jsonify, request, session

from mazeswipe.config import GameConfig
from mazeswipe.logging_utils import get_logger
from mazeswipe.maze import InvalidDimensionsError, Maze
from mazeswipe.services.session import GameSession, get_session
from mazeswipe.services.wellness import RecordingWellnessPrompt
from mazeswipe.websockets.validation import GENERATE, SET_MODE, parse_swipe, validate

log = get_logger("mazeswipe.api")

bp_round = Blueprint("round", __name__)


def _game_key() -> str:
    key = session.get("game_id")
    if not key:
        key = uuid.uuid4().hex
        session["game_id"] = key
    return "http:" + key


def current_game() -> GameSession:
    cfg = GameConfig.from_mapping(current_app.config)
    return get_session(_game_key(), lambda: GameSession(cfg, wellness=RecordingWellnessPrompt()))


def _bad_request(err: dict):
    return jsonify(err), 400


@bp_round.route("/api/round/state")
def round_state():
    """Render query: grid, token positions, goal visibility, remaining time."""
    return jsonify(current_game().snapshot())


@bp_round.route("/api/round/swipe", methods=["POST"])
def round_swipe():
    """
    Submit a swipe. Body: {"direction": "left"} or {"dx": -40, "dy": 3}.
    Response: {"accepted": bool, "destination": [row, col] | null, "state": {...}}
    """
    ok, result = parse_swipe(request.get_json(silent=True))
    if not ok:
        return _bad_request(result)
    game = current_game()
    dest = game.swipe(result["direction"])
    log.debug(event="swipe", direction=result["direction"].value, accepted=dest is not None)
    return jsonify(
        {
            "accepted": dest is not None,
            "destination": list(dest) if dest is not None else None,
            "state": game.snapshot(),
        }
    )


@bp_round.route("/api/round/wellness/dismiss", methods=["POST"])
def round_wellness_dismiss():
    game = current_game()
    resumed = game.resume()
    return jsonify({"resumed": resumed, "state": game.snapshot()})


@bp_round.route("/api/round/mode", methods=["POST"])
def round_mode():
    ok, result = validate(request.get_json(silent=True), SET_MODE)
    if not ok:
        return _bad_request(result)
    game = current_game()
    hard = game.set_hard_mode(result["hard"])
    return jsonify({"hard_mode": hard, "state": game.snapshot()})


@bp_round.route("/api/round/restart", methods=["POST"])
def round_restart():
    game = current_game()
    game.restart()
    return jsonify({"state": game.snapshot()})


@bp_round.route("/api/maze/generate")
def maze_generate():
    """Stateless one-off maze: ?rows=21&cols=21&seed=42 -> grid rows + metrics."""
    raw = {}
    for name in ("rows", "cols", "seed"):
        value = request.args.get(name)
        if value is None:
            continue
        try:
            raw[name] = int(value)
        except ValueError:
            return _bad_request({"field": name, "error": "expected int", "code": "type"})
    ok, result = validate(raw, GENERATE)
    if not ok:
        return _bad_request(result)
    cfg = GameConfig.from_mapping(current_app.config)
    try:
        maze = Maze(rows=result.get("rows", cfg.rows), cols=result.get("cols", cfg.cols), seed=result.get("seed"))
    except InvalidDimensionsError as exc:
        return _bad_request({"field": exc.field, "error": exc.reason, "code": "dimensions"})
    return jsonify(
        {
            "seed": maze.seed,
            "rows": maze.rows,
            "cols": maze.cols,
            "grid": maze.grid.to_rows(),
            "metrics": maze.metrics,
        }
    )
