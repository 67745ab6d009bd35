"""Socket.IO game handlers.

Events:
    - connect: create a game session bound to this sid and emit its state
    - swipe: payload { direction } or { dx, dy }
    - dismiss_wellness: resume after a wellness pause
    - set_mode: payload { hard: bool }
    - restart: supersede the current round
    - get_state: re-emit the current state

Emits:
    - state: render snapshot after every handled event and ticker pump
    - wellness: { message } when a wellness break starts
    - error: invalid payloads ({ message, field, code })
"""

from flask import current_app, request
from flask_socketio import emit

from mazeswipe import socketio
from mazeswipe.config import GameConfig
from mazeswipe.logging_utils import get_logger
from mazeswipe.services.session import GameSession, all_sessions, drop_session, get_session
from mazeswipe.services.wellness import CallbackWellnessPrompt

from .validation import SET_MODE, parse_swipe, validate

_log = get_logger("mazeswipe.ws")

SOCKET_PREFIX = "sio:"
TICKER_INTERVAL = 0.25

_ticker_started = False


def _wellness_for(sid: str) -> CallbackWellnessPrompt:
    def _on_pause(message: str):
        socketio.emit("wellness", {"message": message}, to=sid)

    return CallbackWellnessPrompt(_on_pause)


def _session_for(sid: str) -> GameSession:
    cfg = GameConfig.from_mapping(current_app.config)
    return get_session(SOCKET_PREFIX + sid, lambda: GameSession(cfg, wellness=_wellness_for(sid)))


def _emit_error(event: str, result: dict):
    emit("error", {"message": f"Invalid {event}: {result['error']}", "field": result["field"], "code": result["code"]})


def _ticker():  # pragma: no cover - background loop, exercised at runtime
    while True:
        socketio.sleep(TICKER_INTERVAL)
        for key, game in all_sessions().items():
            if not key.startswith(SOCKET_PREFIX):
                continue
            if game.pump():
                socketio.emit("state", game.snapshot(), to=key[len(SOCKET_PREFIX):])


def _ensure_ticker():
    global _ticker_started
    if _ticker_started or not current_app.config.get("SOCKET_TICKER_ENABLED", True):
        return
    _ticker_started = True
    socketio.start_background_task(_ticker)


@socketio.on("connect")
def handle_connect(auth=None):
    sid = request.sid
    game = _session_for(sid)
    _ensure_ticker()
    emit("state", game.snapshot())
    _log.info(event="connect", sid=sid)


@socketio.on("disconnect")
def handle_disconnect(*args):
    sid = request.sid
    drop_session(SOCKET_PREFIX + sid)
    _log.info(event="disconnect", sid=sid)


@socketio.on("swipe")
def handle_swipe(data):
    ok, result = parse_swipe(data or {})
    if not ok:
        _emit_error("swipe", result)
        return
    game = _session_for(request.sid)
    dest = game.swipe(result["direction"])
    emit("state", game.snapshot())
    _log.debug(event="swipe", sid=request.sid, direction=result["direction"].value, accepted=dest is not None)


@socketio.on("dismiss_wellness")
def handle_dismiss_wellness(data=None):
    game = _session_for(request.sid)
    game.resume()
    emit("state", game.snapshot())


@socketio.on("set_mode")
def handle_set_mode(data):
    ok, result = validate(data or {}, SET_MODE)
    if not ok:
        _emit_error("set_mode", result)
        return
    game = _session_for(request.sid)
    game.set_hard_mode(result["hard"])
    emit("state", game.snapshot())


@socketio.on("restart")
def handle_restart(data=None):
    game = _session_for(request.sid)
    game.restart()
    emit("state", game.snapshot())


@socketio.on("get_state")
def handle_get_state(data=None):
    emit("state", _session_for(request.sid).snapshot())
