"""Host-side wrapper around one round controller.

Web handlers may run on different threads/greenlets, so every controller
call goes through ``GameSession`` which holds a single lock and advances the
scheduler by elapsed wall-clock time before touching state (lazy catch-up).
Sessions are kept in a small in-process registry keyed by client id.
"""

from __future__ import annotations

import random
import threading
import time
from typing import Any, Callable, Dict, Optional

from mazeswipe.config import GameConfig
from mazeswipe.logging_utils import get_logger

from .round_controller import RoundController
from .scheduler import Scheduler
from .wellness import WellnessPrompt

log = get_logger("mazeswipe.session")

Clock = Callable[[], float]


class GameSession:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        clock: Clock = time.monotonic,
        wellness: Optional[WellnessPrompt] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or GameConfig()
        self._clock = clock
        self._last = clock()
        self.lock = threading.RLock()
        self.scheduler = Scheduler()
        self.controller = RoundController(self.config, self.scheduler, rng=rng, wellness=wellness)
        self.created_at = self._last
        self.last_seen = self._last

    def pump(self) -> int:
        """Advance the logical clock to the wall clock; returns callbacks fired."""
        with self.lock:
            now = self._clock()
            elapsed = max(0.0, now - self._last)
            self._last = now
            self.last_seen = now
            self.controller.start()
            return self.scheduler.advance(elapsed)

    def call(self, fn: Callable[[RoundController], Any]) -> Any:
        """Pump, then run ``fn(controller)`` under the session lock."""
        with self.lock:
            self.pump()
            return fn(self.controller)

    def snapshot(self) -> Dict[str, Any]:
        return self.call(lambda c: c.snapshot())

    def swipe(self, direction):
        return self.call(lambda c: c.swipe(direction))

    def resume(self) -> bool:
        return self.call(lambda c: c.resume())

    def set_hard_mode(self, enabled: bool) -> bool:
        return self.call(lambda c: c.set_hard_mode(enabled))

    def restart(self):
        return self.call(lambda c: c.restart())

    def close(self) -> None:
        with self.lock:
            self.controller.stop()


# Simple in-process registry keyed by client id. Thread-safe with a lock because
# Flask-SocketIO may interleave greenlets.
_sessions: Dict[str, GameSession] = {}
_sessions_lock = threading.Lock()
_SESSIONS_MAX = 64


def get_session(key: str, factory: Optional[Callable[[], GameSession]] = None) -> GameSession:
    with _sessions_lock:
        sess = _sessions.get(key)
        if sess is not None:
            return sess
    sess = factory() if factory else GameSession()
    with _sessions_lock:
        existing = _sessions.get(key)
        if existing is not None:
            sess.close()
            return existing
        _sessions[key] = sess
        if len(_sessions) > _SESSIONS_MAX:
            oldest = min((k for k in _sessions if k != key), key=lambda k: _sessions[k].last_seen)
            _sessions.pop(oldest).close()
            log.info(event="session_evicted", key=oldest)
    log.info(event="session_created", key=key, sessions=len(_sessions))
    return sess


def drop_session(key: str) -> bool:
    with _sessions_lock:
        sess = _sessions.pop(key, None)
    if sess is None:
        return False
    sess.close()
    return True


def all_sessions() -> Dict[str, GameSession]:
    with _sessions_lock:
        return dict(_sessions)


def clear_sessions() -> None:
    with _sessions_lock:
        items = list(_sessions.values())
        _sessions.clear()
    for sess in items:
        sess.close()


__all__ = ["GameSession", "all_sessions", "clear_sessions", "drop_session", "get_session"]
