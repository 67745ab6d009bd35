import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mazeswipe import app, socketio  # noqa: E402
from mazeswipe.config import GameConfig  # noqa: E402
from mazeswipe.services.round_controller import RoundController  # noqa: E402
from mazeswipe.services.scheduler import Scheduler  # noqa: E402
from mazeswipe.services.session import clear_sessions  # noqa: E402
from mazeswipe.services.wellness import RecordingWellnessPrompt  # noqa: E402


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def scheduler():
    return Scheduler()


@pytest.fixture()
def make_controller():
    """Factory: started controller on a manual scheduler with recorded wellness prompts."""

    def _make(seed=99, start=True, **overrides):
        overrides.setdefault("rows", 11)
        overrides.setdefault("cols", 11)
        cfg = GameConfig(seed=seed, **overrides)
        ctl = RoundController(cfg, Scheduler(), rng=random.Random(seed), wellness=RecordingWellnessPrompt())
        if start:
            ctl.start()
        return ctl

    return _make


@pytest.fixture()
def events():
    """Collects (event, payload) pairs; attach with controller.subscribe(events.append_event)."""

    class _Events(list):
        def append_event(self, event, payload):
            self.append((event, payload))

        def named(self, name):
            return sum(1 for e, _ in self if e == name)

    return _Events()


@pytest.fixture()
def test_app():
    app.config.update(TESTING=True, SOCKET_TICKER_ENABLED=False, MAZESWIPE_ROWS=11, MAZESWIPE_COLS=11)
    clear_sessions()
    yield app
    clear_sessions()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def socket_client(test_app):
    c = socketio.test_client(test_app, flask_test_client=test_app.test_client())
    yield c
    if c.is_connected():
        c.disconnect()
