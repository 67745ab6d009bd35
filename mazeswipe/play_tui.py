"""Textual terminal client for MazeSwipe.

Arrow keys act as swipes, ``h`` toggles hard mode, ``r`` restarts the round,
``Enter`` dismisses a wellness break and ``q`` quits. The board is redrawn
from the controller's render snapshot on every pump of the game clock.

Run with: `python run.py play`
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from mazeswipe.config import GameConfig
from mazeswipe.services.session import GameSession
from mazeswipe.services.wellness import CallbackWellnessPrompt

WALL_GLYPH = "██"
OPEN_GLYPH = "  "
PLAYER_GLYPH = "()"
GOAL_GLYPH = "<>"

FRAME_INTERVAL = 1 / 30


def _token_cell(token: Optional[Dict[str, Any]], cell_size: int):
    if not token:
        return None
    # Interpolated pixel position -> nearest cell for character-grid display
    return (int(token["y"] // cell_size), int(token["x"] // cell_size))


def render_board(snapshot: Dict[str, Any]) -> str:
    """Render a snapshot as text, two characters per cell."""
    grid = snapshot.get("grid")
    if not grid:
        return ""
    cs = snapshot.get("cell_size", 32)
    player = _token_cell(snapshot.get("player"), cs)
    goal = _token_cell(snapshot.get("goal"), cs) if snapshot.get("goal_visible") else None
    lines = []
    for r, row in enumerate(grid):
        parts = []
        for c, ch in enumerate(row):
            if (r, c) == player:
                parts.append(PLAYER_GLYPH)
            elif (r, c) == goal:
                parts.append(GOAL_GLYPH)
            else:
                parts.append(WALL_GLYPH if ch == "#" else OPEN_GLYPH)
        lines.append("".join(parts))
    return "\n".join(lines)


def render_status(snapshot: Dict[str, Any]) -> str:
    parts = [
        f"Time: {snapshot.get('time_remaining', '-')}",
        f"Rounds: {snapshot.get('rounds_completed', 0)}",
        "Mode: hard" if snapshot.get("hard_mode") else "Mode: easy",
    ]
    if not snapshot.get("goal_visible"):
        parts.append("goal hidden")
    if snapshot.get("paused") and snapshot.get("wellness_message"):
        parts.append(f"{snapshot['wellness_message']} (Enter to continue)")
    return "   ".join(parts)


class MazeSwipeApp(App):
    """Single-screen maze client driven by a local game session."""

    CSS = """
    Screen { layout: vertical; }
    #board { padding: 1 2; }
    #status { height: 3; padding: 0 2; text-style: bold; }
    """

    BINDINGS = [
        ("up", "swipe('up')", "Up"),
        ("down", "swipe('down')", "Down"),
        ("left", "swipe('left')", "Left"),
        ("right", "swipe('right')", "Right"),
        ("h", "toggle_hard", "Hard mode"),
        ("r", "restart", "Restart"),
        ("enter", "dismiss", "Dismiss"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        super().__init__()
        self.wellness_message: Optional[str] = None
        self.game = GameSession(config or GameConfig.from_env(), wellness=CallbackWellnessPrompt(self._on_wellness))

    def compose(self) -> ComposeResult:  # type: ignore[override]
        yield Header(show_clock=True)
        with Vertical():
            self.board = Static(id="board")
            self.status = Static(id="status")
            yield self.status
            yield self.board
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_view()
        self.set_interval(FRAME_INTERVAL, self.refresh_view)

    def _on_wellness(self, message: str) -> None:
        self.wellness_message = message
        self.bell()

    def refresh_view(self) -> None:
        snap = self.game.snapshot()
        self.board.update(render_board(snap))
        self.status.update(render_status(snap))

    def action_swipe(self, direction: str) -> None:
        self.game.swipe(direction)
        self.refresh_view()

    def action_toggle_hard(self) -> None:
        self.game.set_hard_mode(not self.game.controller.hard_mode)
        self.refresh_view()

    def action_restart(self) -> None:
        self.game.restart()
        self.refresh_view()

    def action_dismiss(self) -> None:
        if self.game.resume():
            self.wellness_message = None
        self.refresh_view()


def run_tui(config: Optional[GameConfig] = None) -> None:  # pragma: no cover - interactive
    MazeSwipeApp(config).run()
