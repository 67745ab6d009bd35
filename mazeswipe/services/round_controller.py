"""Round lifecycle state machine.

Responsibility: own one round at a time (grid, player token, goal token,
countdown) and drive it from three event sources: countdown ticks, the
one-shot goal reveal, and swipe input.

Phases:
    idle -> goal_hidden -> goal_visible -> won | timed_out

Rules:
 - A round starts with a freshly generated maze, the player on (1,1), the
   goal hidden, the countdown at ``round_duration`` and the goal reveal
   scheduled ``goal_reveal_delay`` units later.
 - Swipes are ignored while a slide animates (no queueing), while paused for
   a wellness break, and outside an active round.
 - The win check is discrete: it runs once, when a move completes, and asks
   whether the committed cell equals the goal cell. A finished round can
   never finish again.
 - Timeout is a transition, not a failure: exactly one new round starts.
 - Every ``wellness_every``-th win pauses: no new round (and no tick) until
   the wellness collaborator calls ``resume()``.

All tasks a round schedules live in one ``TaskGroup`` cancelled when the
round is superseded; callbacks also check the round id they were created
for, so a stale callback never touches a newer round.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from mazeswipe.config import GameConfig
from mazeswipe.logging_utils import get_logger
from mazeswipe.maze.cells import Cell, MazeGrid
from mazeswipe.maze.goal import place_goal, wander_goal
from mazeswipe.maze.pipeline import Maze
from mazeswipe.maze.slide import parse_direction, resolve_slide, slide_distance, slide_duration

from .motion import Motion, cell_center
from .scheduler import ScheduledTask, Scheduler, TaskGroup
from .wellness import WellnessPrompt, is_wellness_win, pick_message

log = get_logger("mazeswipe.round")

START_CELL: Cell = (1, 1)

Listener = Callable[[str, Dict[str, Any]], None]


class RoundPhase(str, Enum):
    IDLE = "idle"
    GOAL_HIDDEN = "goal_hidden"
    GOAL_VISIBLE = "goal_visible"
    WON = "won"
    TIMED_OUT = "timed_out"


ACTIVE_PHASES = (RoundPhase.GOAL_HIDDEN, RoundPhase.GOAL_VISIBLE)


@dataclass
class RoundState:
    round_id: int
    grid: MazeGrid
    time_remaining: int
    player_cell: Cell = START_CELL
    goal_cell: Optional[Cell] = None
    goal_visible: bool = False
    phase: RoundPhase = RoundPhase.GOAL_HIDDEN
    motion: Optional[Motion] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_moving(self) -> bool:
        return self.motion is not None

    @property
    def active(self) -> bool:
        return self.phase in ACTIVE_PHASES


class RoundController:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        wellness: Optional[WellnessPrompt] = None,
    ):
        self.config = config or GameConfig()
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or random.Random(self.config.seed)
        self.wellness = wellness or WellnessPrompt()
        self.hard_mode = self.config.hard_mode
        self.state: Optional[RoundState] = None
        self.paused = False
        self.rounds_completed = 0
        self.rounds_started = 0
        self.timeouts = 0
        self._tasks = TaskGroup(self.scheduler)
        self._wander_task: Optional[ScheduledTask] = None
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------ events
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, event: str, **payload) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception as exc:  # listener errors are logged, never raised into the round
                log.error(event="listener_failed", source=event, error=repr(exc))

    # ------------------------------------------------------------------ queries
    @property
    def phase(self) -> RoundPhase:
        return self.state.phase if self.state else RoundPhase.IDLE

    @property
    def now(self) -> float:
        return self.scheduler.now

    def _current(self, round_id: int) -> Optional[RoundState]:
        st = self.state
        if st is None or st.round_id != round_id or not st.active:
            return None
        return st

    @staticmethod
    def _occupied_cell(st: RoundState) -> Cell:
        # a slide in flight already owns its destination
        return st.motion.dest if st.motion is not None else st.player_cell

    # ------------------------------------------------------------------ lifecycle
    def start(self) -> RoundState:
        """Start the first round; a no-op when a round is already running."""
        if self.state is not None and (self.state.active or self.paused):
            return self.state
        return self.start_round()

    def start_round(self) -> RoundState:
        self._supersede()
        self.paused = False
        self.rounds_started += 1
        cfg = self.config
        maze = Maze(
            rows=cfg.rows,
            cols=cfg.cols,
            rng=self.rng,
            strict=cfg.strict_connectivity,
            max_attempts=cfg.max_generation_attempts,
        )
        st = RoundState(
            round_id=self.rounds_started,
            grid=maze.grid,
            time_remaining=int(cfg.round_duration),
            metrics=maze.metrics,
        )
        self.state = st
        rid = st.round_id
        self._tasks.call_every(cfg.tick_interval, lambda: self._on_tick(rid), name="countdown")
        self._tasks.call_later(cfg.goal_reveal_delay, lambda: self._reveal_goal(rid), name="goal_reveal")
        log.info(event="round_started", round_id=rid, rows=cfg.rows, cols=cfg.cols, duration=cfg.round_duration)
        self._emit("round_started", round_id=rid)
        return st

    def restart(self) -> RoundState:
        """Supersede whatever is running (including a wellness pause) with a new round."""
        return self.start_round()

    def stop(self) -> None:
        self._supersede()

    def _supersede(self) -> None:
        self._tasks.cancel_all()
        self._wander_task = None

    # ------------------------------------------------------------------ timers
    def _on_tick(self, round_id: int) -> None:
        st = self._current(round_id)
        if st is None:
            return
        st.time_remaining = max(0, st.time_remaining - 1)
        self._emit("tick", round_id=round_id, time_remaining=st.time_remaining)
        if st.time_remaining <= 0:
            self._timeout(st)

    def _timeout(self, st: RoundState) -> None:
        st.phase = RoundPhase.TIMED_OUT
        self.timeouts += 1
        log.info(event="round_timeout", round_id=st.round_id, rounds_completed=self.rounds_completed)
        self._emit("round_timeout", round_id=st.round_id)
        self.start_round()

    def _reveal_goal(self, round_id: int) -> None:
        st = self._current(round_id)
        if st is None or st.goal_visible:
            return
        st.goal_cell = place_goal(st.grid, self._occupied_cell(st), self.rng)
        st.goal_visible = True
        st.phase = RoundPhase.GOAL_VISIBLE
        log.debug(event="goal_revealed", round_id=round_id, goal=st.goal_cell)
        self._emit("goal_revealed", round_id=round_id, goal=st.goal_cell)
        if self.hard_mode:
            self._start_wander(st)

    # ------------------------------------------------------------------ hard mode
    def set_hard_mode(self, enabled: bool) -> bool:
        self.hard_mode = bool(enabled)
        st = self.state
        if not self.hard_mode:
            self._stop_wander()
        elif st is not None and st.active and st.goal_visible:
            self._start_wander(st)
        log.info(event="hard_mode", enabled=self.hard_mode)
        return self.hard_mode

    def _start_wander(self, st: RoundState) -> None:
        if self._wander_task is not None and self._wander_task.active:
            return
        rid = st.round_id
        self._wander_task = self._tasks.call_every(
            self.config.goal_wander_interval, lambda: self._on_wander(rid), name="goal_wander"
        )

    def _stop_wander(self) -> None:
        if self._wander_task is not None:
            self._wander_task.cancel()
            self._wander_task = None

    def _on_wander(self, round_id: int) -> None:
        st = self._current(round_id)
        if st is None or not st.goal_visible or st.goal_cell is None:
            return
        moved = wander_goal(st.grid, st.goal_cell, self._occupied_cell(st), self.rng)
        if moved != st.goal_cell:
            st.goal_cell = moved
            self._emit("goal_moved", round_id=round_id, goal=moved)

    # ------------------------------------------------------------------ input
    def swipe(self, direction) -> Optional[Cell]:
        """Handle one swipe.

        Returns None when the input is ignored (animating, paused, no active
        round), the unchanged player cell when the slide is blocked, or the
        destination when a move begins.
        """
        direction = parse_direction(direction)
        st = self.state
        if st is None or self.paused or not st.active or st.is_moving:
            return None
        goal = st.goal_cell if st.goal_visible else None
        dest = resolve_slide(st.grid, st.player_cell, direction, goal)
        if dest == st.player_cell:
            return dest
        self._begin_move(st, dest)
        return dest

    def _begin_move(self, st: RoundState, dest: Cell) -> None:
        distance = slide_distance(st.player_cell, dest)
        duration = slide_duration(distance, self.config.max_slide_duration, self.config.slide_duration_scale)
        motion = Motion(st.player_cell, dest, self.scheduler.now, duration)
        st.motion = motion
        rid = st.round_id
        self._tasks.call_later(duration, lambda: self._complete_move(rid, motion), name="move_complete")
        self._emit("move_started", round_id=rid, source=motion.source, dest=dest, duration=duration)

    def _complete_move(self, round_id: int, motion: Motion) -> None:
        st = self._current(round_id)
        if st is None or st.motion is not motion:
            return
        st.player_cell = motion.dest
        st.motion = None
        self._emit("move_completed", round_id=round_id, cell=st.player_cell)
        if st.goal_visible and st.player_cell == st.goal_cell:
            self._win(st)

    # ------------------------------------------------------------------ win / wellness
    def _win(self, st: RoundState) -> None:
        if not st.active:
            return
        st.phase = RoundPhase.WON
        self.rounds_completed += 1
        self._supersede()
        log.info(event="round_won", round_id=st.round_id, rounds_completed=self.rounds_completed, time_remaining=st.time_remaining)
        self._emit("round_won", round_id=st.round_id, rounds_completed=self.rounds_completed)
        if is_wellness_win(self.rounds_completed, self.config.wellness_every):
            self.paused = True
            message = pick_message(self.rng)
            log.info(event="wellness_paused", rounds_completed=self.rounds_completed)
            self._emit("wellness_paused", message=message)
            self.wellness.pause(message)
            return
        self.start_round()

    def resume(self) -> bool:
        """Wellness collaborator callback; late or repeated calls are ignored."""
        if not self.paused:
            log.debug(event="wellness_resume_ignored")
            return False
        self.paused = False
        self.wellness.dismissed()
        log.info(event="wellness_resumed", rounds_completed=self.rounds_completed)
        self._emit("wellness_resumed")
        self.start_round()
        return True

    # ------------------------------------------------------------------ render query
    def player_position(self) -> Optional[tuple]:
        st = self.state
        if st is None:
            return None
        if st.motion is not None:
            return st.motion.position(self.scheduler.now, self.config.cell_size)
        return cell_center(st.player_cell, self.config.cell_size)

    def snapshot(self) -> Dict[str, Any]:
        """Read-only view pulled by renderers after an event handler returns."""
        st = self.state
        base = {
            "phase": self.phase.value,
            "rounds_completed": self.rounds_completed,
            "paused": self.paused,
            "hard_mode": self.hard_mode,
            "wellness_message": self.wellness.message if self.paused else None,
            "cell_size": self.config.cell_size,
        }
        if st is None:
            return base
        cs = self.config.cell_size
        px, py = self.player_position()
        goal = None
        if st.goal_cell is not None:
            gx, gy = cell_center(st.goal_cell, cs)
            goal = {"cell": list(st.goal_cell), "x": gx, "y": gy}
        base.update(
            {
                "round_id": st.round_id,
                "rows": st.grid.rows,
                "cols": st.grid.cols,
                "grid": st.grid.to_rows(),
                "player": {"cell": list(st.player_cell), "x": px, "y": py},
                "goal": goal,
                "goal_visible": st.goal_visible,
                "time_remaining": int(st.time_remaining),
                "is_moving": st.is_moving,
            }
        )
        return base


__all__ = ["ACTIVE_PHASES", "RoundController", "RoundPhase", "RoundState"]
