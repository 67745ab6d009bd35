"""Pipeline orchestration for maze generation.

Provides the public ``Maze`` class used by the round controller. Wraps the
structural generator with connectivity verification and per-phase timing.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from mazeswipe.logging_utils import get_logger

from .cells import MazeGrid
from .config import validate_dimensions
from .connectivity import MazeDisconnectedError, verify_connected
from .generator import MazeGenerator
from .metrics import init_metrics

log = get_logger("mazeswipe.maze")


@dataclass
class Maze:
    rows: int = 21
    cols: int = 21
    seed: Optional[int] = None
    rng: Optional[random.Random] = field(default=None, repr=False)
    strict: bool = True
    max_attempts: int = 3
    enable_metrics: bool = True

    def __post_init__(self):
        validate_dimensions(self.rows, self.cols)
        # 0 is a valid deterministic seed; None => random
        if self.rng is None:
            if self.seed is None:
                self.seed = random.randint(1, 1_000_000)
            self.rng = random.Random(self.seed)
        self.metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        self.grid: MazeGrid = self._run_pipeline()

    def _run_pipeline(self) -> MazeGrid:
        """Generate and verify, regenerating on disconnection when not strict."""
        start = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = phase_times.get(label, 0) + int((time.perf_counter() - ps) * 1000)
            return r

        attempts = max(1, int(self.max_attempts))
        last_error: Optional[MazeDisconnectedError] = None
        for attempt in range(1, attempts + 1):
            gen = MazeGenerator(self.rows, self.cols, self.rng)
            grid = _phase('generate', gen.run)
            try:
                _phase('verify', verify_connected, grid)
            except MazeDisconnectedError as exc:
                if self.strict:
                    raise
                last_error = exc
                log.error(event="maze_disconnected", attempt=attempt, unreachable=exc.unreachable, seed=self.seed)
                continue
            if self.enable_metrics:
                self.metrics.update(gen.metrics)
                self.metrics['attempts'] = attempt
                self.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
                self.metrics['phase_ms'] = phase_times
            log.debug(event="maze_generated", rows=self.rows, cols=self.cols, seed=self.seed, attempts=attempt)
            return grid
        assert last_error is not None
        raise last_error

    @property
    def start(self):
        return (1, 1)

    @property
    def exit(self):
        return (self.rows - 2, self.cols - 2)


__all__ = ["Maze"]
