"""Two-phase token movement.

Phase 1 resolves the destination synchronously; phase 2 is this ``Motion``,
which interpolates the pixel position from source to destination over its
duration. The logical cell is only committed by the owner when the motion's
completion task fires.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from mazeswipe.maze.cells import Cell

Pixel = Tuple[float, float]


def cell_center(cell: Cell, cell_size: int) -> Pixel:
    """Pixel centre of a cell as (x, y)."""
    r, c = cell
    return (c * cell_size + cell_size / 2.0, r * cell_size + cell_size / 2.0)


@dataclass(frozen=True)
class Motion:
    source: Cell
    dest: Cell
    started_at: float
    duration: float

    @property
    def distance(self) -> int:
        return abs(self.dest[0] - self.source[0]) + abs(self.dest[1] - self.source[1])

    @property
    def ends_at(self) -> float:
        return self.started_at + self.duration

    def progress(self, now: float) -> float:
        if self.duration <= 0:
            return 1.0
        f = (now - self.started_at) / self.duration
        return min(1.0, max(0.0, f))

    def position(self, now: float, cell_size: int) -> Pixel:
        f = self.progress(now)
        sx, sy = cell_center(self.source, cell_size)
        dx, dy = cell_center(self.dest, cell_size)
        return (sx + (dx - sx) * f, sy + (dy - sy) * f)


__all__ = ["Motion", "cell_center"]
