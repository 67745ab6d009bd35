"""Slide movement resolution.

A swipe moves the player in one direction until the next step would hit a
wall or leave the grid, or until the player enters the goal cell. Blocked
first steps are no-ops, not errors.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from .cells import Cell, MazeGrid


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Tuple[int, int]:
        return DIRECTION_DELTAS[self]


DIRECTION_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_ALIASES = {
    "up": Direction.UP, "u": Direction.UP, "n": Direction.UP, "north": Direction.UP,
    "down": Direction.DOWN, "d": Direction.DOWN, "s": Direction.DOWN, "south": Direction.DOWN,
    "left": Direction.LEFT, "l": Direction.LEFT, "w": Direction.LEFT, "west": Direction.LEFT,
    "right": Direction.RIGHT, "r": Direction.RIGHT, "e": Direction.RIGHT, "east": Direction.RIGHT,
}

MAX_SLIDE_DURATION = 1.5
SLIDE_DURATION_SCALE = 2.0


def parse_direction(value) -> Direction:
    if isinstance(value, Direction):
        return value
    key = str(value).strip().lower()
    try:
        return _ALIASES[key]
    except KeyError:
        raise ValueError(f"unknown direction {value!r}") from None


def direction_from_delta(dx: float, dy: float) -> Optional[Direction]:
    """Reduce a raw swipe delta (screen coordinates, +dy is down) to a direction."""
    if dx == 0 and dy == 0:
        return None
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def slide_path(grid: MazeGrid, current: Cell, direction: Direction, goal: Optional[Cell] = None) -> List[Cell]:
    """Cells entered by the slide, in order (empty when nothing moves)."""
    if current == goal:
        return []
    dr, dc = parse_direction(direction).delta
    path: List[Cell] = []
    r, c = current
    while True:
        nxt = (r + dr, c + dc)
        if not grid.is_open(nxt):
            break
        path.append(nxt)
        if nxt == goal:
            break
        r, c = nxt
    return path


def resolve_slide(grid: MazeGrid, current: Cell, direction: Direction, goal: Optional[Cell] = None) -> Cell:
    path = slide_path(grid, current, direction, goal)
    return path[-1] if path else current


def slide_distance(source: Cell, dest: Cell) -> int:
    return abs(dest[0] - source[0]) + abs(dest[1] - source[1])


def slide_duration(distance: int, max_duration: float = MAX_SLIDE_DURATION, scale: float = SLIDE_DURATION_SCALE) -> float:
    """Animation length for a slide of ``distance`` cells.

    Decreasing in distance and capped at ``max_duration``; zero distance
    takes no time.
    """
    if distance <= 0:
        return 0.0
    return min(max_duration, scale / distance)


__all__ = [
    "Direction",
    "DIRECTION_DELTAS",
    "direction_from_delta",
    "parse_direction",
    "resolve_slide",
    "slide_distance",
    "slide_duration",
    "slide_path",
]
