"""Public maze package interface."""

from .cells import Cell, MazeGrid  # noqa: F401
from .config import InvalidDimensionsError, validate_dimensions  # noqa: F401
from .connectivity import MazeDisconnectedError, flood_open, is_perfect, is_reachable, verify_connected  # noqa: F401
from .generator import MazeGenerator, generate  # noqa: F401
from .goal import place_goal, wander_goal  # noqa: F401
from .pipeline import Maze  # noqa: F401
from .slide import Direction, direction_from_delta, parse_direction, resolve_slide, slide_duration  # noqa: F401
from .tiles import OPEN, WALL  # noqa: F401

__all__ = [
    "Cell",
    "Direction",
    "InvalidDimensionsError",
    "Maze",
    "MazeDisconnectedError",
    "MazeGenerator",
    "MazeGrid",
    "OPEN",
    "WALL",
    "direction_from_delta",
    "flood_open",
    "generate",
    "is_perfect",
    "is_reachable",
    "parse_direction",
    "place_goal",
    "resolve_slide",
    "slide_duration",
    "validate_dimensions",
    "verify_connected",
    "wander_goal",
]
