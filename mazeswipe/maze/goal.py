"""Goal placement and hard-mode goal wandering.

Placement prefers the four corner lattice cells (shuffled) and falls back to
any open cell reachable from the player. Wandering moves the goal at most
one open cell per step and never onto the player.
"""
from __future__ import annotations

import random
from typing import List, Optional

from mazeswipe.logging_utils import get_logger

from .cells import Cell, MazeGrid
from .connectivity import is_reachable

log = get_logger("mazeswipe.goal")


def corner_candidates(grid: MazeGrid) -> List[Cell]:
    rows, cols = grid.rows, grid.cols
    return [(1, 1), (1, cols - 2), (rows - 2, 1), (rows - 2, cols - 2)]


def default_goal(grid: MazeGrid, player_cell: Cell) -> Cell:
    fixed = (grid.rows - 2, grid.cols - 2)
    return fixed if fixed != player_cell else (1, 1)


def place_goal(grid: MazeGrid, player_cell: Cell, rng: Optional[random.Random] = None) -> Cell:
    """Return an open cell other than ``player_cell`` for the goal.

    Whenever some open cell other than the player's is reachable, the result
    is reachable from the player.
    """
    r = rng or random
    corners = corner_candidates(grid)
    r.shuffle(corners)
    for cell in corners:
        if cell != player_cell and grid.is_open(cell) and is_reachable(grid, player_cell, cell):
            return cell

    others = [cell for cell in grid.open_cells() if cell != player_cell]
    reachable = [cell for cell in others if is_reachable(grid, player_cell, cell)]
    if reachable:
        r.shuffle(reachable)
        log.info(event="goal_fallback", policy="reachable", candidates=len(reachable), goal=reachable[0])
        return reachable[0]
    if others:
        r.shuffle(others)
        log.warn(event="goal_fallback", policy="unreachable", candidates=len(others), goal=others[0])
        return others[0]
    cell = default_goal(grid, player_cell)
    log.warn(event="goal_fallback", policy="fixed", goal=cell, player=player_cell)
    return cell


def wander_goal(grid: MazeGrid, goal: Cell, player_cell: Cell, rng: Optional[random.Random] = None) -> Cell:
    """Single hard-mode step: stay put or move to an open neighbour (never the player)."""
    r = rng or random
    options = [goal] + [cell for cell in grid.open_neighbors(goal) if cell != player_cell]
    return r.choice(options)


__all__ = ["corner_candidates", "default_goal", "place_goal", "wander_goal"]
