"""Reachability and structural validation over open maze cells.

Breadth-first flood fills used to validate goal placement and to assert the
perfect-maze property after generation. Never used to build paths.
"""
from __future__ import annotations

from collections import deque
from typing import Set

from .cells import NEIGHBOR_DELTAS, Cell, MazeGrid

START_CELL: Cell = (1, 1)


class MazeDisconnectedError(AssertionError):
    """Some open cell cannot be reached from the start cell.

    Generation guarantees connectivity, so this signals a programming error
    rather than a recoverable runtime condition.
    """

    def __init__(self, unreachable: int, total: int):
        super().__init__(f"{unreachable} of {total} open cells unreachable from start")
        self.unreachable = unreachable
        self.total = total


def is_reachable(grid: MazeGrid, start: Cell, goal: Cell) -> bool:
    if not grid.is_open(start) or not grid.is_open(goal):
        return False
    if start == goal:
        return True
    visited = {start}
    q = deque([start])
    while q:
        r, c = q.popleft()
        for dr, dc in NEIGHBOR_DELTAS:
            nxt = (r + dr, c + dc)
            if nxt in visited or not grid.is_open(nxt):
                continue
            if nxt == goal:
                return True
            visited.add(nxt)
            q.append(nxt)
    return False


def flood_open(grid: MazeGrid, start: Cell = START_CELL) -> Set[Cell]:
    if not grid.is_open(start):
        return set()
    visited = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in grid.open_neighbors(cur):
            if nxt not in visited:
                visited.add(nxt)
                q.append(nxt)
    return visited


def count_open_edges(grid: MazeGrid) -> int:
    """Number of orthogonally adjacent open pairs (each pair counted once)."""
    edges = 0
    for r, c in grid.open_cells():
        if grid.is_open((r + 1, c)):
            edges += 1
        if grid.is_open((r, c + 1)):
            edges += 1
    return edges


def is_connected(grid: MazeGrid, start: Cell = START_CELL) -> bool:
    return len(flood_open(grid, start)) == grid.open_count()


def is_perfect(grid: MazeGrid, start: Cell = START_CELL) -> bool:
    # A connected graph is a tree exactly when edges == nodes - 1.
    return is_connected(grid, start) and count_open_edges(grid) == grid.open_count() - 1


def verify_connected(grid: MazeGrid, start: Cell = START_CELL) -> None:
    total = grid.open_count()
    reached = len(flood_open(grid, start))
    if reached != total:
        raise MazeDisconnectedError(total - reached, total)


__all__ = [
    "MazeDisconnectedError",
    "START_CELL",
    "count_open_edges",
    "flood_open",
    "is_connected",
    "is_perfect",
    "is_reachable",
    "verify_connected",
]
