"""Structural maze generation: randomized depth-first backtracking on a lattice."""
from __future__ import annotations

import random
import time
from typing import Dict, List, Optional, Tuple

from .cells import MazeGrid
from .config import validate_dimensions
from .metrics import init_metrics

Lattice = Tuple[int, int]

# Lattice steps in enumeration order: up, down, left, right.
LATTICE_STEPS: Tuple[Lattice, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class MazeGenerator:
    """Carve a perfect maze (spanning tree over the lattice) into an odd grid.

    Lattice cell ``(i, j)`` lives at grid ``(2i+1, 2j+1)``; the connector
    between two neighbouring lattice cells sits halfway between them. The
    random source is injected so a given seed always yields the same maze.
    """

    def __init__(self, rows: int, cols: int, rng: random.Random):
        validate_dimensions(rows, cols)
        self.rows = rows
        self.cols = cols
        self.rng = rng
        self.metrics: Dict[str, int | float] = init_metrics()

    @property
    def lattice_size(self) -> Tuple[int, int]:
        return (self.rows - 1) // 2, (self.cols - 1) // 2

    def init_grid(self) -> List[List[bool]]:
        return [[False for _ in range(self.cols)] for _ in range(self.rows)]

    @staticmethod
    def to_grid(cell: Lattice) -> Tuple[int, int]:
        i, j = cell
        return 2 * i + 1, 2 * j + 1

    def unvisited_neighbors(self, cell: Lattice, visited: List[List[bool]]) -> List[Lattice]:
        lr, lc = self.lattice_size
        i, j = cell
        out = []
        for di, dj in LATTICE_STEPS:
            ni, nj = i + di, j + dj
            if 0 <= ni < lr and 0 <= nj < lc and not visited[ni][nj]:
                out.append((ni, nj))
        return out

    def carve(self, cells: List[List[bool]]) -> None:
        lr, lc = self.lattice_size
        visited = [[False for _ in range(lc)] for _ in range(lr)]
        start: Lattice = (0, 0)
        visited[0][0] = True
        sr, sc = self.to_grid(start)
        cells[sr][sc] = True
        stack = [start]
        self.metrics['lattice_cells'] = lr * lc
        while stack:
            self.metrics['max_stack_depth'] = max(self.metrics['max_stack_depth'], len(stack))
            current = stack[-1]
            options = self.unvisited_neighbors(current, visited)
            if not options:
                stack.pop()
                self.metrics['backtracks'] += 1
                continue
            chosen = self.rng.choice(options)
            cr, cc = self.to_grid(current)
            nr, nc = self.to_grid(chosen)
            # remove the wall between
            cells[(cr + nr) // 2][(cc + nc) // 2] = True
            cells[nr][nc] = True
            visited[chosen[0]][chosen[1]] = True
            self.metrics['connectors_carved'] += 1
            stack.append(chosen)

    def force_anchors(self, cells: List[List[bool]]) -> None:
        cells[1][1] = True
        cells[self.rows - 2][self.cols - 2] = True

    def run(self) -> MazeGrid:
        start = time.perf_counter()
        cells = self.init_grid()
        self.carve(cells)
        self.force_anchors(cells)
        grid = MazeGrid.from_matrix(cells)
        self.metrics['open_cells'] = grid.open_count()
        self.metrics['dead_ends'] = sum(1 for cell in grid.open_cells() if len(grid.open_neighbors(cell)) == 1)
        self.metrics['runtime_ms'] = round((time.perf_counter() - start) * 1000, 3)
        return grid


def generate(rows: int, cols: int, seed: Optional[int] = None, *, rng: Optional[random.Random] = None) -> MazeGrid:
    """Generate a maze; ``rng`` wins over ``seed`` when both are given."""
    r = rng or random.Random(seed)
    return MazeGenerator(rows, cols, r).run()


__all__ = ["MazeGenerator", "generate"]
