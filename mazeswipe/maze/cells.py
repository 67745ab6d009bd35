"""Immutable maze grid value and cell coordinate helpers.

A grid is stored as a tuple of row strings, one character per cell
(``WALL`` or ``OPEN``). Coordinates are ``(row, col)`` pairs. Each round
builds a fresh grid; nothing mutates a grid after construction.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

from .tiles import OPEN, WALL

Cell = Tuple[int, int]

# 4-way adjacency (up, down, left, right) shared by every traversal.
NEIGHBOR_DELTAS: Tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True)
class MazeGrid:
    rows_data: Tuple[str, ...]

    def __post_init__(self):
        if not self.rows_data:
            raise ValueError("grid must have at least one row")
        width = len(self.rows_data[0])
        for idx, row in enumerate(self.rows_data):
            if len(row) != width:
                raise ValueError(f"row {idx} has width {len(row)}, expected {width}")
            bad = set(row) - {WALL, OPEN}
            if bad:
                raise ValueError(f"row {idx} contains unknown tiles {sorted(bad)}")

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "MazeGrid":
        return cls(tuple(rows))

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[bool]]) -> "MazeGrid":
        """Build a grid from a row-major matrix of open flags (True = open)."""
        return cls(tuple("".join(OPEN if cell else WALL for cell in row) for row in matrix))

    @property
    def rows(self) -> int:
        return len(self.rows_data)

    @property
    def cols(self) -> int:
        return len(self.rows_data[0])

    def in_bounds(self, cell: Cell) -> bool:
        r, c = cell
        return 0 <= r < self.rows and 0 <= c < self.cols

    def is_open(self, cell: Cell) -> bool:
        return self.in_bounds(cell) and self.rows_data[cell[0]][cell[1]] == OPEN

    def is_wall(self, cell: Cell) -> bool:
        # Out-of-bounds counts as wall for movement purposes.
        return not self.is_open(cell)

    def tile(self, cell: Cell) -> str:
        if not self.in_bounds(cell):
            raise IndexError(f"cell {cell} outside {self.rows}x{self.cols} grid")
        return self.rows_data[cell[0]][cell[1]]

    def open_cells(self) -> Iterator[Cell]:
        for r, row in enumerate(self.rows_data):
            for c, ch in enumerate(row):
                if ch == OPEN:
                    yield (r, c)

    def open_count(self) -> int:
        return sum(row.count(OPEN) for row in self.rows_data)

    def wall_count(self) -> int:
        return self.rows * self.cols - self.open_count()

    def open_neighbors(self, cell: Cell) -> List[Cell]:
        r, c = cell
        out = []
        for dr, dc in NEIGHBOR_DELTAS:
            nxt = (r + dr, c + dc)
            if self.is_open(nxt):
                out.append(nxt)
        return out

    def to_rows(self) -> List[str]:
        return list(self.rows_data)

    def __str__(self) -> str:
        return "\n".join(self.rows_data)


__all__ = ["Cell", "MazeGrid", "NEIGHBOR_DELTAS"]
