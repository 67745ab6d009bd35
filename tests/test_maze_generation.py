"""Maze generation invariant tests.

Invariants covered:
1. Every open cell is reachable from (1,1) and the open cells form a tree
   (spanning tree over the lattice: lattice cells + lattice cells - 1 connectors).
2. The border is solid wall and both anchors are open.
3. Same seed -> same maze.
4. Degenerate sizes are rejected.
"""

import random

import pytest

from mazeswipe.maze import InvalidDimensionsError, MazeGenerator, generate, is_perfect
from mazeswipe.maze.connectivity import count_open_edges, is_connected

SIZES = [(5, 5), (5, 9), (7, 7), (11, 21), (21, 21)]


@pytest.mark.parametrize("rows,cols", SIZES)
def test_spanning_tree_property(rows, cols):
    for seed in (1, 2, 3, 40, 555):
        g = generate(rows, cols, seed)
        lattice = ((rows - 1) // 2) * ((cols - 1) // 2)
        assert g.open_count() == lattice + (lattice - 1), f"seed {seed} open count"
        assert is_connected(g)
        assert count_open_edges(g) == g.open_count() - 1
        assert is_perfect(g)


def test_five_by_five_scenario():
    g = generate(5, 5, seed=2024)
    lattice_open = [(r, c) for r in (1, 3) for c in (1, 3)]
    assert all(g.is_open(cell) for cell in lattice_open)
    connectors = [cell for cell in g.open_cells() if cell not in lattice_open]
    assert len(connectors) == 3
    assert g.open_count() == 7
    assert g.wall_count() == 18


def test_border_is_wall_and_anchors_open():
    g = generate(21, 21, seed=9)
    for c in range(g.cols):
        assert g.is_wall((0, c)) and g.is_wall((g.rows - 1, c))
    for r in range(g.rows):
        assert g.is_wall((r, 0)) and g.is_wall((r, g.cols - 1))
    assert g.is_open((1, 1))
    assert g.is_open((g.rows - 2, g.cols - 2))


def test_even_lattice_coordinates_never_open():
    # Cells with both coordinates even sit between four lattice cells and stay solid.
    g = generate(15, 15, seed=77)
    for r in range(0, g.rows, 2):
        for c in range(0, g.cols, 2):
            assert g.is_wall((r, c))


def test_same_seed_same_maze():
    assert generate(21, 21, seed=7) == generate(21, 21, seed=7)
    assert generate(21, 21, rng=random.Random(7)) == generate(21, 21, seed=7)


def test_different_seeds_usually_differ():
    mazes = {str(generate(21, 21, seed=s)) for s in range(6)}
    assert len(mazes) > 1


@pytest.mark.parametrize(
    "rows,cols,field",
    [(4, 5, "rows"), (5, 6, "cols"), (3, 3, "rows"), (1, 21, "rows"), (21, 20, "cols"), (0, 0, "rows"), (7, 3, "cols")],
)
def test_invalid_dimensions_rejected(rows, cols, field):
    with pytest.raises(InvalidDimensionsError) as exc:
        generate(rows, cols, seed=1)
    assert exc.value.field == field


def test_generator_metrics():
    gen = MazeGenerator(11, 11, random.Random(3))
    g = gen.run()
    assert gen.metrics["lattice_cells"] == 25
    assert gen.metrics["connectors_carved"] == 24
    assert gen.metrics["open_cells"] == g.open_count() == 49
    assert gen.metrics["dead_ends"] >= 1
    assert 1 <= gen.metrics["max_stack_depth"] <= 25
    # every lattice cell is pushed once and popped once
    assert gen.metrics["backtracks"] == 25
