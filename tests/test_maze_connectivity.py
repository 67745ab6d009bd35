import pytest

from mazeswipe.maze import MazeDisconnectedError, flood_open, generate, is_reachable, verify_connected
from mazeswipe.maze.connectivity import is_perfect
from tests.maze_test_utils import grid_from

SPLIT = grid_from(
    """
    #######
    #...#.#
    #.#.#.#
    #.#...#
    #.#####
    #######
    #######
    """
)

TWO_ROOMS = grid_from(
    """
    #####
    #.###
    #.###
    ##..#
    #####
    """
)


def test_self_reachable_for_every_open_cell():
    g = generate(9, 9, seed=4)
    for cell in g.open_cells():
        assert is_reachable(g, cell, cell)


def test_wall_and_out_of_bounds_never_reachable():
    g = generate(9, 9, seed=4)
    assert not is_reachable(g, (0, 0), (1, 1))
    assert not is_reachable(g, (1, 1), (0, 0))
    assert not is_reachable(g, (1, 1), (50, 50))
    assert not is_reachable(g, (0, 0), (0, 0))


def test_every_open_cell_reaches_every_other():
    g = generate(7, 7, seed=12)
    cells = list(g.open_cells())
    for a in cells:
        for b in cells:
            assert is_reachable(g, a, b)


def test_reachability_follows_corridors():
    assert is_reachable(SPLIT, (1, 1), (1, 5))
    assert is_reachable(SPLIT, (4, 1), (3, 5))


def test_disconnected_regions():
    assert not is_reachable(TWO_ROOMS, (1, 1), (3, 3))
    assert is_reachable(TWO_ROOMS, (3, 2), (3, 3))
    assert flood_open(TWO_ROOMS, (1, 1)) == {(1, 1), (2, 1)}
    assert flood_open(TWO_ROOMS, (0, 0)) == set()


def test_verify_connected_raises_assertion_class():
    with pytest.raises(MazeDisconnectedError) as exc:
        verify_connected(TWO_ROOMS)
    assert isinstance(exc.value, AssertionError)
    assert exc.value.unreachable == 2
    assert exc.value.total == 4


def test_cycle_is_not_perfect():
    looped = grid_from(
        """
        #####
        #...#
        #.#.#
        #...#
        #####
        """
    )
    verify_connected(looped)
    assert not is_perfect(looped)
    assert is_perfect(generate(5, 5, seed=1))
