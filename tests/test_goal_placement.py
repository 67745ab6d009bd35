import random

from mazeswipe.maze import generate, is_reachable, place_goal, wander_goal
from mazeswipe.maze.goal import corner_candidates
from tests.maze_test_utils import grid_from


def test_goal_prefers_corners_on_generated_maze():
    for seed in range(20):
        g = generate(21, 21, seed)
        goal = place_goal(g, (1, 1), random.Random(seed))
        assert goal in corner_candidates(g)
        assert goal != (1, 1)
        assert g.is_open(goal)
        assert is_reachable(g, (1, 1), goal)


def test_goal_never_player_cell_from_anywhere():
    g = generate(9, 9, seed=8)
    r = random.Random(5)
    for player in g.open_cells():
        goal = place_goal(g, player, r)
        assert goal != player
        assert g.is_open(goal)
        assert is_reachable(g, player, goal)


def test_corner_order_is_randomized():
    g = generate(21, 21, seed=3)
    seen = {place_goal(g, (1, 1), random.Random(s)) for s in range(40)}
    assert len(seen) > 1


def test_fallback_to_reachable_interior_cell():
    g = grid_from(
        """
        #####
        #.###
        #.###
        ##..#
        #####
        """
    )
    # (3,3) is an open corner but unreachable; (2,1) is the only reachable option
    assert place_goal(g, (1, 1), random.Random(0)) == (2, 1)


def test_fallback_to_unreachable_when_nothing_reachable(capsys):
    g = grid_from(
        """
        #####
        #.###
        #####
        ##..#
        #####
        """
    )
    goal = place_goal(g, (1, 1), random.Random(0))
    assert goal in {(3, 2), (3, 3)}
    assert "goal_fallback" in capsys.readouterr().out


def test_fixed_default_when_only_player_open(capsys):
    g = grid_from(
        """
        #####
        #.###
        #####
        #####
        #####
        """
    )
    assert place_goal(g, (1, 1), random.Random(0)) == (3, 3)
    out = capsys.readouterr().out
    assert "policy=fixed" in out
    lone = grid_from(
        """
        #####
        #####
        #####
        ###.#
        #####
        """
    )
    assert place_goal(lone, (3, 3), random.Random(0)) == (1, 1)


def test_wander_stays_on_open_cells_and_off_player():
    g = generate(11, 11, seed=21)
    r = random.Random(2)
    goal = (9, 9)
    player = (9, 8) if g.is_open((9, 8)) else (8, 9)
    for _ in range(200):
        goal = wander_goal(g, goal, player, r)
        assert g.is_open(goal)
        assert goal != player


def test_wander_moves_one_step_at_most():
    g = generate(11, 11, seed=21)
    r = random.Random(9)
    goal = (1, 1)
    for _ in range(100):
        nxt = wander_goal(g, goal, (99, 99), r)
        assert abs(nxt[0] - goal[0]) + abs(nxt[1] - goal[1]) <= 1
        goal = nxt
