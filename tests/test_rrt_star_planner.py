import sys
import os
import math

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
import numpy as np

from pathplanner.planning.exceptions import InvalidInputError
from pathplanner.planning.global_planner import OccupancyGrid
from pathplanner.planning.sampling_planner import (
    NO_PARENT,
    CollisionChecker,
    RRTStarPlanner,
    RRTStarTree,
)


class TestRRTStarTree:

    @pytest.fixture
    def tree(self):

        tree = RRTStarTree((0, 0), capacity=2)
        tree.add((0, 4), 0, 4.0)                       # 1
        tree.add((3, 4), 1, 7.0)                       # 2
        tree.add((3, 7), 2, 10.0)                      # 3
        return tree

    def test_root(self, tree):

        assert tree.nodes[0].parent == NO_PARENT
        assert tree.nodes[0].cost == 0.0
        assert len(tree) == 4

    def test_capacity_grows(self, tree):

        assert tree.nearest((3, 7)) == 3

    def test_nearest_prefers_earliest_on_ties(self):

        tree = RRTStarTree((0, 0))
        tree.add((0, 2), 0, 2.0)
        tree.add((0, 4), 1, 4.0)

        assert tree.nearest((0, 3)) == 1
        assert tree.nearest((0, 1)) == 0

    def test_near_uses_closed_radius(self, tree):

        assert tree.near((0, 0), 4.0) == [0, 1]
        assert tree.near((0, 0), 3.9) == [0]

    def test_path_to(self, tree):

        assert tree.path_to(3) == [(0, 0), (0, 4), (3, 4), (3, 7)]
        assert tree.path_to(0) == [(0, 0)]

    def test_reparent_shifts_subtree_costs(self, tree):

        tree.add((2, 2), 0, 2 * math.sqrt(2))          # 4
        new_cost = 2 * math.sqrt(2) + math.sqrt(5)

        tree.reparent(2, 4, new_cost)

        assert tree.nodes[2].parent == 4
        assert tree.nodes[2].cost == pytest.approx(new_cost)
        assert tree.nodes[3].cost == pytest.approx(new_cost + 3.0)
        assert tree.children[1] == []
        assert tree.children[4] == [2]
        assert tree.path_to(3) == [(0, 0), (2, 2), (3, 4), (3, 7)]


class TestRRTStarPlanner:

    @pytest.fixture
    def open_grid(self):

        return OccupancyGrid(10, 10)

    @pytest.fixture
    def config(self):

        return {'iterations': 2000, 'radius': 4.0, 'step': 2.0, 'goal_bias': 0.1, 'seed': 0}

    def test_reaches_goal_on_open_grid(self, open_grid, config):

        planner = RRTStarPlanner(config)
        result = planner.plan_path(open_grid, (0, 0), (9, 9))

        assert result.success
        assert result.algorithm == "rrt_star"
        assert result.path[0] == (0, 0)
        assert result.path[-1] == (9, 9)
        assert result.total_cost == pytest.approx(open_grid.path_cost(result.path))

    def test_waypoints_are_collision_free(self, config):

        grid = OccupancyGrid(12, 12)
        for row in range(9):
            grid.set_occupied((row, 6))

        planner = RRTStarPlanner(config)
        result = planner.plan_path(grid, (0, 0), (0, 11))
        checker = CollisionChecker(grid)

        assert result.success
        assert checker.is_path_free(result.path)
        max_gap = max(config['step'], config['radius'])
        for a, b in zip(result.path, result.path[1:]):
            assert math.hypot(b[0] - a[0], b[1] - a[1]) <= max_gap + 1e-9

    def test_visited_cells_are_free(self, config):

        grid = OccupancyGrid(10, 10)
        for col in range(2, 10):
            grid.set_occupied((5, col))

        result = RRTStarPlanner(config).plan_path(grid, (0, 9), (9, 9))

        assert result.visited[0] == (0, 9)
        assert all(grid.is_free(cell) for cell in result.visited)

    def test_straight_corridor(self):

        # With goal_bias 1 every sample is the goal, so the tree grows in fixed steps
        grid = OccupancyGrid(1, 10)
        planner = RRTStarPlanner({'iterations': 50, 'goal_bias': 1.0, 'step': 2.0, 'radius': 4.0})

        result = planner.plan_path(grid, (0, 0), (0, 9))

        assert result.success
        assert result.path == [(0, 0), (0, 2), (0, 4), (0, 6), (0, 8), (0, 9)]
        assert result.visited == [(0, 0), (0, 2), (0, 4), (0, 6), (0, 8)]
        assert result.total_cost == pytest.approx(9.0)

    def test_interpolated_path(self):

        grid = OccupancyGrid(1, 10)
        planner = RRTStarPlanner({'iterations': 50, 'goal_bias': 1.0, 'interpolate_path': True})

        result = planner.plan_path(grid, (0, 0), (0, 9))

        assert result.path == [(0, col) for col in range(10)]
        assert result.total_cost == pytest.approx(9.0)

    def test_interpolated_path_is_eight_connected(self, open_grid, config):

        config['interpolate_path'] = True
        result = RRTStarPlanner(config).plan_path(open_grid, (0, 0), (9, 9))

        assert result.success
        for (r0, c0), (r1, c1) in zip(result.path, result.path[1:]):
            assert max(abs(r1 - r0), abs(c1 - c0)) == 1

    def test_start_equals_goal(self, open_grid, config):

        result = RRTStarPlanner(config).plan_path(open_grid, (4, 4), (4, 4))

        assert result.success
        assert result.path == [(4, 4)]
        assert result.visited == [(4, 4)]
        assert result.total_cost == 0.0

    def test_zero_iterations(self, open_grid):

        result = RRTStarPlanner({'iterations': 0}).plan_path(open_grid, (0, 0), (9, 9))

        assert not result.success
        assert result.path == []
        assert result.visited == [(0, 0)]

    def test_enclosed_goal_unreachable(self, config):

        grid = OccupancyGrid(10, 10)
        for cell in [(8, 8), (8, 9), (9, 8)]:
            grid.set_occupied(cell)
        config['iterations'] = 300

        result = RRTStarPlanner(config).plan_path(grid, (0, 0), (9, 9))

        assert not result.success
        assert result.path == []
        assert math.isinf(result.total_cost)
        assert (9, 9) not in result.visited

    def test_occupied_endpoints_rejected(self, config):

        grid = OccupancyGrid(5, 5)
        grid.set_occupied((4, 4))

        with pytest.raises(InvalidInputError):
            RRTStarPlanner(config).plan_path(grid, (0, 0), (4, 4))
        with pytest.raises(InvalidInputError):
            RRTStarPlanner(config).plan_path(grid, (-1, 0), (3, 3))

    def test_same_seed_same_result(self, open_grid, config):

        first = RRTStarPlanner(config).plan_path(open_grid, (0, 0), (9, 9))
        second = RRTStarPlanner(config).plan_path(open_grid, (0, 0), (9, 9))

        assert first.visited == second.visited
        assert first.path == second.path

    def test_injected_generator(self, open_grid, config):

        del config['seed']
        first = RRTStarPlanner(config, rng=np.random.default_rng(3)).plan_path(open_grid, (0, 0), (9, 9))
        second = RRTStarPlanner(config, rng=np.random.default_rng(3)).plan_path(open_grid, (0, 0), (9, 9))

        assert first.path == second.path

    def test_steer(self):

        planner = RRTStarPlanner({'step': 2.0})

        assert planner._steer((0, 0), (0, 10)) == (0, 2)
        assert planner._steer((0, 0), (3, 4)) == (1, 2)
        assert planner._steer((5, 5), (6, 6)) == (6, 6)

    def test_rewire_lowers_costs(self):

        grid = OccupancyGrid(5, 8)
        tree = RRTStarTree((0, 0))
        tree.add((0, 4), 0, 4.0)
        tree.add((3, 4), 1, 7.0)
        tree.add((3, 7), 2, 10.0)
        new_index = tree.add((2, 2), 0, 2 * math.sqrt(2))

        planner = RRTStarPlanner({'radius': 4.0})
        planner._rewire(tree, new_index, grid, CollisionChecker(grid))

        expected = 2 * math.sqrt(2) + math.sqrt(5)
        assert tree.nodes[2].parent == new_index
        assert tree.nodes[2].cost == pytest.approx(expected)
        assert tree.nodes[3].cost == pytest.approx(expected + 3.0)
        assert tree.nodes[1].parent == 0
        assert planner.get_statistics()['rewires'] == 1

    def test_rewire_respects_walls(self):

        grid = OccupancyGrid(5, 8)
        grid.set_occupied((3, 3))
        tree = RRTStarTree((0, 0))
        tree.add((0, 4), 0, 4.0)
        tree.add((3, 4), 1, 7.0)
        new_index = tree.add((3, 1), 0, math.hypot(3, 1))

        planner = RRTStarPlanner({'radius': 4.0})
        planner._rewire(tree, new_index, grid, CollisionChecker(grid))

        assert tree.nodes[2].parent == 1

    @pytest.mark.parametrize("key,value", [
        ('iterations', -1),
        ('iterations', 2.5),
        ('step', 0),
        ('radius', -1.0),
        ('goal_bias', 1.5),
    ])
    def test_invalid_parameters(self, key, value):

        with pytest.raises(InvalidInputError):
            RRTStarPlanner({key: value})

    def test_statistics(self, open_grid, config):

        planner = RRTStarPlanner(config)
        planner.plan_path(open_grid, (0, 0), (9, 9))
        planner.plan_path(open_grid, (0, 0), (0, 0))

        stats = planner.get_statistics()

        assert stats['total_plans'] == 2
        assert stats['success_rate'] == 1.0
        assert stats['average_tree_size'] > 1
