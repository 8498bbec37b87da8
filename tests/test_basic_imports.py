"""
Basic import tests for the grid path planner.
These tests check that all modules can be imported without errors.
"""

import unittest
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


class TestBasicImports(unittest.TestCase):
    """Test that all main modules can be imported without errors."""

    def test_package_import(self):
        """Test importing main package."""
        try:
            import pathplanner

            self.assertIsNotNone(pathplanner.__version__)
        except ImportError as e:
            self.fail(f"Failed to import pathplanner: {e}")

    def test_planning_imports(self):
        """Test importing planning modules."""
        modules_to_test = [
            "pathplanner.planning",
            "pathplanner.planning.exceptions",
            "pathplanner.planning.planning_result",
            "pathplanner.planning.global_planner",
            "pathplanner.planning.global_planner.occupancy_grid",
            "pathplanner.planning.global_planner.priority_queue",
            "pathplanner.planning.global_planner.heuristics",
            "pathplanner.planning.global_planner.grid_search",
            "pathplanner.planning.global_planner.dijkstra_planner",
            "pathplanner.planning.global_planner.astar_planner",
            "pathplanner.planning.sampling_planner",
            "pathplanner.planning.sampling_planner.collision_checker",
            "pathplanner.planning.sampling_planner.rrt_star_planner",
            "pathplanner.planning.integration",
            "pathplanner.planning.integration.planner_manager",
        ]

        for module_name in modules_to_test:
            with self.subTest(module=module_name):
                try:
                    __import__(module_name)
                except ImportError as e:
                    self.fail(f"Failed to import {module_name}: {e}")

    def test_support_imports(self):
        """Test importing scene, evaluation and utility modules."""
        modules_to_test = [
            "pathplanner.scene",
            "pathplanner.scene.scene_io",
            "pathplanner.scene.scene_generator",
            "pathplanner.evaluation",
            "pathplanner.evaluation.planner_benchmark",
            "pathplanner.utils",
            "pathplanner.utils.config_loader",
            "pathplanner.utils.logger",
        ]

        for module_name in modules_to_test:
            with self.subTest(module=module_name):
                try:
                    __import__(module_name)
                except ImportError as e:
                    self.fail(f"Failed to import {module_name}: {e}")

    def test_public_entry_point(self):
        """The plan() entry point and algorithm selector are exported."""
        from pathplanner.planning import Algorithm, plan

        self.assertTrue(callable(plan))
        self.assertEqual({a.value for a in Algorithm}, {"dijkstra", "astar", "rrt_star"})


if __name__ == "__main__":
    unittest.main(verbosity=2)
