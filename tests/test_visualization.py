import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from pathplanner.planning import OccupancyGrid, plan
from pathplanner.utils.visualization import GridVisualizer


class TestGridVisualizer:

    @pytest.fixture
    def grid(self):

        grid = OccupancyGrid(6, 8)
        grid.set_occupied((2, 3))
        grid.set_cost((4, 4), 9)
        return grid

    def test_plot_result_saves_file(self, grid, tmp_path):

        visualizer = GridVisualizer({'output_dir': str(tmp_path)})
        result = plan(grid, (0, 0), (5, 7), "astar")

        fig = visualizer.plot_result(grid, result, (0, 0), (5, 7), save_name="astar.png")

        assert (tmp_path / "astar.png").exists()
        assert "astar" in fig.axes[0].get_title()
        plt.close(fig)

    def test_plot_failed_result(self, grid, tmp_path):

        grid.set_occupied((5, 6))
        grid.set_occupied((4, 7))
        grid.set_occupied((4, 6))
        visualizer = GridVisualizer({'output_dir': str(tmp_path), 'save_plots': False})
        result = plan(grid, (0, 0), (5, 7), "dijkstra")

        fig = visualizer.plot_result(grid, result, (0, 0), (5, 7), save_name="unused.png")

        assert "no path" in fig.axes[0].get_title()
        assert not (tmp_path / "unused.png").exists()
        plt.close(fig)
