import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
import logging
from typing import Any, Dict, Optional, Sequence
from pathlib import Path

from pathplanner.planning.global_planner.occupancy_grid import Coordinate, OccupancyGrid
from pathplanner.planning.planning_result import PlanningResult


class GridVisualizer:
    """Static plots of a grid, a planner's visited cells and its path."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        self.figure_size = tuple(self.config.get('figure_size', (10, 7)))
        self.dpi = self.config.get('dpi', 100)
        self.save_plots = self.config.get('save_plots', True)
        self.output_dir = Path(self.config.get('output_dir', 'plots'))

        self.colors = {
            'wall': '#334155',
            'visited': '#0369a1',
            'path': '#34d399',
            'start': '#10b981',
            'goal': '#f43f5e',
        }
        self.colors.update(self.config.get('colors', {}))

        self.logger.debug("Grid Visualizer initialized")

    def plot_grid(self, grid: OccupancyGrid, ax: Optional[plt.Axes] = None) -> plt.Axes:
        """Draw cell costs as a heat map with walls on top."""
        if ax is None:
            _, ax = plt.subplots(figsize=self.figure_size, dpi=self.dpi)

        costs = np.ma.masked_where(grid.occupied, grid.cost)
        ax.imshow(costs, cmap='YlOrBr', vmin=1.0, vmax=max(float(grid.cost.max()), 2.0),
                  origin='upper', interpolation='nearest')

        walls = np.ma.masked_where(~grid.occupied, np.ones(grid.shape))
        ax.imshow(walls, cmap=ListedColormap([self.colors['wall']]),
                  origin='upper', interpolation='nearest')

        ax.set_xticks([])
        ax.set_yticks([])
        return ax

    def plot_result(self, grid: OccupancyGrid, result: PlanningResult,
                    start: Coordinate, goal: Coordinate,
                    save_name: Optional[str] = None) -> plt.Figure:
        """
        Plot the grid, the visited sequence and the path.

        Args:
            grid: Grid the result was planned on
            result: Planning result
            start: Start cell
            goal: Goal cell
            save_name: File name under output_dir; nothing is written when omitted

        Returns:
            Matplotlib figure
        """
        fig, ax = plt.subplots(figsize=self.figure_size, dpi=self.dpi)
        self.plot_grid(grid, ax)

        self._scatter(ax, result.visited, self.colors['visited'], size=12, alpha=0.35, label='Visited')

        if result.path:
            rows = [p[0] for p in result.path]
            cols = [p[1] for p in result.path]
            ax.plot(cols, rows, color=self.colors['path'], linewidth=2.5, label='Path')

        ax.scatter([start[1]], [start[0]], c=self.colors['start'], s=90, marker='o', label='Start')
        ax.scatter([goal[1]], [goal[0]], c=self.colors['goal'], s=120, marker='*', label='Goal')

        status = f"cost {result.total_cost:.2f}" if result.success else "no path"
        ax.set_title(f"{result.algorithm}: {len(result.visited)} visited, {status}")
        ax.legend(loc='upper right', fontsize='small')

        if save_name and self.save_plots:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            output_path = self.output_dir / save_name
            fig.savefig(output_path, bbox_inches='tight')
            self.logger.info(f"Plot saved to {output_path}")

        return fig

    def _scatter(self, ax: plt.Axes, cells: Sequence[Coordinate], color: str,
                 size: float, alpha: float, label: str):
        if not cells:
            return

        points = np.asarray(cells)
        ax.scatter(points[:, 1], points[:, 0], c=color, s=size, alpha=alpha, marker='s', label=label)
