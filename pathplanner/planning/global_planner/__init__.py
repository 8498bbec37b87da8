"""
Global planning module.
Graph search (Dijkstra, A*) over a 2D occupancy grid.
"""

from .occupancy_grid import Cell, Coordinate, GridInfo, OccupancyGrid
from .priority_queue import PriorityQueue
from .heuristics import GridHeuristics
from .grid_search import GridSearchPlanner, SearchNode
from .dijkstra_planner import DijkstraPlanner
from .astar_planner import AStarPlanner

__all__ = [
    'Cell', 'Coordinate', 'GridInfo', 'OccupancyGrid',
    'PriorityQueue', 'GridHeuristics',
    'GridSearchPlanner', 'SearchNode', 'DijkstraPlanner', 'AStarPlanner',
]
