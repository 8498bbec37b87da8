"""
Sampling-based planning module.
Discretized RRT* with Bresenham line-of-sight collision checking.
"""

from .collision_checker import CollisionChecker, iter_line_cells, rasterize_line
from .rrt_star_planner import NO_PARENT, RRTStarPlanner, RRTStarTree, TreeNode

__all__ = [
    'CollisionChecker', 'iter_line_cells', 'rasterize_line',
    'NO_PARENT', 'RRTStarPlanner', 'RRTStarTree', 'TreeNode',
]
