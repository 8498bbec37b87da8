"""
Grid Path Planner: Dijkstra, A* and RRT* on 2D occupancy grids.
Main package initialization.

Keep this file minimal to avoid circular imports.
Use direct imports from submodules instead.

Example:
    from pathplanner.planning import plan, Algorithm
    from pathplanner.scene import load_scene
"""

import logging

# Package version
__version__ = "1.0.0"
__author__ = "Grid Path Planner Team"
__description__ = "Grid-based path planning engine with Dijkstra, A* and RRT*"

# Library logger; applications configure handlers via pathplanner.utils.setup_logging
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = ['__version__', '__author__', '__description__']
