"""
Planning integration module.
Dispatches planning requests to the grid search and sampling planners.
"""

from .planner_manager import Algorithm, PlannerManager, PlanningOptions, plan

__all__ = ['Algorithm', 'PlannerManager', 'PlanningOptions', 'plan']
