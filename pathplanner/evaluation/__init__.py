"""
Evaluation module.
Batch comparison of the planning algorithms.
"""

from .planner_benchmark import PlannerBenchmark

__all__ = ['PlannerBenchmark']
