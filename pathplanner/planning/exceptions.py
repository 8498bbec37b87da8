"""
Planning exceptions.
Precondition violations raise; planning-time failures return an empty path.
"""


class PlanningError(Exception):
    """Base class for planning engine errors."""


class InvalidInputError(PlanningError, ValueError):
    """Caller-side precondition violation (bad grid, endpoint or option)."""


class UnknownAlgorithmError(PlanningError, ValueError):
    """Algorithm selector does not name a supported planner."""


class SceneFormatError(PlanningError, ValueError):
    """Scene data does not match the persisted scene format."""
