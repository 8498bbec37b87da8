from typing import Any, Dict, List, Tuple
from dataclasses import dataclass, field

Coordinate = Tuple[int, int]


@dataclass
class PlanningResult:
    """Result of a single planning run."""
    visited: List[Coordinate] = field(default_factory=list)  # Exploration order, append-only
    path: List[Coordinate] = field(default_factory=list)     # Start..goal inclusive, empty on failure
    algorithm: str = ""
    success: bool = False
    total_cost: float = float('inf')
    nodes_expanded: int = 0
    planning_time: float = 0.0

    @property
    def path_length(self) -> int:
        return len(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'algorithm': self.algorithm,
            'success': self.success,
            'total_cost': self.total_cost,
            'nodes_expanded': self.nodes_expanded,
            'planning_time': self.planning_time,
            'visited': [list(coord) for coord in self.visited],
            'path': [list(coord) for coord in self.path],
        }
