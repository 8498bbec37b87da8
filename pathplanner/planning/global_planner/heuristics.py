import math
import logging
from typing import Any, Callable, Dict, Tuple

from pathplanner.planning.exceptions import InvalidInputError

Coordinate = Tuple[int, int]

SQRT2 = math.sqrt(2.0)

# Heuristics that never overestimate the cheapest route under each connectivity,
# given cell costs >= 1 and diagonal moves costing sqrt(2) x cell cost
ADMISSIBLE_HEURISTICS = {
    False: ("manhattan", "euclidean", "octile", "zero"),
    True: ("euclidean", "octile", "zero"),
}


class GridHeuristics:

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.logger = logging.getLogger(__name__)

        self.diagonal = bool(config.get("diagonal_connectivity", False))
        requested = str(config.get("heuristic_type", "auto")).lower()

        self.heuristic_functions: Dict[str, Callable[[Coordinate, Coordinate], float]] = {
            "manhattan": self._manhattan_distance,
            "euclidean": self._euclidean_distance,
            "octile": self._octile_distance,
            "zero": self._zero,
        }

        if requested == "auto":
            requested = self.default_for(self.diagonal)

        if requested not in self.heuristic_functions:
            raise InvalidInputError(
                f"Unknown heuristic type: {requested}, "
                f"expected one of {sorted(self.heuristic_functions)} or 'auto'"
            )

        if requested not in ADMISSIBLE_HEURISTICS[self.diagonal]:
            connectivity = "8-connected" if self.diagonal else "4-connected"
            raise InvalidInputError(
                f"Heuristic {requested} overestimates step cost on a {connectivity} grid"
            )

        self.heuristic_type = requested
        self.heuristic_func = self.heuristic_functions[requested]

        self.logger.debug(
            f"Grid heuristic {self.heuristic_type} "
            f"({'8' if self.diagonal else '4'}-connectivity)"
        )

    @staticmethod
    def default_for(diagonal: bool) -> str:
        return "euclidean" if diagonal else "manhattan"

    def compute_heuristic(self, current: Coordinate, goal: Coordinate) -> float:

        return self.heuristic_func(current, goal)

    def _manhattan_distance(self, current: Coordinate, goal: Coordinate) -> float:

        return float(abs(goal[0] - current[0]) + abs(goal[1] - current[1]))

    def _euclidean_distance(self, current: Coordinate, goal: Coordinate) -> float:

        return math.hypot(goal[0] - current[0], goal[1] - current[1])

    def _octile_distance(self, current: Coordinate, goal: Coordinate) -> float:

        dr = abs(goal[0] - current[0])
        dc = abs(goal[1] - current[1])

        return (max(dr, dc) - min(dr, dc)) + SQRT2 * min(dr, dc)

    def _zero(self, current: Coordinate, goal: Coordinate) -> float:

        return 0.0

    def validate_admissibility(self, grid_size: Tuple[int, int]) -> Dict[str, bool]:
        """
        Compare every heuristic with the exact cheapest cost on an empty unit-cost grid.

        Args:
            grid_size: (rows, cols) used to pick the test endpoints

        Returns:
            Heuristic name -> whether it stayed at or below the true cost
        """
        rows, cols = grid_size
        test_points = [
            ((0, 0), (rows - 1, cols - 1)),
            ((0, 0), (rows - 1, 0)),
            ((0, 0), (0, cols - 1)),
            ((rows - 1, 0), (0, cols - 1)),
            ((0, 0), (min(3, rows - 1), min(5, cols - 1))),
        ]

        results = {}

        for heuristic_name, heuristic_func in self.heuristic_functions.items():
            is_admissible = True

            for start, goal in test_points:
                heuristic_cost = heuristic_func(start, goal)
                true_cost = self._calculate_true_minimum_cost(start, goal)

                if heuristic_cost > true_cost + 1e-9:
                    is_admissible = False
                    self.logger.debug(
                        f"Heuristic {heuristic_name} overestimates: "
                        f"{heuristic_cost:.3f} > {true_cost:.3f}"
                    )
                    break

            results[heuristic_name] = is_admissible

        return results

    def _calculate_true_minimum_cost(self, start: Coordinate, goal: Coordinate) -> float:

        if self.diagonal:
            return self._octile_distance(start, goal)

        return self._manhattan_distance(start, goal)

    def get_heuristic_info(self) -> Dict[str, Any]:

        return {
            "heuristic_type": self.heuristic_type,
            "diagonal_connectivity": self.diagonal,
            "available_heuristics": list(self.heuristic_functions.keys()),
            "admissible_heuristics": list(ADMISSIBLE_HEURISTICS[self.diagonal]),
            "properties": {
                "admissible": True,
                "consistent": True,
                "informed": self.heuristic_type != "zero",
            },
        }
