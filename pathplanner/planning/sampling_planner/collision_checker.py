import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence

from pathplanner.planning.global_planner.occupancy_grid import Coordinate, OccupancyGrid


def iter_line_cells(start: Coordinate, end: Coordinate) -> Iterator[Coordinate]:
    """
    Yield the cells crossed by the segment start -> end, both inclusive.

    Integer error-accumulation stepping (Bresenham); consecutive cells are 8-adjacent.
    """
    r0, c0 = start
    r1, c1 = end

    dr = abs(r1 - r0)
    dc = abs(c1 - c0)
    step_r = 1 if r0 < r1 else -1
    step_c = 1 if c0 < c1 else -1
    error = dr - dc

    while True:
        yield (r0, c0)
        if r0 == r1 and c0 == c1:
            return

        doubled = 2 * error
        if doubled > -dc:
            error -= dc
            r0 += step_r
        if doubled < dr:
            error += dr
            c0 += step_c


def rasterize_line(start: Coordinate, end: Coordinate) -> List[Coordinate]:
    return list(iter_line_cells(start, end))


class CollisionChecker:
    """Line-of-sight tests against a fixed occupancy grid."""

    def __init__(self, grid: OccupancyGrid, config: Optional[Dict[str, Any]] = None):
        self.grid = grid
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        self.checks_performed = 0
        self.collisions_detected = 0

    def is_point_free(self, coord: Coordinate) -> bool:

        return self.grid.is_free(coord)

    def is_segment_free(self, start: Coordinate, end: Coordinate) -> bool:
        """Reject on the first occupied (or out-of-bounds) cell along the segment."""
        self.checks_performed += 1

        for cell in iter_line_cells(start, end):
            if not self.grid.is_free(cell):
                self.collisions_detected += 1
                return False

        return True

    def is_path_free(self, path: Sequence[Coordinate]) -> bool:

        if not path:
            return False

        if len(path) == 1:
            return self.is_point_free(path[0])

        return all(self.is_segment_free(a, b) for a, b in zip(path, path[1:]))

    def get_statistics(self) -> Dict[str, int]:

        return {
            'checks_performed': self.checks_performed,
            'collisions_detected': self.collisions_detected,
        }
