import sys
import os
import math

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from pathplanner.planning.exceptions import InvalidInputError
from pathplanner.planning.global_planner.heuristics import GridHeuristics


class TestGridHeuristics:

    def test_auto_selection(self):

        assert GridHeuristics({}).heuristic_type == "manhattan"
        assert GridHeuristics({"diagonal_connectivity": True}).heuristic_type == "euclidean"

    def test_distances(self):

        start, goal = (0, 0), (3, 4)

        manhattan = GridHeuristics({"heuristic_type": "manhattan"})
        euclidean = GridHeuristics({"heuristic_type": "euclidean"})
        octile = GridHeuristics({"heuristic_type": "octile"})
        zero = GridHeuristics({"heuristic_type": "zero"})

        assert manhattan.compute_heuristic(start, goal) == 7.0
        assert euclidean.compute_heuristic(start, goal) == 5.0
        assert octile.compute_heuristic(start, goal) == pytest.approx(1 + 3 * math.sqrt(2))
        assert zero.compute_heuristic(start, goal) == 0.0

    def test_manhattan_rejected_with_diagonal_moves(self):

        with pytest.raises(InvalidInputError, match="overestimates"):
            GridHeuristics({"diagonal_connectivity": True, "heuristic_type": "manhattan"})

    def test_unknown_heuristic(self):

        with pytest.raises(InvalidInputError, match="Unknown heuristic"):
            GridHeuristics({"heuristic_type": "chebyshev_plus"})

    def test_heuristic_name_is_case_insensitive(self):

        assert GridHeuristics({"heuristic_type": "Euclidean"}).heuristic_type == "euclidean"

    def test_admissibility_four_connected(self):

        results = GridHeuristics({}).validate_admissibility((10, 10))

        assert all(results.values())

    def test_admissibility_eight_connected(self):

        results = GridHeuristics({"diagonal_connectivity": True}).validate_admissibility((10, 10))

        assert results["manhattan"] is False
        assert results["euclidean"] is True
        assert results["octile"] is True
        assert results["zero"] is True

    def test_heuristic_info(self):

        info = GridHeuristics({"diagonal_connectivity": True}).get_heuristic_info()

        assert info["heuristic_type"] == "euclidean"
        assert info["diagonal_connectivity"] is True
        assert "manhattan" not in info["admissible_heuristics"]
        assert info["properties"]["informed"] is True
