"""
Scene import/export.
A scene is a grid plus start and goal; persisted as JSON (or YAML) with
rows, cols, start {row, col}, goal {row, col} and grid [[{occupied, cost}]].
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union
from dataclasses import dataclass

import yaml

from pathplanner.planning.exceptions import InvalidInputError, SceneFormatError
from pathplanner.planning.global_planner.occupancy_grid import Cell, Coordinate, OccupancyGrid

logger = logging.getLogger(__name__)


@dataclass
class Scene:
    """Grid with a start and a goal cell."""
    grid: OccupancyGrid
    start: Coordinate
    goal: Coordinate

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def cols(self) -> int:
        return self.grid.cols


def _require(data: Mapping[str, Any], key: str, context: str) -> Any:
    if key not in data:
        raise SceneFormatError(f"Missing field '{key}' in {context}")
    return data[key]


def _parse_int(value: Any, context: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SceneFormatError(f"{context} must be an integer, got {value!r}")
    return value


def _parse_coordinate(data: Any, name: str) -> Coordinate:
    if not isinstance(data, Mapping):
        raise SceneFormatError(f"{name} must be an object with row and col, got {data!r}")

    # Legacy scene files use {r, c}
    row = data['row'] if 'row' in data else _require(data, 'r', name)
    col = data['col'] if 'col' in data else _require(data, 'c', name)

    return (_parse_int(row, f"{name}.row"), _parse_int(col, f"{name}.col"))


def _parse_cell(data: Any, row: int, col: int) -> Cell:
    context = f"grid[{row}][{col}]"
    if not isinstance(data, Mapping):
        raise SceneFormatError(f"{context} must be an object, got {data!r}")

    # Legacy scene files use {wall, weight}
    occupied = data['occupied'] if 'occupied' in data else _require(data, 'wall', context)
    cost = data['cost'] if 'cost' in data else _require(data, 'weight', context)

    if not isinstance(occupied, bool):
        raise SceneFormatError(f"{context}.occupied must be a boolean, got {occupied!r}")

    try:
        return Cell(occupied=occupied, cost=cost)
    except InvalidInputError as e:
        raise SceneFormatError(f"{context}: {e}") from e


def scene_from_dict(data: Mapping[str, Any]) -> Scene:
    """
    Validate and convert persisted scene data.

    Args:
        data: Parsed scene document

    Returns:
        Scene with a freshly built grid

    Raises:
        SceneFormatError: On missing fields or shape mismatches
    """
    if not isinstance(data, Mapping):
        raise SceneFormatError(f"Scene must be an object, got {type(data).__name__}")

    rows = _parse_int(_require(data, 'rows', 'scene'), 'rows')
    cols = _parse_int(_require(data, 'cols', 'scene'), 'cols')
    if rows < 1 or cols < 1:
        raise SceneFormatError(f"Scene dimensions must be positive, got {rows}x{cols}")

    cells = _require(data, 'grid', 'scene')
    if not isinstance(cells, list) or len(cells) != rows:
        raise SceneFormatError(f"grid must be a list of {rows} rows")

    parsed: List[List[Cell]] = []
    for r, row in enumerate(cells):
        if not isinstance(row, list) or len(row) != cols:
            raise SceneFormatError(f"grid row {r} must be a list of {cols} cells")
        parsed.append([_parse_cell(cell, r, c) for c, cell in enumerate(row)])

    start = _parse_coordinate(_require(data, 'start', 'scene'), 'start')
    goal = _parse_coordinate(_require(data, 'goal', 'scene'), 'goal')

    return Scene(grid=OccupancyGrid.from_cells(parsed), start=start, goal=goal)


def scene_to_dict(scene: Scene) -> Dict[str, Any]:
    return {
        'rows': scene.rows,
        'cols': scene.cols,
        'start': {'row': scene.start[0], 'col': scene.start[1]},
        'goal': {'row': scene.goal[0], 'col': scene.goal[1]},
        'grid': [[cell.to_dict() for cell in row] for row in scene.grid.to_cells()],
    }


def load_scene(path: Union[str, Path]) -> Scene:
    """Load a scene from a .json, .yaml or .yml file."""
    path = Path(path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SceneFormatError(f"Invalid scene file {path}: {e}") from e

    scene = scene_from_dict(data)
    logger.info(f"Scene loaded from {path}: {scene.rows}x{scene.cols}, "
                f"start={scene.start}, goal={scene.goal}")
    return scene


def save_scene(scene: Scene, path: Union[str, Path]) -> Path:
    """Write a scene; the format follows the file suffix (JSON by default)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = scene_to_dict(scene)

    with open(path, 'w', encoding='utf-8') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            yaml.safe_dump(data, f, default_flow_style=None, sort_keys=False)
        else:
            json.dump(data, f, indent=2)

    logger.info(f"Scene saved to {path}")
    return path
