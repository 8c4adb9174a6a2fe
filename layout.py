"""Presentation adapter: turn a finished maze into scene placements.

Nothing in here knows about carving. Every function is a pure mapping from
cell coordinates and wall flags to positions, numpy wall grids or a JSON
layout that a renderer (or a game engine) can consume.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from cell import Cell, Coord, Side
from generator import LAYOUT_PATH, InvalidConfiguration, Maze, validate_size

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]

FLOOR = "floor"
WALL = "wall"

# Wall offsets from the cell centre; top and bottom walls are turned 90 degrees
WALL_OFFSETS: Dict[Side, Tuple[Vec3, int]] = {
    Side.TOP: ((0.0, 0.5, 0.5), 90),
    Side.RIGHT: ((0.5, 0.5, 0.0), 0),
    Side.BOTTOM: ((0.0, 0.5, -0.5), 90),
    Side.LEFT: ((-0.5, 0.5, 0.0), 0),
}


@dataclass
class Placement:
    kind: str                    # FLOOR or WALL
    coord: Coord                 # grid index of the owning cell
    position: Vec3               # world position
    rotation: int = 0            # degrees around the vertical axis
    side: Optional[str] = None   # wall side name, None for floors


def cell_position(coord: Coord) -> Vec3:
    """World position of a cell: x to the right, rows going towards -z."""
    x, y = coord
    return (float(x), 0.0, float(-y))


def wall_position(coord: Coord, side: Side) -> Tuple[Vec3, int]:
    offset, rotation = WALL_OFFSETS[Side(side)]
    px, py, pz = cell_position(coord)
    return (px + offset[0], py + offset[1], pz + offset[2]), rotation


def build_placements(maze: Maze) -> List[Placement]:
    """One floor per cell, one wall per closed flag.

    Cells only carry the walls they own, so each physical wall is emitted
    exactly once and an ``N x N`` maze yields ``(N + 1) ** 2`` walls.
    """
    placements = []
    for cell in maze.cells():
        placements.append(Placement(FLOOR, cell.coord, cell_position(cell.coord)))
        for side in Side:
            if cell.walls[side]:
                position, rotation = wall_position(cell.coord, side)
                placements.append(Placement(WALL, cell.coord, position, rotation, side.name.lower()))
    return placements


def to_wall_grids(maze: Maze) -> Tuple[np.ndarray, np.ndarray]:
    """Horizontal ``(N+1, N)`` and vertical ``(N, N+1)`` wall grids, indexed ``[row, col]``."""
    n = maze.size
    h_walls = np.zeros((n + 1, n), dtype=bool)
    v_walls = np.zeros((n, n + 1), dtype=bool)

    for y in range(n):
        for x in range(n):
            h_walls[y, x] = maze.has_wall((x, y), Side.TOP)
            v_walls[y, x] = maze.has_wall((x, y), Side.LEFT)
        v_walls[y, n] = maze.has_wall((n - 1, y), Side.RIGHT)
    for x in range(n):
        h_walls[n, x] = maze.has_wall((x, n - 1), Side.BOTTOM)

    return h_walls, v_walls


def wall_grids_to_occupancy(h_walls: np.ndarray, v_walls: np.ndarray) -> np.ndarray:
    """Convert wall grids to an occupancy grid (1=wall, 0=free space)"""
    rows, cols = v_walls.shape[0], h_walls.shape[1]
    occ = np.ones((rows * 2 + 1, cols * 2 + 1), dtype=int)

    for r in range(rows):
        for c in range(cols):
            occ[2*r + 1, 2*c + 1] = 0               # cell center is free
            if not h_walls[r, c]:     occ[2*r,     2*c + 1] = 0   # north opening
            if not h_walls[r + 1, c]: occ[2*r + 2, 2*c + 1] = 0   # south opening
            if not v_walls[r, c]:     occ[2*r + 1, 2*c    ] = 0   # west opening
            if not v_walls[r, c + 1]: occ[2*r + 1, 2*c + 2] = 0   # east opening

    return occ


def export_maze_layout(maze: Maze, path: Path = LAYOUT_PATH) -> None:
    """Write the maze and its placements to a JSON file."""
    layout = {
        "size": maze.size,
        "cells": [
            {"coord": list(cell.coord), "walls": [bool(w) for w in cell.walls]}
            for cell in maze.cells()
        ],
        "placements": [asdict(p) for p in build_placements(maze)],
    }
    with open(path, "w", encoding="utf8") as f:
        json.dump(layout, f, separators=(',', ':'))
    logger.info("Layout written to %s (%d cells)", path, len(layout["cells"]))


def load_maze_layout(path: Path = LAYOUT_PATH) -> Maze:
    """Rebuild a read-only :class:`Maze` from a file written by :func:`export_maze_layout`.

    Raises:
        InvalidConfiguration: the file is not a complete maze layout
    """
    with open(path, "r", encoding="utf8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidConfiguration(f"{path} is not valid JSON: {e}") from e

    try:
        size = validate_size(data["size"])
        entries = data["cells"]
    except (KeyError, TypeError) as e:
        raise InvalidConfiguration(f"{path} is missing maze data: {e}") from e
    if not isinstance(entries, list):
        raise InvalidConfiguration(f"{path}: 'cells' must be a list, got {type(entries).__name__}")

    cells: Dict[Coord, Cell] = {}
    for entry in entries:
        try:
            x, y = (int(v) for v in entry["coord"])
            walls = entry["walls"]
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfiguration(f"bad cell entry {entry!r}") from e
        # Exactly four real booleans, no truthy stand-ins
        if not isinstance(walls, list) or len(walls) != 4 or not all(isinstance(w, bool) for w in walls):
            raise InvalidConfiguration(f"bad walls in cell entry {entry!r}")
        if not (0 <= x < size and 0 <= y < size):
            raise InvalidConfiguration(f"cell {(x, y)} outside a {size}x{size} grid")
        cell = Cell((x, y), visited=True)
        cell.walls = tuple(walls)
        cell.freeze()
        cells[(x, y)] = cell

    if len(cells) != size * size:
        raise InvalidConfiguration(f"expected {size * size} cells, found {len(cells)}")

    grid = tuple(tuple(cells[(x, y)] for y in range(size)) for x in range(size))
    return Maze(size, grid)
