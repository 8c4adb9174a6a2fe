#!/usr/bin/env python3
"""Perfect maze generation with a randomized depth-first backtracker.

``MazeBuilder`` owns an ``size x size`` grid of :class:`cell.Cell`, carves a
spanning tree through it and hands the finished grid over as a read-only
:class:`Maze`.
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from cell import DELTAS, Cell, Coord, Side, side_between

logger = logging.getLogger(__name__)

LAYOUT_PATH = Path("maze_layout.json")


class MazeError(Exception):
    """Base class for maze builder errors."""


class InvalidConfiguration(MazeError, ValueError):
    """Raised for a size the builder cannot work with, or malformed layout data."""


class MazeAlreadyGenerated(MazeError, RuntimeError):
    """Raised when ``generate()`` is called twice on the same builder."""


@dataclass
class MazeConfig:
    """Parameters of a single maze build."""
    size: int = 10                 # grid is size x size
    seed: Optional[int] = None     # None = non-reproducible


def validate_size(size) -> int:
    # bool is an int subclass but never a meaningful size
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidConfiguration(f"maze size must be an integer, got {size!r}")
    if size < 1:
        raise InvalidConfiguration(f"maze size must be at least 1, got {size}")
    return size


def allocate(size: int) -> List[List[Cell]]:
    """Build a fresh ``grid[x][y]`` with every cell at its default walls."""
    validate_size(size)
    return [[Cell((x, y)) for y in range(size)] for x in range(size)]


@dataclass(frozen=True)
class Maze:
    """Read-only view over a finished grid."""

    size: int
    grid: Tuple[Tuple[Cell, ...], ...]

    def cell(self, coord: Coord) -> Cell:
        x, y = coord
        return self.grid[x][y]

    def cells(self) -> Iterator[Cell]:
        for column in self.grid:
            yield from column

    def in_bounds(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self.size and 0 <= y < self.size

    def has_wall(self, coord: Coord, side: Side) -> bool:
        """Whether the wall on ``side`` of ``coord`` is closed.

        Shared walls are read through the cell that owns them (the left cell
        for vertical walls, the upper cell for horizontal ones), so both cells
        next to a wall always report the same value.
        """
        x, y = coord
        side = Side(side)
        if side == Side.TOP and y > 0:
            return self.grid[x][y - 1].walls[Side.BOTTOM]
        if side == Side.LEFT and x > 0:
            return self.grid[x - 1][y].walls[Side.RIGHT]
        return self.grid[x][y].walls[side]

    def open_neighbors(self, coord: Coord) -> List[Coord]:
        """Adjacent coordinates reachable from ``coord`` without crossing a wall."""
        result = []
        for side, (dx, dy) in DELTAS.items():
            nxt = (coord[0] + dx, coord[1] + dy)
            if self.in_bounds(nxt) and not self.has_wall(coord, side):
                result.append(nxt)
        return result

    def passages(self) -> List[Tuple[Coord, Coord]]:
        """Every carved wall as a ``(cell, right-or-lower neighbour)`` pair."""
        edges = []
        for cell in self.cells():
            for side in (Side.RIGHT, Side.BOTTOM):
                dx, dy = side.delta
                nxt = (cell.x + dx, cell.y + dy)
                if self.in_bounds(nxt) and not cell.walls[side]:
                    edges.append((cell.coord, nxt))
        return edges


class MazeBuilder:
    def __init__(self, config: Optional[MazeConfig] = None,
                 rng: Optional[random.Random] = None):
        self.config = config or MazeConfig()
        # Fail before allocating anything
        self.size = validate_size(self.config.size)
        self.rng = rng if rng is not None else random.Random(self.config.seed)

        self.grid: List[List[Cell]] = allocate(self.size)
        # Coordinates to backtrack through
        self.stack: List[Coord] = []
        self.carved = 0
        self.maze: Optional[Maze] = None

    def neighbors(self, current: Coord) -> List[Coord]:
        """Unvisited neighbours of ``current`` in Top, Right, Bottom, Left order."""
        x, y = current
        result = []
        for dx, dy in DELTAS.values():
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.size and 0 <= ny < self.size and not self.grid[nx][ny].visited:
                result.append((nx, ny))
        return result

    def remove_walls(self, current: Coord, nxt: Coord) -> None:
        """Open the wall shared by two adjacent cells, on both of them."""
        side = side_between(current, nxt)
        self.grid[current[0]][current[1]].walls[side] = False
        self.grid[nxt[0]][nxt[1]].walls[side.opposite] = False
        self.carved += 1
        logger.debug("  >> carve %s %s -> %s", side.name.lower(), current, nxt)

    def generate(self) -> Maze:
        """Carve a spanning tree over the grid and return it as a :class:`Maze`.

        Raises:
            MazeAlreadyGenerated: the grid has already been carved
        """
        if self.maze is not None:
            raise MazeAlreadyGenerated("generate() can only run once per MazeBuilder")

        logger.info("Generating %dx%d maze (seed=%s)", self.size, self.size, self.config.seed)

        current: Coord = (0, 0)
        self.grid[0][0].visited = True

        while True:
            neighbours = self.neighbors(current)

            if neighbours:
                nxt = neighbours[self.rng.randrange(len(neighbours))]
                self.stack.append(current)
                self.remove_walls(current, nxt)
                self.grid[nxt[0]][nxt[1]].visited = True
                current = nxt
            elif self.stack:
                # Dead end, step back; the cell was visited on the way in
                current = self.stack.pop()
            else:
                break

        for column in self.grid:
            for cell in column:
                cell.freeze()

        self.maze = Maze(self.size, tuple(tuple(column) for column in self.grid))
        logger.info("Maze complete: %d walls carved", self.carved)
        return self.maze


def generate_maze(size: int = 10, seed: Optional[int] = None,
                  rng: Optional[random.Random] = None) -> Maze:
    """Shortcut for ``MazeBuilder(MazeConfig(size, seed), rng).generate()``."""
    return MazeBuilder(MazeConfig(size=size, seed=seed), rng=rng).generate()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a perfect maze")
    parser.add_argument("--size", type=int, default=MazeConfig.size, help="Grid side length")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output", type=Path, default=LAYOUT_PATH,
                        help="Where to write the JSON layout")
    parser.add_argument("--verbose", action="store_true", help="Log every carving step")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    # Presentation helpers depend on this module
    from layout import build_placements, export_maze_layout
    from render_maze import render_ascii_maze

    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s")

    print("=== Maze generator ===")
    try:
        builder = MazeBuilder(MazeConfig(size=args.size, seed=args.seed))
        maze = builder.generate()
        export_maze_layout(maze, args.output)
    except (MazeError, OSError) as e:
        print(f"Error: {e}")
        return 1

    print(render_ascii_maze(maze))
    placements = build_placements(maze)
    walls = sum(1 for p in placements if p.kind == "wall")
    print(f"Size: {maze.size}x{maze.size}")
    print(f"Carved walls: {builder.carved}")
    print(f"Wall pieces: {walls}")
    print(f"Layout exported to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
