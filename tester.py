#!/usr/bin/env python3
"""Simple validator for the maze generator.

The script builds a maze with :class:`generator.MazeBuilder` using the
provided parameters and performs a series of sanity checks on the result:

* Every cell was visited.
* Exactly ``size * size - 1`` walls were carved and they form a tree
  (connected and acyclic).
* Each shared wall is stored only on the cell that owns it.
* The top row and left column are sealed.
* The scene layout contains ``(size + 1) ** 2`` wall pieces.
"""

from __future__ import annotations

import argparse
import logging
from collections import deque
from typing import Dict, Sequence

import generator
from cell import Coord, Side
from layout import WALL, build_placements


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate generated maze")
    parser.add_argument("size", type=int, help="Grid side length")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Log every carving step")
    return parser.parse_args(argv)


def find(parent: Dict[Coord, Coord], node: Coord) -> Coord:
    while parent[node] != node:
        parent[node] = parent[parent[node]]
        node = parent[node]
    return node


def is_acyclic(maze: generator.Maze) -> bool:
    """Union-find over the passages; joining two already-linked cells means a cycle."""
    parent = {cell.coord: cell.coord for cell in maze.cells()}
    for a, b in maze.passages():
        ra, rb = find(parent, a), find(parent, b)
        if ra == rb:
            return False
        parent[ra] = rb
    return True


def reachable(maze: generator.Maze, start: Coord = (0, 0)) -> int:
    """Number of cells reachable from ``start`` following open walls."""
    seen = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for nxt in maze.open_neighbors(current):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return len(seen)


def mirror_flags_consistent(maze: generator.Maze) -> bool:
    """Check the raw flags on both sides of every shared wall.

    The owner (left or upper cell) holds the wall and the neighbour's facing
    flag stays open, so the two agree whenever the wall was carved.
    """
    for cell in maze.cells():
        for side in (Side.RIGHT, Side.BOTTOM):
            dx, dy = side.delta
            nxt = (cell.x + dx, cell.y + dy)
            if not maze.in_bounds(nxt):
                continue
            # Carving clears both flags; a closed mirror means a stray write
            if maze.cell(nxt).walls[side.opposite]:
                return False
    return True


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s")

    try:
        maze = generator.generate_maze(args.size, seed=args.seed)
    except generator.InvalidConfiguration as e:
        print(f"Error: {e}")
        return 1

    size = maze.size
    cell_count = size * size

    unvisited = sum(1 for cell in maze.cells() if not cell.visited)
    assert unvisited == 0, f"{unvisited} cells were never visited"

    passages = len(maze.passages())
    assert passages == cell_count - 1, f"expected {cell_count - 1} passages, got {passages}"
    assert is_acyclic(maze), "passages contain a cycle"

    seen = reachable(maze)
    assert seen == cell_count, f"only {seen} of {cell_count} cells reachable"

    assert mirror_flags_consistent(maze), "a shared wall is stored on the wrong side"

    for x in range(size):
        assert maze.cell((x, 0)).walls[Side.TOP], f"top border open at column {x}"
    for y in range(size):
        assert maze.cell((0, y)).walls[Side.LEFT], f"left border open at row {y}"

    walls = sum(1 for p in build_placements(maze) if p.kind == WALL)
    assert walls == (size + 1) ** 2, f"expected {(size + 1) ** 2} wall pieces, got {walls}"

    print("All checks passed. Generated", cell_count, "cells with", passages, "passages.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
