#!/usr/bin/env python3
"""Maze visualisation tools.

Reads the JSON layout written by ``generator.py`` and draws it either as
ASCII art, as a 2D wall plot or as a 3D scatter of the floor and wall
placements. Used for quickly previewing a generated maze.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np

from cell import Side
from generator import LAYOUT_PATH, Maze, MazeError
from layout import FLOOR, WALL, build_placements, load_maze_layout, to_wall_grids

# Colour and marker per placement kind
PLACEMENT_STYLES = {
    FLOOR: {"color": "lightgray", "marker": "s", "size": 60, "label": "Floor"},
    WALL: {"color": "black", "marker": "|", "size": 80, "label": "Wall"},
}


def render_ascii_maze(maze: Maze) -> str:
    """Top-down ASCII view, row 0 at the top.

    Example for a single cell::

        +---+
        |   |
        +---+
    """
    n = maze.size
    lines = []
    for y in range(n):
        top = "".join("+---" if maze.has_wall((x, y), Side.TOP) else "+   " for x in range(n))
        lines.append(top + "+")
        row = "".join("|   " if maze.has_wall((x, y), Side.LEFT) else "    " for x in range(n))
        row += "|" if maze.has_wall((n - 1, y), Side.RIGHT) else " "
        lines.append(row)
    bottom = "".join("+---" if maze.has_wall((x, n - 1), Side.BOTTOM) else "+   " for x in range(n))
    lines.append(bottom + "+")
    return "\n".join(lines)


def plot_maze(h_walls: np.ndarray, v_walls: np.ndarray, show: bool = True):
    """Visual representation of the maze using matplotlib"""
    rows, cols = h_walls.shape[0] - 1, h_walls.shape[1]
    fig, ax = plt.subplots(figsize=(max(cols, 2), max(rows, 2)))

    # horizontal walls
    for r in range(rows + 1):
        for c in range(cols):
            if h_walls[r, c]:
                ax.plot([c, c + 1], [rows - r, rows - r], lw=3, color='k')
    # vertical walls
    for r in range(rows):
        for c in range(cols + 1):
            if v_walls[r, c]:
                ax.plot([c, c], [rows - r - 1, rows - r], lw=3, color='k')

    ax.set_aspect('equal')
    ax.set_xlim(0, cols)
    ax.set_ylim(0, rows)
    ax.axis('off')
    ax.set_title(f'Maze ({cols} x {rows})')

    if show:
        plt.show()
    return fig, ax


def render_3d_layout(maze: Maze, show: bool = True):
    """3D scatter of the floor and wall placements, as a scene would place them."""
    placements = build_placements(maze)

    fig = plt.figure(figsize=(12, 9))
    ax = fig.add_subplot(111, projection='3d')

    for kind, style in PLACEMENT_STYLES.items():
        points = [p.position for p in placements if p.kind == kind]
        if not points:
            continue
        xs, ys, zs = zip(*points)
        # Scene y is up, so plot it on the matplotlib z axis
        ax.scatter(xs, zs, ys,
                   c=style["color"],
                   marker=style["marker"],
                   s=style["size"],
                   label=style["label"],
                   alpha=0.8)

    ax.set_xlabel('X')
    ax.set_ylabel('Z')
    ax.set_zlabel('Y')
    ax.set_title('Maze scene layout')
    ax.legend()
    ax.grid(True, alpha=0.3)

    walls = sum(1 for p in placements if p.kind == WALL)
    print("\n=== Scene statistics ===")
    print(f"Floor pieces: {maze.size * maze.size}")
    print(f"Wall pieces: {walls}")

    if show:
        plt.tight_layout()
        plt.show()
    return fig, ax


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a generated maze layout")
    parser.add_argument("mode", nargs="?", default="3d", choices=["3d", "2d", "ascii", "all"],
                        help="How to draw the maze")
    parser.add_argument("--file", type=Path, default=LAYOUT_PATH, help="Layout JSON file")
    parser.add_argument("--no-show", action="store_true", help="Build figures without opening a window")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Render a layout file.

    Returns:
        0 on success, 1 when the layout cannot be read
    """
    args = parse_args(argv)
    show = not args.no_show

    try:
        maze = load_maze_layout(args.file)
    except FileNotFoundError:
        print(f"Error: {args.file} not found, run generator.py first")
        return 1
    except (MazeError, OSError) as e:
        print(f"Error: {e}")
        return 1

    if args.mode in ("ascii", "all"):
        print(render_ascii_maze(maze))
    if args.mode in ("2d", "all"):
        plot_maze(*to_wall_grids(maze), show=show)
    if args.mode in ("3d", "all"):
        render_3d_layout(maze, show=show)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
