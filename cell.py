"""Grid cell model used by the maze builder.

A cell only records its wall flags and whether the carver has reached it.
Walls are indexed ``Top, Right, Bottom, Left``; ``True`` means the wall is
present.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Sequence, Tuple

Coord = Tuple[int, int]


class Side(IntEnum):
    """Cell sides, in the order they appear in ``Cell.walls``."""

    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3

    @property
    def opposite(self) -> "Side":
        return Side((self + 2) % 4)

    @property
    def delta(self) -> Coord:
        return DELTAS[self]


# Row 0 is the top edge, so "up" is -y
DELTAS = {
    Side.TOP: (0, -1),
    Side.RIGHT: (1, 0),
    Side.BOTTOM: (0, 1),
    Side.LEFT: (-1, 0),
}


def side_between(current: Coord, nxt: Coord) -> Side:
    """Return the side of ``current`` that faces ``nxt``.

    Raises:
        ValueError: the two coordinates are not grid-adjacent
    """
    step = (nxt[0] - current[0], nxt[1] - current[1])
    for side, delta in DELTAS.items():
        if delta == step:
            return side
    raise ValueError(f"{current} and {nxt} are not adjacent")


@dataclass
class Cell:
    coord: Coord
    walls: Sequence[bool] = field(init=False)
    visited: bool = False

    def __post_init__(self) -> None:
        x, y = self.coord
        # Right and bottom walls are owned by this cell, top and left ones by
        # the neighbour above / to the left
        walls: List[bool] = [False, True, True, False]
        # Outer border
        if y == 0:
            walls[Side.TOP] = True
        if x == 0:
            walls[Side.LEFT] = True
        self.walls = walls

    @property
    def x(self) -> int:
        return self.coord[0]

    @property
    def y(self) -> int:
        return self.coord[1]

    def __setattr__(self, name, value) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(f"cell {self.coord} is read-only, cannot set {name!r}")
        super().__setattr__(name, value)

    @property
    def frozen(self) -> bool:
        return getattr(self, "_frozen", False)

    def freeze(self) -> None:
        """Lock the cell once carving is over; walls become a tuple."""
        self.walls = tuple(self.walls)
        super().__setattr__("_frozen", True)
