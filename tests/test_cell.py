from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cell import Cell, Side, side_between


def test_interior_cell_defaults():
    cell = Cell((2, 3))
    assert list(cell.walls) == [False, True, True, False]
    assert not cell.visited


def test_top_row_seals_top():
    assert list(Cell((1, 0)).walls) == [True, True, True, False]


def test_left_column_seals_left():
    assert list(Cell((0, 1)).walls) == [False, True, True, True]


def test_corner_cell_is_closed():
    assert list(Cell((0, 0)).walls) == [True, True, True, True]


def test_freeze_makes_walls_read_only():
    cell = Cell((0, 0))
    cell.freeze()
    with pytest.raises(TypeError):
        cell.walls[Side.TOP] = False


def test_side_opposites():
    assert Side.TOP.opposite == Side.BOTTOM
    assert Side.RIGHT.opposite == Side.LEFT
    assert Side.BOTTOM.opposite == Side.TOP
    assert Side.LEFT.opposite == Side.RIGHT


def test_side_between():
    assert side_between((1, 1), (1, 0)) == Side.TOP
    assert side_between((1, 1), (2, 1)) == Side.RIGHT
    assert side_between((1, 1), (1, 2)) == Side.BOTTOM
    assert side_between((1, 1), (0, 1)) == Side.LEFT


def test_side_between_rejects_non_adjacent():
    with pytest.raises(ValueError):
        side_between((0, 0), (1, 1))


def test_freeze_locks_attributes():
    cell = Cell((1, 1))
    cell.visited = True
    cell.freeze()
    assert cell.frozen
    with pytest.raises(AttributeError):
        cell.visited = False
    with pytest.raises(AttributeError):
        cell.walls = [True, True, True, True]
    assert cell.walls == (False, True, True, False)
