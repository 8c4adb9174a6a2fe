import json
from pathlib import Path
import sys

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from generator import InvalidConfiguration, MazeBuilder, MazeConfig, generate_maze
from layout import (
    FLOOR,
    WALL,
    build_placements,
    export_maze_layout,
    load_maze_layout,
    to_wall_grids,
    wall_grids_to_occupancy,
)


class FirstPick:
    def randrange(self, n):
        return 0


def test_single_cell_placements():
    placements = build_placements(generate_maze(1, seed=0))
    assert [p.kind for p in placements] == [FLOOR, WALL, WALL, WALL, WALL]
    assert [p.side for p in placements[1:]] == ["top", "right", "bottom", "left"]
    assert [p.rotation for p in placements[1:]] == [90, 0, 90, 0]


@pytest.mark.parametrize("size", [1, 2, 4, 9])
def test_wall_piece_count(size):
    placements = build_placements(generate_maze(size, seed=size))
    assert sum(1 for p in placements if p.kind == FLOOR) == size * size
    assert sum(1 for p in placements if p.kind == WALL) == (size + 1) ** 2


def test_no_wall_placed_twice():
    placements = build_placements(generate_maze(8, seed=3))
    positions = [p.position for p in placements if p.kind == WALL]
    assert len(positions) == len(set(positions))


def test_wall_grids_for_two_by_two():
    # Always take the first candidate: right, down, then left along the bottom
    maze = MazeBuilder(MazeConfig(size=2), rng=FirstPick()).generate()
    h_walls, v_walls = to_wall_grids(maze)
    assert h_walls.shape == (3, 2)
    assert v_walls.shape == (2, 3)
    np.testing.assert_array_equal(h_walls, [[1, 1], [1, 0], [1, 1]])
    np.testing.assert_array_equal(v_walls, [[1, 0, 1], [1, 0, 1]])


def test_occupancy_grid():
    maze = MazeBuilder(MazeConfig(size=2), rng=FirstPick()).generate()
    occ = wall_grids_to_occupancy(*to_wall_grids(maze))
    expected = [
        [1, 1, 1, 1, 1],
        [1, 0, 0, 0, 1],
        [1, 1, 1, 0, 1],
        [1, 0, 0, 0, 1],
        [1, 1, 1, 1, 1],
    ]
    np.testing.assert_array_equal(occ, expected)


def test_wall_grids_total():
    maze = generate_maze(7, seed=1)
    h_walls, v_walls = to_wall_grids(maze)
    assert int(h_walls.sum() + v_walls.sum()) == 8 ** 2


def test_layout_roundtrip(tmp_path):
    maze = generate_maze(5, seed=17)
    path = tmp_path / "maze_layout.json"
    export_maze_layout(maze, path)

    data = json.loads(path.read_text())
    assert data["size"] == 5
    assert len(data["cells"]) == 25
    assert len(data["placements"]) == 25 + 36

    loaded = load_maze_layout(path)
    assert loaded.size == 5
    for cell in maze.cells():
        assert tuple(loaded.cell(cell.coord).walls) == tuple(cell.walls)
    assert sorted(loaded.passages()) == sorted(maze.passages())


def test_load_rejects_incomplete_layout(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"size": 2, "cells": [{"coord": [0, 0], "walls": [True] * 4}]}))
    with pytest.raises(InvalidConfiguration):
        load_maze_layout(path)


def test_load_rejects_bad_size(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"size": 0, "cells": []}))
    with pytest.raises(InvalidConfiguration):
        load_maze_layout(path)


def test_load_rejects_garbage(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("not json")
    with pytest.raises(InvalidConfiguration):
        load_maze_layout(path)


@pytest.mark.parametrize("cells", [None, 5, "cells", {"coord": [0, 0]}])
def test_load_rejects_non_list_cells(tmp_path, cells):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"size": 1, "cells": cells}))
    with pytest.raises(InvalidConfiguration):
        load_maze_layout(path)


@pytest.mark.parametrize("walls", ["abcd", [1, 2, 3, 4], [True, True, True], [True, True, True, None]])
def test_load_rejects_bad_walls(tmp_path, walls):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"size": 1, "cells": [{"coord": [0, 0], "walls": walls}]}))
    with pytest.raises(InvalidConfiguration):
        load_maze_layout(path)


def test_loaded_maze_is_read_only(tmp_path):
    path = tmp_path / "maze_layout.json"
    export_maze_layout(generate_maze(2, seed=0), path)
    loaded = load_maze_layout(path)
    with pytest.raises(AttributeError):
        loaded.cell((0, 0)).walls = (False, False, False, False)
