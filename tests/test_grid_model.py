import numpy as np
import pytest

from mazefill.domain.neighbors import get_neighbors, is_unit_step
from mazefill.domain.types import (
    Cell, CellKind, DIFFICULTIES, Grid, Snapshot, get_difficulty
)


def test_in_bounds_and_walkable(small_maze):
    grid, start, end = small_maze
    assert grid.cols == 7 and grid.rows == 5
    assert grid.in_bounds((0, 0))
    assert grid.in_bounds((6, 4))
    assert not grid.in_bounds((7, 0))
    assert not grid.in_bounds((-1, 2))

    assert grid.is_walkable(start)
    assert grid.is_walkable(end)
    assert not grid.is_walkable((0, 0))
    assert not grid.is_walkable((99, 99))
    assert grid.get_cell((99, 99)) is None


def test_filled_cell_is_not_walkable(small_maze):
    grid, _, _ = small_maze
    grid.get_cell((2, 1)).filled = True
    assert grid.is_path((2, 1))
    assert not grid.is_walkable((2, 1))


def test_neighbors_use_caller_predicate(small_maze):
    grid, start, _ = small_maze
    walkable = get_neighbors(start, grid.cols, grid.rows, grid.is_walkable)
    assert sorted(walkable) == [(1, 2), (2, 1)]

    everything = get_neighbors((0, 0), grid.cols, grid.rows, lambda c: True)
    assert sorted(everything) == [(0, 1), (1, 0)]

    grid.get_cell((2, 1)).filled = True
    assert get_neighbors(start, grid.cols, grid.rows, grid.is_walkable) == [(1, 2)]
    assert sorted(get_neighbors(start, grid.cols, grid.rows, grid.is_path)) == [(1, 2), (2, 1)]


def test_neighbors_out_of_bounds_is_empty(small_maze):
    grid, _, _ = small_maze
    assert get_neighbors((50, 50), grid.cols, grid.rows, grid.is_walkable) == []


def test_unit_steps():
    assert is_unit_step(1, 0)
    assert is_unit_step(0, -1)
    assert not is_unit_step(1, 1)
    assert not is_unit_step(0, 0)
    assert not is_unit_step(2, 0)


def test_wall_cell_defaults():
    cell = Cell()
    assert cell.kind is CellKind.WALL
    assert not cell.filled and not cell.dead_end
    assert not cell.is_walkable()
    cell.carve()
    assert cell.is_walkable()


def test_snapshot_copies_walkability(small_maze):
    grid, _, _ = small_maze
    grid.get_cell((2, 1)).filled = True
    snapshot = grid.snapshot()

    assert snapshot.cols == 7 and snapshot.rows == 5
    assert snapshot.walkable.dtype == np.uint8
    assert snapshot.is_walkable((1, 1))
    assert not snapshot.is_walkable((2, 1))
    assert not snapshot.is_walkable((-1, 0))

    # Later grid changes do not leak into the snapshot
    grid.get_cell((3, 1)).filled = True
    assert snapshot.is_walkable((3, 1))

    with pytest.raises(ValueError):
        snapshot.walkable[1, 1] = 0


def test_snapshot_requires_two_dimensions():
    with pytest.raises(ValueError):
        Snapshot.from_array([1, 0, 1])


def test_snapshot_rejects_values_other_than_zero_and_one():
    for bad in ([[1, -1], [1, 1]], [[1, 256], [0, 1]], [[1, 2], [0, 1]]):
        with pytest.raises(ValueError):
            Snapshot.from_array(bad)


def test_dead_end_coords_lists_flags():
    grid = Grid.filled_with_walls(3, 3)
    grid.cells[1][1].dead_end = True
    assert grid.dead_end_coords() == [(1, 1)]


def test_difficulty_lookup():
    assert get_difficulty("hard") is DIFFICULTIES["hard"]
    assert get_difficulty(" Cruel ") is DIFFICULTIES["cruel"]
    assert get_difficulty("impossible").name == "normal"
    assert get_difficulty(None).name == "normal"


def test_dead_end_bonus_per_profile():
    bonuses = {name: profile.dead_end_bonus for name, profile in DIFFICULTIES.items()}
    assert bonuses == {"easy": 9, "normal": 10, "hard": 12, "cruel": 14}
