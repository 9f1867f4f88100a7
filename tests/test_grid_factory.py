import pytest

from mazefill.domain.types import CellKind, DIFFICULTIES, DifficultyProfile
from mazefill.utils.grid_factory import (
    ensure_path_exists, generate_maze_grid, grid_from_rows, to_odd
)
from mazefill.utils.rng import SeededRNG

NO_EXTRAS = DifficultyProfile("none", 0.0, 0.0, 1.0)


def layout(grid):
    return [[cell.is_path() for cell in row] for row in grid.cells]


def test_even_sizes_become_odd():
    grid, start, end = generate_maze_grid(20, 20, rng=SeededRNG(1))
    assert (grid.cols, grid.rows) == (21, 21)
    assert start == (1, 1)
    assert end == (19, 19)


def test_to_odd():
    assert to_odd(7) == 7
    assert to_odd(8) == 9


def test_too_small_raises():
    with pytest.raises(ValueError):
        generate_maze_grid(3, 9, rng=SeededRNG(1))


@pytest.mark.parametrize("name", sorted(DIFFICULTIES))
def test_end_always_reachable(name):
    for seed in range(25):
        grid, start, end = generate_maze_grid(15, 11, DIFFICULTIES[name], SeededRNG(seed))
        assert grid.is_path(start)
        assert grid.is_path(end)
        assert ensure_path_exists(grid, start, end), f"seed {seed} produced an unreachable end"


def test_same_seed_same_maze():
    first, _, _ = generate_maze_grid(21, 15, DIFFICULTIES["hard"], SeededRNG(42))
    second, _, _ = generate_maze_grid(21, 15, DIFFICULTIES["hard"], SeededRNG(42))
    other, _, _ = generate_maze_grid(21, 15, DIFFICULTIES["hard"], SeededRNG(43))
    assert layout(first) == layout(second)
    assert layout(first) != layout(other)


def test_without_extras_maze_is_a_spanning_tree():
    grid, _, _ = generate_maze_grid(11, 9, NO_EXTRAS, SeededRNG(3))
    rooms = ((grid.cols - 1) // 2) * ((grid.rows - 1) // 2)
    # Every room plus exactly one opened wall per tree edge
    assert grid.path_cells() == 2 * rooms - 1
    for x in range(1, grid.cols, 2):
        for y in range(1, grid.rows, 2):
            assert grid.is_path((x, y))


def test_extra_connections_only_add_paths():
    base, _, _ = generate_maze_grid(25, 25, NO_EXTRAS, SeededRNG(9))
    loose, _, _ = generate_maze_grid(25, 25, DIFFICULTIES["cruel"], SeededRNG(9))
    for coord in base.coords():
        if base.is_path(coord):
            assert loose.is_path(coord)
    assert loose.path_cells() > base.path_cells()


def test_border_stays_wall():
    grid, _, _ = generate_maze_grid(15, 15, DIFFICULTIES["cruel"], SeededRNG(5))
    for x in range(grid.cols):
        assert not grid.is_path((x, 0))
        assert not grid.is_path((x, grid.rows - 1))
    for y in range(grid.rows):
        assert not grid.is_path((0, y))
        assert not grid.is_path((grid.cols - 1, y))


def test_generated_cells_start_clean():
    grid, _, _ = generate_maze_grid(9, 9, rng=SeededRNG(0))
    for row in grid.cells:
        for cell in row:
            assert not cell.filled
            assert not cell.dead_end


def test_grid_from_rows():
    grid, start, end = grid_from_rows(["#####", "#   #", "#####"])
    assert (grid.cols, grid.rows) == (5, 3)
    assert start == (1, 1) and end == (3, 1)
    assert ensure_path_exists(grid, start, end)

    with pytest.raises(ValueError):
        grid_from_rows(["###", "#"])


def test_ensure_path_exists_detects_cut(small_maze):
    grid, start, end = small_maze
    assert ensure_path_exists(grid, start, end)
    grid.get_cell((5, 2)).kind = CellKind.WALL
    assert not ensure_path_exists(grid, start, end)
