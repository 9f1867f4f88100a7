"""Maze factory: carving, extra connections and sizing."""

import logging
from collections import deque
from typing import Optional, Tuple

from ..domain.types import Coord, DifficultyProfile, Grid, get_difficulty
from .rng import SeededRNG, default_rng

logger = logging.getLogger(__name__)

# Two-step moves between rooms on the odd sub-lattice
ROOM_STEPS = [(2, 0), (-2, 0), (0, 2), (0, -2)]

MIN_GENERATED_SIZE = 5


def to_odd(value: int) -> int:
    """Round an even dimension up to the next odd value."""
    return value if value % 2 == 1 else value + 1


def maze_endpoints(cols: int, rows: int) -> Tuple[Coord, Coord]:
    """Start is the top-left room, end the bottom-right room."""
    return (1, 1), (cols - 2, rows - 2)


def generate_maze_grid(cols: int, rows: int,
                       difficulty: Optional[DifficultyProfile] = None,
                       rng: Optional[SeededRNG] = None) -> Tuple[Grid, Coord, Coord]:
    """
    Generate a maze by iterative depth-first carving, then open extra
    connections according to the difficulty profile.

    Args:
        cols: Requested width (even values are bumped to the next odd value)
        rows: Requested height (even values are bumped to the next odd value)
        difficulty: Profile controlling extra connections (normal if None)
        rng: Random source (uses the global one if None)

    Returns:
        Tuple of (grid, start_coord, end_coord)

    Raises:
        ValueError: If cols or rows is smaller than 5
    """
    if cols < MIN_GENERATED_SIZE or rows < MIN_GENERATED_SIZE:
        raise ValueError(
            f"Maze dimensions must be at least {MIN_GENERATED_SIZE}x{MIN_GENERATED_SIZE}, "
            f"got {cols}x{rows}"
        )

    if rng is None:
        rng = default_rng
    if difficulty is None:
        difficulty = get_difficulty(None)

    maze_cols = to_odd(cols)
    maze_rows = to_odd(rows)
    grid = Grid.filled_with_walls(maze_cols, maze_rows)

    _carve_passages(grid, rng)
    added = _add_extra_connections(grid, difficulty, rng)

    start, end = maze_endpoints(maze_cols, maze_rows)
    grid.get_cell(start).carve()
    grid.get_cell(end).carve()

    logger.info("Generated %dx%d maze (difficulty: %s, %d extra openings, seed: %s)",
                maze_cols, maze_rows, difficulty.name, added, rng.seed)
    return grid, start, end


def _carve_passages(grid: Grid, rng: SeededRNG) -> None:
    """
    Iterative recursive-backtracker over the odd rooms starting at (1, 1).
    Every room ends up connected to every other one.
    """
    start = (1, 1)
    grid.get_cell(start).carve()
    stack = [start]

    while stack:
        cx, cy = stack[-1]

        directions = list(ROOM_STEPS)
        rng.shuffle(directions)

        carved = False
        for dx, dy in directions:
            nx, ny = cx + dx, cy + dy
            if not (0 < nx < grid.cols - 1 and 0 < ny < grid.rows - 1):
                continue
            if grid.is_path((nx, ny)):
                continue
            # Open the wall between the rooms, then the room itself
            grid.get_cell((cx + dx // 2, cy + dy // 2)).carve()
            grid.get_cell((nx, ny)).carve()
            stack.append((nx, ny))
            carved = True
            break

        if not carved:
            stack.pop()


def _add_extra_connections(grid: Grid, difficulty: DifficultyProfile, rng: SeededRNG) -> int:
    """Open random interior cells to create loops. Only ever adds paths."""
    candidates = int(grid.cols * grid.rows * difficulty.extra_connection_density)
    opened = 0

    for _ in range(candidates):
        x = rng.randint(1, grid.cols - 2)
        y = rng.randint(1, grid.rows - 2)
        if rng.random() < difficulty.extra_connection_chance:
            cell = grid.get_cell((x, y))
            if not cell.is_path():
                opened += 1
            cell.carve()

    return opened


def ensure_path_exists(grid: Grid, start: Coord, end: Coord) -> bool:
    """
    Check that end is reachable from start over path cells,
    ignoring filled flags.
    """
    if not grid.is_path(start) or not grid.is_path(end):
        return False

    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        if current == end:
            return True

        x, y = current
        for dx, dy in ((0, 1), (1, 0), (0, -1), (-1, 0)):
            neighbor = (x + dx, y + dy)
            if neighbor not in visited and grid.is_path(neighbor):
                visited.add(neighbor)
                queue.append(neighbor)

    return False


def grid_from_rows(lines) -> Tuple[Grid, Coord, Coord]:
    """
    Build a grid from text rows where '#' is a wall and anything else a path.
    Start and end follow the usual corner convention.
    """
    rows = [line for line in lines if line]
    if not rows:
        raise ValueError("Cannot build a grid from no rows")
    width = len(rows[0])
    if any(len(line) != width for line in rows):
        raise ValueError("All rows must have the same width")

    grid = Grid.filled_with_walls(width, len(rows))
    for y, line in enumerate(rows):
        for x, char in enumerate(line):
            if char != "#":
                grid.cells[y][x].carve()

    start, end = maze_endpoints(width, len(rows))
    return grid, start, end
