"""Plain-text rendering of a maze for terminals and logs."""

from typing import Iterable, Optional

from ..domain.types import Coord, Grid

WALL = "#"
OPEN = " "
FILLED = "."
DEAD_END = "*"
AGENT = "@"
START = "S"
END = "E"
HINT = "+"


def render_grid(grid: Grid, start: Optional[Coord] = None, end: Optional[Coord] = None,
                agent: Optional[Coord] = None, hint_path: Optional[Iterable[Coord]] = None) -> str:
    """Render the grid one character per cell, markers drawn over cells."""
    rows = []
    for y in range(grid.rows):
        row = []
        for x in range(grid.cols):
            cell = grid.cells[y][x]
            if not cell.is_path():
                row.append(WALL)
            elif cell.filled:
                row.append(FILLED)
            elif cell.dead_end:
                row.append(DEAD_END)
            else:
                row.append(OPEN)
        rows.append(row)

    def put(coord: Optional[Coord], char: str):
        if coord is not None and grid.in_bounds(coord):
            rows[coord[1]][coord[0]] = char

    for coord in hint_path or []:
        put(coord, HINT)
    put(start, START)
    put(end, END)
    put(agent, AGENT)

    return "\n".join("".join(row) for row in rows)
