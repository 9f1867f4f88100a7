"""Dead-end bookkeeping over a mutable maze grid."""

import logging
from typing import Iterable, List, Set

from .neighbors import NEAR_OFFSETS, get_neighbors
from .types import Coord, Grid

logger = logging.getLogger(__name__)


class DeadEndTracker:
    """
    Keeps every cell's dead_end flag in line with the grid.

    A cell is a dead end when it is walkable, has exactly one walkable
    neighbor, is neither start nor end, and its bonus has not been claimed.
    Flipping one cell's walkability can only change the flags within
    Manhattan distance 2 of it, so recompute_near() is enough after a move.
    """

    def __init__(self, grid: Grid, start: Coord, end: Coord):
        self.grid = grid
        self.start = start
        self.end = end
        self.claimed: Set[Coord] = set()
        self.path_count = 0

    def walkable_neighbor_count(self, coord: Coord) -> int:
        return len(get_neighbors(coord, self.grid.cols, self.grid.rows, self.grid.is_walkable))

    def is_dead_end(self, coord: Coord) -> bool:
        """Evaluate the dead-end rule for one coordinate from scratch."""
        if coord == self.start or coord == self.end or coord in self.claimed:
            return False
        if not self.grid.is_walkable(coord):
            return False
        return self.walkable_neighbor_count(coord) == 1

    def recompute_all(self) -> int:
        """
        Recompute every flag and the original path cell count.
        Returns the number of dead ends.
        """
        self.path_count = 0
        dead_ends = 0

        for coord in self.grid.coords():
            cell = self.grid.cells[coord[1]][coord[0]]
            if cell.is_path():
                self.path_count += 1
            cell.dead_end = self.is_dead_end(coord)
            if cell.dead_end:
                dead_ends += 1

        logger.debug("Full dead-end recompute: %d dead ends over %d path cells",
                     dead_ends, self.path_count)
        return dead_ends

    def recompute_near(self, coord: Coord):
        """Recompute the flags of coord and every cell within distance 2 of it."""
        x, y = coord
        for dx, dy in NEAR_OFFSETS:
            near = (x + dx, y + dy)
            cell = self.grid.get_cell(near)
            if cell is None:
                continue
            cell.dead_end = self.is_dead_end(near)

    def claim(self, coord: Coord) -> bool:
        """
        Take the one-time bonus of a dead end.
        Returns False if the coordinate is not currently a dead end.
        """
        cell = self.grid.get_cell(coord)
        if cell is None or not cell.dead_end:
            return False
        self.claimed.add(coord)
        cell.dead_end = False
        return True

    def release(self, coord: Coord):
        """Give a claimed dead end back and re-evaluate around it."""
        self.claimed.discard(coord)
        self.recompute_near(coord)

    def reset_claims(self):
        self.claimed.clear()

    def dead_ends(self, exclude: Iterable[Coord] = ()) -> List[Coord]:
        """Current dead-end coordinates in row-major order."""
        skip = set(exclude)
        return [coord for coord in self.grid.dead_end_coords() if coord not in skip]
