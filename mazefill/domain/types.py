"""Core type definitions for the maze grid and search services."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

# Coordinate type for grid positions, always (x, y)
Coord = Tuple[int, int]


class CellKind(Enum):
    """The two kinds of maze cell."""
    WALL = "wall"
    PATH = "path"


@dataclass
class Cell:
    """A single maze cell."""
    kind: CellKind = CellKind.WALL
    filled: bool = False
    dead_end: bool = False

    def is_path(self) -> bool:
        return self.kind is CellKind.PATH

    def is_walkable(self) -> bool:
        """Check if this cell can be entered."""
        return self.kind is CellKind.PATH and not self.filled

    def carve(self):
        """Turn the cell into a path."""
        self.kind = CellKind.PATH

    def clear_flags(self):
        self.filled = False
        self.dead_end = False


@dataclass
class Grid:
    """Represents the whole maze as rows of cells (indexed cells[y][x])."""
    cols: int
    rows: int
    cells: List[List[Cell]]

    @classmethod
    def filled_with_walls(cls, cols: int, rows: int) -> "Grid":
        cells = [[Cell() for _ in range(cols)] for _ in range(rows)]
        return cls(cols=cols, rows=rows, cells=cells)

    def in_bounds(self, coord: Coord) -> bool:
        """Check if coordinate is within grid bounds."""
        x, y = coord
        return 0 <= x < self.cols and 0 <= y < self.rows

    def get_cell(self, coord: Coord) -> Optional[Cell]:
        """Get cell at coordinate, returns None if out of bounds."""
        if not self.in_bounds(coord):
            return None
        return self.cells[coord[1]][coord[0]]

    def is_path(self, coord: Coord) -> bool:
        cell = self.get_cell(coord)
        return cell is not None and cell.is_path()

    def is_walkable(self, coord: Coord) -> bool:
        """In bounds, a path, and not filled."""
        cell = self.get_cell(coord)
        return cell is not None and cell.is_walkable()

    def coords(self):
        """Iterate over every coordinate in row-major order."""
        for y in range(self.rows):
            for x in range(self.cols):
                yield (x, y)

    def path_cells(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.is_path())

    def walkable_cells(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.is_walkable())

    def dead_end_coords(self) -> List[Coord]:
        return [coord for coord in self.coords() if self.cells[coord[1]][coord[0]].dead_end]

    def snapshot(self) -> "Snapshot":
        """Copy the current walkability into an immutable snapshot."""
        walkable = np.zeros((self.rows, self.cols), dtype=np.uint8)
        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                if cell.is_walkable():
                    walkable[y, x] = 1
        return Snapshot.from_array(walkable)


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only walkability copy handed to the search services.
    walkable[y, x] == 1 means the cell can be entered.
    """
    cols: int
    rows: int
    walkable: np.ndarray = field(repr=False)

    @classmethod
    def from_array(cls, data) -> "Snapshot":
        """Build a snapshot from any 2-D array-like of 0/1 values."""
        values = np.asarray(data)
        if values.ndim != 2:
            raise ValueError(f"Snapshot needs a 2-D array, got {values.ndim} dimensions")
        if not np.isin(values, (0, 1)).all():
            raise ValueError("Snapshot values must all be 0 or 1")
        array = values.astype(np.uint8)
        array.setflags(write=False)
        rows, cols = array.shape
        return cls(cols=cols, rows=rows, walkable=array)

    def in_bounds(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_walkable(self, coord: Coord) -> bool:
        if not self.in_bounds(coord):
            return False
        return self.walkable[coord[1], coord[0]] == 1


@dataclass(frozen=True)
class DifficultyProfile:
    """Tuning for extra connections and the dead-end bonus."""
    name: str
    extra_connection_density: float
    extra_connection_chance: float
    bonus_multiplier: float

    @property
    def dead_end_bonus(self) -> int:
        return round(10 * self.bonus_multiplier)


DIFFICULTIES: Dict[str, DifficultyProfile] = {
    "easy": DifficultyProfile("easy", 0.02, 0.25, 0.9),
    "normal": DifficultyProfile("normal", 0.04, 0.45, 1.0),
    "hard": DifficultyProfile("hard", 0.06, 0.65, 1.2),
    "cruel": DifficultyProfile("cruel", 0.08, 0.85, 1.4),
}

DEFAULT_DIFFICULTY = "normal"


def get_difficulty(name: Optional[str]) -> DifficultyProfile:
    """Resolve a profile by name, falling back to normal."""
    if name is None:
        return DIFFICULTIES[DEFAULT_DIFFICULTY]
    return DIFFICULTIES.get(name.strip().lower(), DIFFICULTIES[DEFAULT_DIFFICULTY])


@dataclass
class GameConfig:
    """Configuration for a play session."""
    default_size: int = 21
    min_size: int = 7
    max_size: int = 51
    growth_step: int = 2
    difficulty: str = DEFAULT_DIFFICULTY
    finish_bonus_base: int = 100
    hint_duration_ms: int = 3000
    threaded_search: bool = True
    highscore_path: Optional[str] = None

    def clamp_size(self, value: Optional[int]) -> int:
        """Raise a requested dimension to the minimum, using the default for missing values."""
        if not value:
            return self.default_size
        return max(self.min_size, int(value))

    def grown_size(self, value: int) -> int:
        """Size of the next maze after a completed one."""
        return min(self.max_size, value + self.growth_step)


@dataclass
class SearchResult:
    """Result of a search service call."""
    path: Optional[List[Coord]] = None
    nodes_explored: int = 0

    @property
    def found(self) -> bool:
        return self.path is not None and len(self.path) > 0

    @property
    def is_meaningful(self) -> bool:
        """A path needs at least one step to be worth showing."""
        return self.path is not None and len(self.path) >= 2
