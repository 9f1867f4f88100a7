"""Path reconstruction and direction utilities for the search services."""

from typing import Callable, Dict, List, Optional

from .neighbors import get_direction_vector
from .types import Coord


def reconstruct_path(target: Coord, parents: Dict[Coord, Optional[Coord]]) -> List[Coord]:
    """
    Reconstruct the path from target back to start using parent links.
    Returns the path from start to target (reversed from parent chain).
    """
    path = []
    current: Optional[Coord] = target

    while current is not None:
        path.append(current)
        current = parents.get(current)

    path.reverse()
    return path


def get_path_directions(path: List[Coord]) -> List[tuple[int, int]]:
    """
    Get direction vectors for each segment of the path.
    Returns list of (dx, dy) tuples representing movement directions.
    """
    if len(path) < 2:
        return []

    return [get_direction_vector(path[i - 1], path[i]) for i in range(1, len(path))]


def validate_path(path: List[Coord], passable: Callable[[Coord], bool]) -> bool:
    """
    Validate that a path is walkable and connected by unit orthogonal steps.
    Returns True if path is valid.
    """
    if not path:
        return False

    if not all(passable(coord) for coord in path):
        return False

    for i in range(1, len(path)):
        dx = abs(path[i][0] - path[i - 1][0])
        dy = abs(path[i][1] - path[i - 1][1])
        if dx + dy != 1:
            return False

    return True
