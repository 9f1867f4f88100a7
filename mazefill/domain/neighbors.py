"""Neighbor generation for 4-directional grid movement."""

from typing import Callable, List, Tuple

from .types import Coord

# Orthogonal unit steps: right, left, down, up
DIRECTIONS: List[Tuple[int, int]] = [(1, 0), (-1, 0), (0, 1), (0, -1)]

# The cell itself, its 4 neighbors and the 4 cells two steps away
NEAR_OFFSETS: List[Tuple[int, int]] = [
    (0, 0),
    (1, 0), (-1, 0), (0, 1), (0, -1),
    (2, 0), (-2, 0), (0, 2), (0, -2),
]


def get_neighbors(coord: Coord, width: int, height: int,
                  passable: Callable[[Coord], bool]) -> List[Coord]:
    """
    Get the in-bounds axis-aligned neighbors of a coordinate that satisfy
    the caller's passability predicate.
    """
    x, y = coord
    neighbors = []

    for dx, dy in DIRECTIONS:
        new_x, new_y = x + dx, y + dy
        if not (0 <= new_x < width and 0 <= new_y < height):
            continue
        new_coord = (new_x, new_y)
        if passable(new_coord):
            neighbors.append(new_coord)

    return neighbors


def is_unit_step(dx: int, dy: int) -> bool:
    """Exactly one of dx, dy is -1 or 1 and the other is 0."""
    return (dx, dy) in DIRECTIONS


def get_direction_vector(from_coord: Coord, to_coord: Coord) -> Tuple[int, int]:
    """Get the direction vector between two coordinates."""
    dx = to_coord[0] - from_coord[0]
    dy = to_coord[1] - from_coord[1]

    # Normalize to -1, 0, or 1
    if dx != 0:
        dx = 1 if dx > 0 else -1
    if dy != 0:
        dy = 1 if dy > 0 else -1

    return (dx, dy)
