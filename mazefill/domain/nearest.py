"""Breadth-first search for the nearest member of a target set."""

import logging
from collections import deque
from typing import Dict, Iterable, Optional

from .neighbors import get_neighbors
from .path import reconstruct_path
from .types import Coord, SearchResult, Snapshot

logger = logging.getLogger(__name__)


def find_nearest_target(start: Optional[Coord], targets: Iterable[Coord],
                        snapshot: Optional[Snapshot]) -> SearchResult:
    """
    Search outward from start in level order and stop at the first dequeued
    coordinate that is a target, so the result is a nearest target by hop count.

    If start itself is a target the path has a single coordinate.
    Returns a SearchResult with path None when nothing is reachable.
    """
    if snapshot is None or start is None:
        return SearchResult(path=None)

    start = (int(start[0]), int(start[1]))
    target_set = {(int(t[0]), int(t[1])) for t in targets}
    if not target_set or not snapshot.in_bounds(start):
        return SearchResult(path=None)

    queue = deque([start])
    parents: Dict[Coord, Optional[Coord]] = {start: None}
    nodes_explored = 0

    while queue:
        current = queue.popleft()
        nodes_explored += 1

        if current in target_set:
            path = reconstruct_path(current, parents)
            return SearchResult(path=path, nodes_explored=nodes_explored)

        for neighbor in get_neighbors(current, snapshot.cols, snapshot.rows, snapshot.is_walkable):
            if neighbor not in parents:
                parents[neighbor] = current
                queue.append(neighbor)

    logger.debug("No target reachable from %s after %d expansions", start, nodes_explored)
    return SearchResult(path=None, nodes_explored=nodes_explored)


def shortest_path_length(start: Coord, goal: Coord, snapshot: Snapshot) -> Optional[int]:
    """Number of steps on a shortest path, or None if goal is unreachable."""
    result = find_nearest_target(start, [goal], snapshot)
    if result.path is None:
        return None
    return len(result.path) - 1
