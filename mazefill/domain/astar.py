"""A* shortest-path search over a walkability snapshot."""

import logging
from typing import Dict, Optional, Set

from .heuristics import manhattan_distance
from .neighbors import get_neighbors
from .path import reconstruct_path
from .priority_queue import PriorityQueue
from .types import Coord, SearchResult, Snapshot

logger = logging.getLogger(__name__)

# Expansion budget per grid cell
BUDGET_FACTOR = 10


class AStarAlgorithm:
    """
    A* search with a Manhattan heuristic on a 4-connected unit-cost grid.
    Holds no state between searches once reset.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        """Reset the algorithm state."""
        self.open_set = PriorityQueue()
        self.closed_set: Set[Coord] = set()
        self.parents: Dict[Coord, Optional[Coord]] = {}
        self.snapshot: Optional[Snapshot] = None
        self.start_coord: Optional[Coord] = None
        self.goal_coord: Optional[Coord] = None
        self.nodes_explored = 0
        self.max_expansions = 0

    def initialize(self, start: Coord, goal: Coord, snapshot: Snapshot,
                   max_expansions: Optional[int] = None):
        """Initialize the algorithm with start and goal positions."""
        if not snapshot.in_bounds(start):
            raise ValueError(f"Start coordinate {start} is out of bounds")
        if not snapshot.in_bounds(goal):
            raise ValueError(f"Goal coordinate {goal} is out of bounds")

        self.reset()
        self.snapshot = snapshot
        self.start_coord = start
        self.goal_coord = goal
        if max_expansions is None:
            max_expansions = BUDGET_FACTOR * snapshot.cols * snapshot.rows
        self.max_expansions = max_expansions

        self.parents[start] = None
        self.open_set.put(start, 0, manhattan_distance(start, goal))

    def step(self) -> Optional[SearchResult]:
        """
        Expand one node.
        Returns a SearchResult once the search is finished, None otherwise.
        """
        if self.snapshot is None or self.start_coord is None or self.goal_coord is None:
            raise ValueError("Algorithm not initialized")

        if self.nodes_explored >= self.max_expansions:
            logger.debug("A* budget of %d expansions exhausted", self.max_expansions)
            return SearchResult(path=None, nodes_explored=self.nodes_explored)

        entry = self.open_set.get()
        if entry is None:
            return SearchResult(path=None, nodes_explored=self.nodes_explored)

        current = entry.coord
        self.nodes_explored += 1
        self.closed_set.add(current)

        if current == self.goal_coord:
            path = reconstruct_path(current, self.parents)
            return SearchResult(path=path, nodes_explored=self.nodes_explored)

        neighbors = get_neighbors(current, self.snapshot.cols, self.snapshot.rows,
                                  self.snapshot.is_walkable)
        for neighbor in neighbors:
            if neighbor in self.closed_set:
                continue

            tentative_g = entry.g_cost + 1
            if self.open_set.put(neighbor, tentative_g, manhattan_distance(neighbor, self.goal_coord)):
                self.parents[neighbor] = current

        return None

    def run_complete(self) -> SearchResult:
        """Run until the goal is popped, the frontier empties or the budget runs out."""
        while True:
            result = self.step()
            if result is not None:
                return result


def find_path(start: Coord, goal: Coord, snapshot: Snapshot,
              max_expansions: Optional[int] = None) -> SearchResult:
    """
    Convenience function to run A* from start to goal.

    Args:
        start: Starting coordinate
        goal: Goal coordinate
        snapshot: Walkability snapshot to search in
        max_expansions: Pop budget, 10 * cols * rows by default

    Returns:
        SearchResult whose path is None when no path was found
    """
    algorithm = AStarAlgorithm()
    try:
        algorithm.initialize(start, goal, snapshot, max_expansions)
    except ValueError as e:
        logger.debug("A* request rejected: %s", e)
        return SearchResult(path=None, nodes_explored=0)
    return algorithm.run_complete()
