"""Priority frontier for A* with deterministic tie-breaking."""

import heapq
from dataclasses import dataclass
from typing import List, Optional

from .types import Coord


@dataclass
class FrontierEntry:
    """
    Item in the frontier.

    Comparison order:
    1. f_cost (lower is better)
    2. h_cost (lower is better - favor nodes closer to goal)
    3. g_cost (lower is better)
    4. coord (for determinism)
    """
    f_cost: int
    h_cost: int
    g_cost: int
    coord: Coord

    def __lt__(self, other: 'FrontierEntry') -> bool:
        if self.f_cost != other.f_cost:
            return self.f_cost < other.f_cost
        if self.h_cost != other.h_cost:
            return self.h_cost < other.h_cost
        if self.g_cost != other.g_cost:
            return self.g_cost < other.g_cost
        return self.coord < other.coord


class PriorityQueue:
    """
    Binary heap frontier.
    Pushing a coordinate again with a lower g-cost shadows the older entry;
    shadowed entries stay in the heap and are dropped when popped.
    """

    def __init__(self):
        self._heap: List[FrontierEntry] = []
        self._best_g: dict[Coord, int] = {}

    def is_empty(self) -> bool:
        return not self._heap

    def size(self) -> int:
        """Number of heap entries, stale ones included."""
        return len(self._heap)

    def put(self, coord: Coord, g_cost: int, h_cost: int) -> bool:
        """
        Add a coordinate unless an entry with an equal or better g-cost
        was already pushed. Returns True if the entry was added.
        """
        best = self._best_g.get(coord)
        if best is not None and best <= g_cost:
            return False
        self._best_g[coord] = g_cost
        heapq.heappush(self._heap, FrontierEntry(g_cost + h_cost, h_cost, g_cost, coord))
        return True

    def get(self) -> Optional[FrontierEntry]:
        """
        Remove and return the best live entry.
        Returns None if only stale entries (or nothing) remain.
        """
        while self._heap:
            entry = heapq.heappop(self._heap)
            if entry.g_cost == self._best_g.get(entry.coord):
                return entry
        return None

    def best_g(self, coord: Coord) -> Optional[int]:
        """Best g-cost recorded for a coordinate, or None."""
        return self._best_g.get(coord)
