"""
Request/response boundary for the search services.

A request is a mapping
    {grid: 2-D 0/1 array (1 = walkable), cols, rows, start, goal?, targets?}
and the response is {"path": [[x, y], ...] or None}. A request carrying a
goal runs A*; otherwise it runs the nearest-target search over targets.
Every request gets exactly one response, malformed ones included.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .astar import find_path
from .nearest import find_nearest_target
from .types import Coord, SearchResult, Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchRequest:
    """A parsed search request."""
    snapshot: Snapshot
    start: Coord
    goal: Optional[Coord] = None
    targets: List[Coord] = field(default_factory=list)
    request_id: Optional[Any] = None

    @property
    def kind(self) -> str:
        return "astar" if self.goal is not None else "nearest"


def _parse_coord(value: Any) -> Optional[Coord]:
    """Accept [x, y], (x, y) or {"x": .., "y": ..}."""
    if value is None:
        return None
    if isinstance(value, Mapping):
        if "x" not in value or "y" not in value:
            return None
        return (int(value["x"]), int(value["y"]))
    if len(value) != 2:
        return None
    return (int(value[0]), int(value[1]))


def parse_request(message: Mapping[str, Any]) -> Optional[SearchRequest]:
    """Parse a request mapping. Returns None for malformed requests."""
    if not isinstance(message, Mapping):
        return None

    grid = message.get("grid")
    if grid is None:
        return None

    try:
        snapshot = Snapshot.from_array(grid)
        start = _parse_coord(message.get("start"))
        goal = _parse_coord(message.get("goal"))
        targets = [_parse_coord(t) for t in message.get("targets") or []]
    except (TypeError, ValueError, OverflowError) as e:
        logger.warning("Malformed search request: %s", e)
        return None

    if start is None or None in targets:
        return None

    cols = message.get("cols", snapshot.cols)
    rows = message.get("rows", snapshot.rows)
    if cols != snapshot.cols or rows != snapshot.rows:
        logger.warning("Search request size %sx%s does not match grid %dx%d",
                       cols, rows, snapshot.cols, snapshot.rows)
        return None

    return SearchRequest(snapshot=snapshot, start=start, goal=goal, targets=targets,
                         request_id=message.get("id"))


def run_search(request: SearchRequest) -> SearchResult:
    """Dispatch a parsed request to the matching search service."""
    if request.goal is not None:
        result = find_path(request.start, request.goal, request.snapshot)
    else:
        result = find_nearest_target(request.start, request.targets, request.snapshot)
    logger.debug("%s search from %s: %s after %d expansions", request.kind, request.start,
                 "found" if result.found else "no path", result.nodes_explored)
    return result


def handle_request(message: Mapping[str, Any]) -> Dict[str, Any]:
    """Answer a request mapping with a response mapping."""
    request = parse_request(message)
    if request is None:
        return {"path": None}

    result = run_search(request)
    response: Dict[str, Any] = {"path": None}
    if result.path is not None:
        response["path"] = [[x, y] for x, y in result.path]
    if request.request_id is not None:
        response["id"] = request.request_id
    return response


def build_request(snapshot: Snapshot, start: Coord, goal: Optional[Coord] = None,
                  targets: Optional[List[Coord]] = None) -> Dict[str, Any]:
    """Build a request mapping from a snapshot."""
    message: Dict[str, Any] = {
        "grid": snapshot.walkable.tolist(),
        "cols": snapshot.cols,
        "rows": snapshot.rows,
        "start": [start[0], start[1]],
    }
    if goal is not None:
        message["goal"] = [goal[0], goal[1]]
    if targets is not None:
        message["targets"] = [[x, y] for x, y in targets]
    return message
