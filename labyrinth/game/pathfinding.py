"""Grid pathfinding on the maze.

``find_path`` is A* (Manhattan heuristic, unit cost, 4-neighbourhood) and
returns the full start..goal path or ``[]``. Ties on f go to the node that
entered the open set first, so results are stable for a given grid.

``find_path_best_effort`` is a BFS used by tap-to-move: when the goal cannot
be reached it returns the route to the reachable cell closest to it.

``walkable`` overrides the default FLOOR test (open doors, wall-passing
entities); ``links`` maps a portal tile to its pair so searches can hop.
"""

from __future__ import annotations

import heapq
from collections import deque
from itertools import count
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from ..maze.tiles import FLOOR

Coord = Tuple[int, int]
Walkable = Callable[[int, int], bool]

# right, left, down, up
_STEPS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class PathResult(NamedTuple):
    path: List[Coord]
    target: Coord


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _default_walkable(grid) -> Walkable:
    rows, cols = len(grid), len(grid[0])

    def walkable(x: int, y: int) -> bool:
        return 0 <= x < cols and 0 <= y < rows and grid[y][x] == FLOOR

    return walkable


def _bounded(grid, walkable: Walkable) -> Walkable:
    rows, cols = len(grid), len(grid[0])
    return lambda x, y: 0 <= x < cols and 0 <= y < rows and walkable(x, y)


def _reconstruct(came: Dict[Coord, Coord], current: Coord) -> List[Coord]:
    path = [current]
    while current in came:
        current = came[current]
        path.append(current)
    path.reverse()
    return path


def find_path(grid, start: Coord, goal: Coord, walkable: Optional[Walkable] = None) -> List[Coord]:
    ok = _default_walkable(grid) if walkable is None else _bounded(grid, walkable)
    start, goal = tuple(start), tuple(goal)
    if not ok(*goal):
        return []
    order = count()
    open_heap = [(manhattan(start, goal), next(order), start)]
    g: Dict[Coord, int] = {start: 0}
    came: Dict[Coord, Coord] = {}
    closed = set()
    while open_heap:
        _, _, current = heapq.heappop(open_heap)
        if current in closed:
            continue
        if current == goal:
            return _reconstruct(came, current)
        closed.add(current)
        cx, cy = current
        for dx, dy in _STEPS:
            nxt = (cx + dx, cy + dy)
            if nxt in closed or not ok(*nxt):
                continue
            tentative = g[current] + 1
            if tentative < g.get(nxt, float("inf")):
                came[nxt] = current
                g[nxt] = tentative
                heapq.heappush(open_heap, (tentative + manhattan(nxt, goal), next(order), nxt))
    return []


def find_path_best_effort(
    grid,
    start: Coord,
    goal: Coord,
    walkable: Optional[Walkable] = None,
    links: Optional[Dict[Coord, Coord]] = None,
) -> Optional[PathResult]:
    ok = _default_walkable(grid) if walkable is None else _bounded(grid, walkable)
    start, goal = tuple(start), tuple(goal)
    links = links or {}
    q = deque([start])
    came: Dict[Coord, Coord] = {}
    visited = {start}
    best = start
    best_dist = manhattan(start, goal)
    while q:
        current = q.popleft()
        dist = manhattan(current, goal)
        if dist < best_dist:
            best, best_dist = current, dist
        if current == goal:
            break
        cx, cy = current
        neighbours = [(cx + dx, cy + dy) for dx, dy in _STEPS]
        if current in links:
            neighbours.append(links[current])
        for nxt in neighbours:
            if nxt in visited or not ok(*nxt):
                continue
            visited.add(nxt)
            came[nxt] = current
            q.append(nxt)
    if best == start and start != goal:
        return None
    return PathResult(_reconstruct(came, best), best)


__all__ = ["PathResult", "manhattan", "find_path", "find_path_best_effort"]
