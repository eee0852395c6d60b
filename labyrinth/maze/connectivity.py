"""Connectivity, symmetry and warp-row validation.

Flood fills here treat only FLOOR as walkable; doors and portals are a
runtime overlay and never count toward structural connectivity.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, NamedTuple, Optional, Set, Tuple

from .tiles import FLOOR, NEIGHBORS_4

Coord = Tuple[int, int]


class MazeValidation(NamedTuple):
    connected: bool
    symmetric: bool
    warp_ok: bool

    @property
    def ok(self) -> bool:
        return self.connected and self.symmetric and self.warp_ok


def first_floor(grid) -> Optional[Coord]:
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell == FLOOR:
                return (x, y)
    return None


def flood_fill(grid, start: Coord) -> Set[Coord]:
    rows, cols = len(grid), len(grid[0])
    sx, sy = start
    if not (0 <= sx < cols and 0 <= sy < rows) or grid[sy][sx] != FLOOR:
        return set()
    q = deque([start])
    visited = {start}
    while q:
        cx, cy = q.popleft()
        for dx, dy in NEIGHBORS_4:
            nx, ny = cx + dx, cy + dy
            if 0 <= nx < cols and 0 <= ny < rows and (nx, ny) not in visited and grid[ny][nx] == FLOOR:
                visited.add((nx, ny))
                q.append((nx, ny))
    return visited


def floor_cells(grid) -> List[Coord]:
    return [(x, y) for y, row in enumerate(grid) for x, cell in enumerate(row) if cell == FLOOR]


def validate_connectivity(grid) -> bool:
    start = first_floor(grid)
    if start is None:
        return False
    reached = flood_fill(grid, start)
    return len(reached) == len(floor_cells(grid))


def validate_symmetry(grid) -> bool:
    cols = len(grid[0])
    return all(row[x] == row[cols - 1 - x] for row in grid for x in range(cols // 2))


def validate_warp_rows(grid, warp_rows: Iterable[int]) -> bool:
    cols = len(grid[0])
    valid = [y for y in warp_rows if 0 <= y < len(grid) and grid[y][0] == FLOOR and grid[y][cols - 1] == FLOOR]
    return 1 <= len(valid) <= 3


def validate(grid, warp_rows: Iterable[int]) -> MazeValidation:
    warp_rows = list(warp_rows)
    return MazeValidation(
        connected=validate_connectivity(grid),
        symmetric=validate_symmetry(grid),
        warp_ok=validate_warp_rows(grid, warp_rows),
    )


def floor_components(grid) -> List[Set[Coord]]:
    """All 4-connected floor components, largest first (ties keep scan order)."""
    seen: Set[Coord] = set()
    components: List[Set[Coord]] = []
    for cell in floor_cells(grid):
        if cell in seen:
            continue
        comp = flood_fill(grid, cell)
        seen |= comp
        components.append(comp)
    components.sort(key=len, reverse=True)
    return components


def _wall_route(grid, main: Set[Coord], blocked: Set[Coord]) -> List[Coord]:
    """Fewest wall cells separating ``main`` from the nearest other floor cell.

    Breadth-first over interior wall cells only; border cells and ``blocked``
    cells are never entered, though floor on the border (a warp breach) can
    still be the target.
    """
    rows, cols = len(grid), len(grid[0])
    parents: Dict[Coord, Optional[Coord]] = {cell: None for cell in main}
    q = deque(sorted(main))
    while q:
        cx, cy = q.popleft()
        for dx, dy in NEIGHBORS_4:
            nx, ny = cx + dx, cy + dy
            if not (0 <= nx < cols and 0 <= ny < rows) or (nx, ny) in parents:
                continue
            if grid[ny][nx] == FLOOR:
                # floor outside main: walk the wall cells back to main
                route: List[Coord] = []
                step: Optional[Coord] = (cx, cy)
                while step is not None and step not in main:
                    route.append(step)
                    step = parents[step]
                return route
            if (nx, ny) in blocked or not (0 < nx < cols - 1 and 0 < ny < rows - 1):
                continue
            parents[(nx, ny)] = (cx, cy)
            q.append((nx, ny))
    return []


def join_floor_components(grid, blocked: Iterable[Coord] = (), mirror: bool = False) -> int:
    """Open wall routes until all floor forms one 4-connected component.

    Each round digs the shortest all-wall route from the largest component to
    the nearest other floor cell. With ``mirror`` every opened cell is also
    opened at ``cols - 1 - x`` so a symmetric grid stays symmetric (``blocked``
    must then be symmetric too). Nothing is ever walled, so warp breaches and
    the ghost house survive. Returns the number of cells opened.
    """
    cols = len(grid[0])
    blocked = set(blocked)
    opened = 0
    while True:
        components = floor_components(grid)
        if len(components) <= 1:
            return opened
        route = _wall_route(grid, components[0], blocked)
        if not route:
            return opened
        for x, y in route:
            for cx in ({x, cols - 1 - x} if mirror else {x}):
                if grid[y][cx] != FLOOR:
                    grid[y][cx] = FLOOR
                    opened += 1


__all__ = [
    "MazeValidation",
    "first_floor",
    "flood_fill",
    "floor_cells",
    "validate_connectivity",
    "validate_symmetry",
    "validate_warp_rows",
    "validate",
    "floor_components",
    "join_floor_components",
]
