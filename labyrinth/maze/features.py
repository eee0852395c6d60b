"""Structural features stamped onto the mirrored grid: ghost house and warp tunnels."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .tiles import FLOOR, WALL

Coord = Tuple[int, int]


@dataclass(frozen=True)
class GhostHouse:
    left: int
    top: int
    right: int
    bottom: int
    cells: Tuple[Coord, ...] = field(default_factory=tuple)
    door_columns: Tuple[int, ...] = field(default_factory=tuple)

    def contains(self, x: int, y: int) -> bool:
        """True for interior (pen) cells, not the surrounding wall ring."""
        return self.left < x < self.right and self.top < y < self.bottom

    def wall_ring(self) -> List[Coord]:
        door = {(dx, self.top) for dx in self.door_columns}
        return [
            (x, y)
            for y in range(self.top, self.bottom + 1)
            for x in range(self.left, self.right + 1)
            if not self.contains(x, y) and (x, y) not in door
        ]

    def to_dict(self) -> Dict[str, object]:
        return {
            'left': self.left,
            'top': self.top,
            'right': self.right,
            'bottom': self.bottom,
            'door_columns': list(self.door_columns),
            'cells': [list(c) for c in self.cells],
        }


def carve_ghost_house(grid, size: Tuple[int, int] = (6, 5)) -> GhostHouse:
    """Stamp the walled pen at the grid centre and breach its top wall.

    Bounds are placed so the rectangle mirrors onto itself: on an even width
    the door spans the two centre columns, on an odd width the single centre
    column.
    """
    rows, cols = len(grid), len(grid[0])
    width, height = size
    left = (cols - width) // 2
    right = cols - 1 - left
    top = rows // 2 - height // 2
    bottom = top + height - 1

    for y in range(top, bottom + 1):
        for x in range(left, right + 1):
            grid[y][x] = WALL
    cells: List[Coord] = []
    for y in range(top + 1, bottom):
        for x in range(left + 1, right):
            grid[y][x] = FLOOR
            cells.append((x, y))

    door_x = (left + right) // 2
    door_columns = tuple(sorted({door_x, cols - 1 - door_x}))
    for dx in door_columns:
        grid[top][dx] = FLOOR
        if top - 1 >= 0:
            grid[top - 1][dx] = FLOOR
    return GhostHouse(left, top, right, bottom, tuple(cells), door_columns)


# widest horizontal gap the door link bridges to reach a corridor
DOOR_LINK_REACH = 3


def link_door_upward(grid, house: GhostHouse, reach: int = DOOR_LINK_REACH) -> int:
    """Extend the door breach until it meets an open cell.

    Each row above the pen is checked in turn: floor beside or directly above
    the breach ends the walk; floor up to ``reach`` cells to the left (and so,
    by symmetry, to the right) gets a mirrored horizontal bridge. Otherwise
    the breach grows one row upward, never into row 0. Returns cells opened.
    """
    if not house.door_columns:
        return 0
    lo, hi = min(house.door_columns), max(house.door_columns)
    cols = len(grid[0])
    opened = 0
    y = house.top - 1
    while y >= 1:
        side_open = (lo - 1 >= 0 and grid[y][lo - 1] == FLOOR) or (hi + 1 < cols and grid[y][hi + 1] == FLOOR)
        above_open = any(grid[y - 1][dx] == FLOOR for dx in house.door_columns)
        if side_open or above_open:
            break
        for d in range(2, reach + 1):
            if lo - d < 1 or grid[y][lo - d] != FLOOR:
                continue
            for step in range(1, d):
                grid[y][lo - step] = FLOOR
                grid[y][hi + step] = FLOOR
                opened += 2
            return opened
        if y == 1:
            break
        y -= 1
        for dx in house.door_columns:
            grid[y][dx] = FLOOR
        opened += len(house.door_columns)
    return opened


def create_warp_tunnels(grid, rng, count: int) -> List[int]:
    """Breach both edge walls on up to ``count`` rows whose inner edge cells are floor.

    Falls back to the middle row when no row qualifies.
    """
    rows, cols = len(grid), len(grid[0])
    candidates = [y for y in range(2, rows - 2) if grid[y][1] == FLOOR and grid[y][cols - 2] == FLOOR]
    warp_rows = rng.shuffle(candidates)[: min(count, len(candidates))]
    if not warp_rows:
        warp_rows = [rows // 2]
    for y in warp_rows:
        grid[y][0] = FLOOR
        grid[y][cols - 1] = FLOOR
    return warp_rows


__all__ = ["DOOR_LINK_REACH", "GhostHouse", "carve_ghost_house", "link_door_upward", "create_warp_tunnels"]
