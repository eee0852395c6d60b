"""Runtime overlay on a generated maze: doors, portals and walkability.

The base grid is never mutated after generation. Doors are wall cells that
toggle open on a timer; portals link the two edge breaches of each warp row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple

from ..maze.features import GhostHouse
from ..maze.tiles import FLOOR, WALL, count_floor_neighbors, grid_to_ascii
from .entities import DIRECTION_ORDER, Coord, Direction

DOOR_COUNT = 6
DOOR_INTERVAL_MS = (2000, 5000)


@dataclass
class Door:
    x: int
    y: int
    interval: float
    open: bool = False
    timer: float = 0.0

    def to_dict(self) -> Dict[str, object]:
        return {"x": self.x, "y": self.y, "open": self.open}


class Portal(NamedTuple):
    x: int
    y: int
    id: int
    pair: int
    side: str


def build_doors(grid, rng, count: int = DOOR_COUNT) -> List[Door]:
    rows, cols = len(grid), len(grid[0])
    candidates = [
        (x, y)
        for y in range(1, rows - 1)
        for x in range(1, cols - 1)
        if grid[y][x] == WALL and count_floor_neighbors(grid, x, y) >= 2
    ]
    return [Door(x, y, interval=rng.int(*DOOR_INTERVAL_MS)) for x, y in rng.shuffle(candidates)[:count]]


def build_portals(grid, warp_rows) -> List[Portal]:
    cols = len(grid[0])
    portals: List[Portal] = []
    pid = 0
    for row in warp_rows:
        portals.append(Portal(0, row, pid, pid + 1, "left"))
        portals.append(Portal(cols - 1, row, pid + 1, pid, "right"))
        pid += 2
    return portals


@dataclass
class Board:
    grid: List[List[int]]
    ghost_house: Optional[GhostHouse] = None
    warp_rows: List[int] = field(default_factory=list)
    doors: List[Door] = field(default_factory=list)
    portals: List[Portal] = field(default_factory=list)

    def __post_init__(self):
        self._doors_by_tile = {(d.x, d.y): d for d in self.doors}
        self._portals_by_tile = {(p.x, p.y): p for p in self.portals}
        self._portals_by_id = {p.id: p for p in self.portals}

    @classmethod
    def from_maze(cls, maze, rng, door_count: int = DOOR_COUNT) -> "Board":
        doors = build_doors(maze.grid, rng, door_count)
        portals = build_portals(maze.grid, maze.warp_rows)
        return cls(maze.grid, maze.ghost_house, list(maze.warp_rows), doors, portals)

    @property
    def cols(self) -> int:
        return len(self.grid[0])

    @property
    def rows(self) -> int:
        return len(self.grid)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def door_at(self, x: int, y: int) -> Optional[Door]:
        return self._doors_by_tile.get((x, y))

    def is_walkable(self, x: int, y: int, can_pass_walls: bool = False) -> bool:
        if not self.in_bounds(x, y):
            return False
        if can_pass_walls or self.grid[y][x] == FLOOR:
            return True
        door = self.door_at(x, y)
        return bool(door and door.open)

    def walkable_fn(self, can_pass_walls: bool = False):
        return lambda x, y: self.is_walkable(x, y, can_pass_walls)

    def available_directions(self, x: int, y: int, can_pass_walls: bool = False) -> List[Direction]:
        return [(dx, dy) for dx, dy in DIRECTION_ORDER if self.is_walkable(x + dx, y + dy, can_pass_walls)]

    def in_ghost_house(self, x: int, y: int) -> bool:
        return self.ghost_house is not None and self.ghost_house.contains(x, y)

    def portal_at(self, x: int, y: int) -> Optional[Portal]:
        return self._portals_by_tile.get((x, y))

    def portal_pair(self, portal: Portal) -> Optional[Portal]:
        return self._portals_by_id.get(portal.pair)

    def portal_links(self) -> Dict[Coord, Coord]:
        links = {}
        for p in self.portals:
            pair = self.portal_pair(p)
            if pair is not None:
                links[(p.x, p.y)] = (pair.x, pair.y)
        return links

    def update_doors(self, delta_ms: float, rng) -> List[Door]:
        """Advance door timers; returns the doors that toggled this tick."""
        toggled = []
        for door in self.doors:
            door.timer += delta_ms
            if door.timer >= door.interval:
                door.open = not door.open
                door.timer = 0.0
                door.interval = rng.int(*DOOR_INTERVAL_MS)
                toggled.append(door)
        return toggled

    def floor_tiles(self, include_house: bool = True) -> List[Coord]:
        return [
            (x, y)
            for y in range(1, self.rows - 1)
            for x in range(1, self.cols - 1)
            if self.grid[y][x] == FLOOR and (include_house or not self.in_ghost_house(x, y))
        ]

    def to_dict(self) -> Dict[str, object]:
        return {
            "grid": grid_to_ascii(self.grid).split("\n"),
            "ghost_house": self.ghost_house.to_dict() if self.ghost_house else None,
            "warp_rows": list(self.warp_rows),
            "doors": [d.to_dict() for d in self.doors],
            "portals": [p._asdict() for p in self.portals],
        }


__all__ = ["DOOR_COUNT", "DOOR_INTERVAL_MS", "Door", "Portal", "Board", "build_doors", "build_portals"]
