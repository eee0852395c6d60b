"""Open-room carving.

Rooms are small floor rectangles stamped onto solid wall that already borders
a corridor (diagonal contact counts). Their cells are returned so the
thinning passes leave them alone.
"""

from __future__ import annotations

from typing import Sequence, Set, Tuple

from .config import DEFAULT_ROOM_SIZES
from .tiles import FLOOR

Coord = Tuple[int, int]
RoomSize = Tuple[int, int, float]


def pick_room_size(rng, sizes: Sequence[RoomSize] = DEFAULT_ROOM_SIZES) -> Tuple[int, int]:
    total = sum(weight for _, _, weight in sizes)
    roll = rng.next() * total
    accum = 0.0
    for w, h, weight in sizes:
        accum += weight
        if roll <= accum:
            return w, h
    w, h, _ = sizes[0]
    return w, h


def room_has_open_neighbor(grid, x: int, y: int, w: int, h: int) -> bool:
    rows, cols = len(grid), len(grid[0])
    for yy in range(y - 1, y + h + 1):
        for xx in range(x - 1, x + w + 1):
            if not (0 <= yy < rows and 0 <= xx < cols):
                continue
            if y <= yy < y + h and x <= xx < x + w:
                continue
            if grid[yy][xx] == FLOOR:
                return True
    return False


def is_room_placeable(grid, x: int, y: int, w: int, h: int) -> bool:
    rows, cols = len(grid), len(grid[0])
    if x + w > cols or y + h > rows:
        return False
    for yy in range(y, y + h):
        for xx in range(x, x + w):
            if grid[yy][xx] == FLOOR:
                return False
    return room_has_open_neighbor(grid, x, y, w, h)


def carve_room(grid, x: int, y: int, w: int, h: int, room_cells: Set[Coord]) -> None:
    for yy in range(y, y + h):
        for xx in range(x, x + w):
            grid[yy][xx] = FLOOR
            room_cells.add((xx, yy))


def carve_open_rooms(grid, rng, sizes: Sequence[RoomSize] = DEFAULT_ROOM_SIZES, area_divisor: int = 40):
    """Try ``area // area_divisor`` placements; returns ``(room_cells, rooms_carved)``."""
    rows, cols = len(grid), len(grid[0])
    attempts = (rows * cols) // area_divisor
    room_cells: Set[Coord] = set()
    carved = 0
    for _ in range(attempts):
        w, h = pick_room_size(rng, sizes)
        x = rng.int(1, max(1, cols - w - 1))
        y = rng.int(1, max(1, rows - h - 1))
        if not is_room_placeable(grid, x, y, w, h):
            continue
        carve_room(grid, x, y, w, h, room_cells)
        carved += 1
    return room_cells, carved


__all__ = [
    "pick_room_size",
    "room_has_open_neighbor",
    "is_room_placeable",
    "carve_room",
    "carve_open_rooms",
]
