"""Half-maze carving passes.

Every pass works on the left half of the maze (``grid[y][x]``, FLOOR/WALL)
before mirroring, and draws its randomness from the injected ``rng``
(anything exposing ``next``/``int``/``pick``/``shuffle``, normally a
``MazeRng``). Passes return the number of cells they changed so the pipeline
can record metrics.

Closures in the thinning and width passes are only kept when the half maze
stays connected, so they run on a connected grid (the pipeline joins any
room that only touches a corridor diagonally first).

Order used by the pipeline:
    * ``carve_half_maze``        randomized depth-first backtracker on a 2-step lattice
    * ``braid_dead_ends``        open one wall next to each dead end
    * ``add_extra_loops``        punch walls that already touch 2+ floors
    * (rooms, see ``rooms.py``)
    * ``thin_double_corridors``  close the second cell of accidental 2-wide runs
    * ``enforce_single_width``   pair-wise closure preferring the busier cell
    * ``open_center_links``      open seam cells so the mirrored halves join
"""

from __future__ import annotations

from typing import Optional, Set, Tuple

from .connectivity import validate_connectivity
from .tiles import FLOOR, WALL, blank_grid, count_floor_neighbors

Coord = Tuple[int, int]

# 2-step lattice moves: up, down, left, right
STEP_DIRECTIONS: Tuple[Coord, ...] = ((0, -2), (0, 2), (-2, 0), (2, 0))


def carve_half_maze(cols: int, rows: int, rng, straight_bias: float = 0.7):
    grid = blank_grid(cols, rows, WALL)
    grid[1][1] = FLOOR
    # stack entries: (x, y, direction that led here)
    stack: list[Tuple[int, int, Optional[Coord]]] = [(1, 1, None)]
    while stack:
        x, y, came = stack[-1]
        order = rng.shuffle(STEP_DIRECTIONS)
        if came is not None and rng.next() < straight_bias:
            order = [came] + [d for d in order if d != came]
        carved = False
        for dx, dy in order:
            nx, ny = x + dx, y + dy
            if 0 < nx < cols - 1 and 0 < ny < rows - 1 and grid[ny][nx] == WALL:
                grid[ny][nx] = FLOOR
                grid[y + dy // 2][x + dx // 2] = FLOOR
                stack.append((nx, ny, (dx, dy)))
                carved = True
                break
        if not carved:
            stack.pop()
    return grid


def braid_dead_ends(grid, rng, passes: int = 2) -> int:
    rows, cols = len(grid), len(grid[0])
    opened = 0
    for _ in range(passes):
        dead_ends = [
            (x, y)
            for y in range(1, rows - 1)
            for x in range(1, cols - 1)
            if grid[y][x] == FLOOR and count_floor_neighbors(grid, x, y) <= 1
        ]
        for x, y in rng.shuffle(dead_ends):
            options = [(dx, dy) for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)) if grid[y + dy][x + dx] == WALL]
            if options:
                dx, dy = rng.pick(options)
                grid[y + dy][x + dx] = FLOOR
                opened += 1
    return opened


def add_extra_loops(grid, rng, target: int) -> int:
    rows, cols = len(grid), len(grid[0])
    added = 0
    tries = 0
    while added < target and tries < target * 4:
        tries += 1
        wx = rng.int(1, cols - 2)
        wy = rng.int(1, rows - 2)
        if grid[wy][wx] == WALL and count_floor_neighbors(grid, wx, wy) >= 2:
            grid[wy][wx] = FLOOR
            added += 1
    return added


def thin_double_corridors(grid, passes: int, room_cells: Set[Coord]) -> int:
    rows, cols = len(grid), len(grid[0])
    closed = 0
    for _ in range(passes):
        # horizontal pairs
        for y in range(1, rows - 1):
            for x in range(1, cols - 2):
                if grid[y][x] == FLOOR and grid[y][x + 1] == FLOOR:
                    cx, cy = x + 1, y
                    if count_floor_neighbors(grid, cx, cy) >= 3 and _can_close_cell(grid, cx, cy, room_cells):
                        grid[cy][cx] = WALL
                        closed += 1
        # vertical pairs
        for y in range(1, rows - 2):
            for x in range(1, cols - 1):
                if grid[y][x] == FLOOR and grid[y + 1][x] == FLOOR:
                    cx, cy = x, y + 1
                    if count_floor_neighbors(grid, cx, cy) >= 3 and _can_close_cell(grid, cx, cy, room_cells):
                        grid[cy][cx] = WALL
                        closed += 1
    return closed


def _choose_cell_to_close(grid, a: Coord, b: Coord) -> Coord:
    return a if count_floor_neighbors(grid, *a) >= count_floor_neighbors(grid, *b) else b


def _can_close_cell(grid, x: int, y: int, room_cells: Set[Coord]) -> bool:
    """Temporarily wall (x, y) and keep the closure only if the grid stays connected."""
    if (x, y) in room_cells:
        return False
    grid[y][x] = WALL
    ok = validate_connectivity(grid)
    grid[y][x] = FLOOR
    return ok


def enforce_single_width(grid, room_cells: Set[Coord], cap: int = 200) -> int:
    rows, cols = len(grid), len(grid[0])
    closures = 0
    for y in range(1, rows - 1):
        for x in range(1, cols - 1):
            if grid[y][x] != FLOOR or (x, y) in room_cells:
                continue
            for nx, ny in ((x + 1, y), (x, y + 1)):
                if closures >= cap:
                    return closures
                if grid[y][x] != FLOOR:
                    # closed by the horizontal check; nothing left to pair with
                    break
                if ny >= rows or nx >= cols or grid[ny][nx] != FLOOR or (nx, ny) in room_cells:
                    continue
                cx, cy = _choose_cell_to_close(grid, (x, y), (nx, ny))
                if _can_close_cell(grid, cx, cy, room_cells):
                    grid[cy][cx] = WALL
                    closures += 1
    return closures


def open_center_links(grid, rng, count: int) -> list[int]:
    """Open ``count`` seam-column cells whose inner neighbour is floor.

    The seam is the last column of the half maze; after mirroring it sits
    next to its own reflection (or the shared centre column on odd widths,
    which the mirror step opens on the same rows), joining the two halves.
    Returns the opened rows.
    """
    rows = len(grid)
    seam = len(grid[0]) - 1
    candidates = [y for y in range(2, rows - 2) if grid[y][seam - 1] == FLOOR]
    chosen = rng.shuffle(candidates)[:count]
    for y in chosen:
        grid[y][seam] = FLOOR
    return chosen


__all__ = [
    "STEP_DIRECTIONS",
    "carve_half_maze",
    "braid_dead_ends",
    "add_extra_loops",
    "thin_double_corridors",
    "enforce_single_width",
    "open_center_links",
]
