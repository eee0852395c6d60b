# Tile constants centralized for modular imports
FLOOR = 0
WALL = 1

FLOOR_CHAR = "."
WALL_CHAR = "#"

# 4-way neighbourhood (up, down, left, right); order matters for deterministic scans
NEIGHBORS_4 = ((0, -1), (0, 1), (-1, 0), (1, 0))


def in_bounds(grid, x: int, y: int) -> bool:
    return 0 <= y < len(grid) and 0 <= x < len(grid[0])


def is_floor(grid, x: int, y: int) -> bool:
    return in_bounds(grid, x, y) and grid[y][x] == FLOOR


def count_floor_neighbors(grid, x: int, y: int) -> int:
    return sum(1 for dx, dy in NEIGHBORS_4 if is_floor(grid, x + dx, y + dy))


def blank_grid(cols: int, rows: int, fill: int = WALL):
    return [[fill for _ in range(cols)] for _ in range(rows)]


def grid_to_ascii(grid) -> str:
    return "\n".join("".join(WALL_CHAR if c == WALL else FLOOR_CHAR for c in row) for row in grid)


__all__ = [
    "FLOOR",
    "WALL",
    "FLOOR_CHAR",
    "WALL_CHAR",
    "NEIGHBORS_4",
    "in_bounds",
    "is_floor",
    "count_floor_neighbors",
    "blank_grid",
    "grid_to_ascii",
]
