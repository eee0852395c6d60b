from collections import deque

# Tile constants duplicated lightly for test independence
FLOOR = 0
WALL = 1


def grid_from_ascii(text):
    """'#' wall, anything else floor; blank lines ignored."""
    rows = [line.strip() for line in text.strip().splitlines() if line.strip()]
    return [[WALL if ch == "#" else FLOOR for ch in row] for row in rows]


def open_grid(cols, rows):
    """Floor everywhere except the border ring."""
    grid = [[FLOOR for _ in range(cols)] for _ in range(rows)]
    for x in range(cols):
        grid[0][x] = WALL
        grid[rows - 1][x] = WALL
    for y in range(rows):
        grid[y][0] = WALL
        grid[y][cols - 1] = WALL
    return grid


def bfs_reachable(grid, start):
    """Return the set of (x, y) floor tiles reachable from start."""
    rows, cols = len(grid), len(grid[0])
    sx, sy = start
    if grid[sy][sx] != FLOOR:
        return set()
    q = deque([start])
    vis = {start}
    while q:
        x, y = q.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if 0 <= nx < cols and 0 <= ny < rows and (nx, ny) not in vis and grid[ny][nx] == FLOOR:
                vis.add((nx, ny))
                q.append((nx, ny))
    return vis


def floor_set(grid):
    return {(x, y) for y, row in enumerate(grid) for x, c in enumerate(row) if c == FLOOR}


def is_mirrored(grid):
    cols = len(grid[0])
    return all(row[x] == row[cols - 1 - x] for row in grid for x in range(cols))


class FixedRng:
    """Replays a fixed sequence of floats; the int/pick/shuffle math matches MazeRng."""

    def __init__(self, values=(0.0,)):
        self.values = list(values)
        self.calls = 0

    def next(self):
        v = self.values[self.calls % len(self.values)]
        self.calls += 1
        return v

    def int(self, lo, hi):
        return int(self.next() * (hi - lo + 1)) + lo

    def chance(self, probability):
        return self.next() < probability

    def pick(self, seq):
        return seq[self.int(0, len(seq) - 1)]

    def shuffle(self, seq):
        out = list(seq)
        for i in range(len(out) - 1, 0, -1):
            j = self.int(0, i)
            out[i], out[j] = out[j], out[i]
        return out
