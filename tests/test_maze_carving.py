from labyrinth.maze import MazeRng
from labyrinth.maze.carving import (
    add_extra_loops,
    braid_dead_ends,
    carve_half_maze,
    enforce_single_width,
    open_center_links,
    thin_double_corridors,
)
from labyrinth.maze.connectivity import validate_connectivity
from labyrinth.maze.tiles import count_floor_neighbors
from maze_test_utils import FLOOR, WALL, FixedRng, floor_set, grid_from_ascii

DOUBLE_CORRIDOR = """
#######
#.....#
#.....#
#######
"""


def _dead_ends(grid):
    rows, cols = len(grid), len(grid[0])
    return [
        (x, y)
        for y in range(1, rows - 1)
        for x in range(1, cols - 1)
        if grid[y][x] == FLOOR and count_floor_neighbors(grid, x, y) <= 1
    ]


def test_half_maze_is_perfect_tree_on_lattice():
    grid = carve_half_maze(14, 31, MazeRng(1))
    assert len(grid) == 31 and len(grid[0]) == 14
    lattice = [(x, y) for y in range(1, 30, 2) for x in range(1, 13, 2)]
    assert all(grid[y][x] == FLOOR for x, y in lattice)
    # spanning tree: one passage cell per edge between lattice nodes
    assert len(floor_set(grid)) == 2 * len(lattice) - 1
    assert validate_connectivity(grid)
    # seam column stays solid until the centre links are opened
    assert all(row[13] == WALL for row in grid)
    assert all(c == WALL for c in grid[0])


def test_half_maze_deterministic_per_seed():
    assert carve_half_maze(14, 31, MazeRng(5)) == carve_half_maze(14, 31, MazeRng(5))
    assert carve_half_maze(14, 31, MazeRng(5)) != carve_half_maze(14, 31, MazeRng(6))


def test_braid_reduces_dead_ends_and_keeps_connectivity():
    grid = carve_half_maze(14, 31, MazeRng(3))
    before = len(_dead_ends(grid))
    opened = braid_dead_ends(grid, MazeRng(3), passes=2)
    assert opened > 0
    assert len(_dead_ends(grid)) < before
    assert validate_connectivity(grid)


def test_extra_loops_only_punch_walls_touching_two_floors():
    grid = carve_half_maze(14, 31, MazeRng(8))
    before = floor_set(grid)
    added = add_extra_loops(grid, MazeRng(8), target=6)
    after = floor_set(grid)
    assert 0 <= added <= 6
    assert len(after - before) == added
    assert validate_connectivity(grid)


def test_thin_double_corridors_closes_cells():
    grid = grid_from_ascii(DOUBLE_CORRIDOR)
    before = len(floor_set(grid))
    closed = thin_double_corridors(grid, passes=1, room_cells=set())
    assert closed > 0
    assert len(floor_set(grid)) == before - closed


def test_thin_double_corridors_leaves_room_cells():
    grid = grid_from_ascii(DOUBLE_CORRIDOR)
    rooms = floor_set(grid)
    assert thin_double_corridors(grid, passes=3, room_cells=rooms) == 0
    assert floor_set(grid) == rooms


def test_enforce_single_width_keeps_connectivity():
    grid = grid_from_ascii(DOUBLE_CORRIDOR)
    closures = enforce_single_width(grid, set())
    assert closures > 0
    assert validate_connectivity(grid)


def test_enforce_single_width_respects_cap():
    grid = grid_from_ascii(DOUBLE_CORRIDOR)
    assert enforce_single_width(grid, set(), cap=1) == 1
    assert len(floor_set(grid)) == 9


def test_enforce_single_width_never_disconnects_a_tree():
    grid = carve_half_maze(14, 31, MazeRng(11))
    before = floor_set(grid)
    enforce_single_width(grid, set())
    assert validate_connectivity(grid)
    # only dead-end tips can go without splitting a spanning tree
    assert floor_set(grid) <= before


def test_open_center_links_uses_rows_next_to_floor():
    grid = [[WALL] * 6 for _ in range(10)]
    for y in (3, 5, 7):
        grid[y][4] = FLOOR
    rows = open_center_links(grid, FixedRng([0.0]), count=2)
    assert len(rows) == 2
    assert set(rows) <= {3, 5, 7}
    for y in range(10):
        assert (grid[y][5] == FLOOR) == (y in rows)


def test_open_center_links_without_candidates():
    grid = [[WALL] * 6 for _ in range(10)]
    assert open_center_links(grid, FixedRng(), count=3) == []


def test_thinning_keeps_a_braided_maze_connected():
    rng = MazeRng(21)
    grid = carve_half_maze(14, 31, rng)
    braid_dead_ends(grid, rng, passes=2)
    add_extra_loops(grid, rng, target=6)
    before = len(floor_set(grid))
    closed = thin_double_corridors(grid, passes=3, room_cells=set())
    assert validate_connectivity(grid)
    assert len(floor_set(grid)) == before - closed


def test_thinning_skips_cells_that_would_split_the_grid():
    # (2, 1) has three floor neighbours but is the hub joining all three arms
    grid = grid_from_ascii("""
######
#...##
##.###
######
""")
    assert thin_double_corridors(grid, passes=1, room_cells=set()) == 0
    assert validate_connectivity(grid)
