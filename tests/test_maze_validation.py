from labyrinth.maze.connectivity import (
    MazeValidation,
    flood_fill,
    floor_components,
    join_floor_components,
    validate,
    validate_connectivity,
    validate_symmetry,
    validate_warp_rows,
)
from maze_test_utils import grid_from_ascii, is_mirrored

RING_WITH_POCKETS = """
#########
#.......#
#.#####.#
#.#.#.#.#
#.#####.#
#.......#
#########
"""

WARP_GRID = """
#######
#.....#
.......
#.....#
#######
"""


def test_connectivity_on_ring_and_pockets():
    grid = grid_from_ascii(RING_WITH_POCKETS)
    assert validate_connectivity(grid) is False
    grid[3][3] = 1
    grid[3][5] = 1
    assert validate_connectivity(grid) is True


def test_connectivity_false_without_floor():
    assert validate_connectivity(grid_from_ascii("###\n###\n###")) is False


def test_flood_fill_from_wall_is_empty():
    grid = grid_from_ascii(RING_WITH_POCKETS)
    assert flood_fill(grid, (0, 0)) == set()
    assert (3, 3) not in flood_fill(grid, (1, 1))


def test_symmetry_detects_single_cell_break():
    grid = grid_from_ascii(RING_WITH_POCKETS)
    assert validate_symmetry(grid) is True
    grid[3][3] = 1
    assert validate_symmetry(grid) is False


def test_warp_rows_require_both_edges_open():
    grid = grid_from_ascii(WARP_GRID)
    assert validate_warp_rows(grid, [2]) is True
    # row 1 has walls on its edges, so only row 2 counts
    assert validate_warp_rows(grid, [1, 2]) is True
    assert validate_warp_rows(grid, [1]) is False
    assert validate_warp_rows(grid, []) is False


def test_warp_rows_more_than_three_rejected():
    grid = [[0] * 7 for _ in range(7)]
    assert validate_warp_rows(grid, [1, 2, 3]) is True
    assert validate_warp_rows(grid, [1, 2, 3, 4]) is False


def test_validate_composes_all_checks():
    grid = grid_from_ascii(WARP_GRID)
    verdict = validate(grid, [2])
    assert isinstance(verdict, MazeValidation)
    assert verdict == MazeValidation(connected=True, symmetric=True, warp_ok=True)
    assert verdict.ok
    grid[1][1] = 1
    verdict = validate(grid, [2])
    assert verdict.connected and verdict.warp_ok
    assert not verdict.symmetric
    assert not verdict.ok


def test_floor_components_largest_first():
    grid = grid_from_ascii(RING_WITH_POCKETS)
    comps = floor_components(grid)
    assert len(comps) == 3
    assert len(comps[0]) == 20
    assert {len(c) for c in comps[1:]} == {1}


def test_join_mirrored_opens_one_route_per_side():
    grid = grid_from_ascii(RING_WITH_POCKETS)
    assert join_floor_components(grid, mirror=True) == 2
    assert grid[3][2] == 0 and grid[3][6] == 0
    assert validate_connectivity(grid)
    assert is_mirrored(grid)


def test_join_without_mirror_reaches_every_pocket():
    grid = grid_from_ascii(RING_WITH_POCKETS)
    assert join_floor_components(grid) == 2
    assert validate_connectivity(grid)


def test_join_never_digs_blocked_cells():
    grid = grid_from_ascii(RING_WITH_POCKETS)
    walls = [(x, y) for y in range(1, 6) for x in range(1, 8) if grid[y][x] == 1]
    assert join_floor_components(grid, blocked=walls) == 0
    assert len(floor_components(grid)) == 3


def test_join_reaches_floor_on_the_border():
    grid = grid_from_ascii("""
#######
#.....#
.#....#
#######
""")
    assert join_floor_components(grid) == 1
    assert grid[2][1] == 0
    # the border itself is never dug
    assert grid[1][0] == 1 and grid[3][0] == 1
    assert validate_connectivity(grid)


def test_join_noop_when_connected():
    grid = grid_from_ascii(WARP_GRID)
    before = [row[:] for row in grid]
    assert join_floor_components(grid, mirror=True) == 0
    assert grid == before
