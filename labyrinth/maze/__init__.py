"""Procedural arcade maze generation.

Public contract:
    build_maze(seed=None, cols=28, rows=31, level=0, config=None) -> Maze
    Maze: grid[y][x] (FLOOR=0 / WALL=1), ghost_house, warp_rows, validated, metrics
"""

from .config import MazeConfig
from .connectivity import MazeValidation, validate, validate_connectivity, validate_symmetry, validate_warp_rows
from .features import GhostHouse
from .pipeline import Maze, MazeGenerator, build_maze, coerce_seed
from .rng import MazeRng
from .tiles import FLOOR, WALL

__all__ = [
    "FLOOR",
    "WALL",
    "GhostHouse",
    "Maze",
    "MazeConfig",
    "MazeGenerator",
    "MazeRng",
    "MazeValidation",
    "build_maze",
    "coerce_seed",
    "validate",
    "validate_connectivity",
    "validate_symmetry",
    "validate_warp_rows",
]
