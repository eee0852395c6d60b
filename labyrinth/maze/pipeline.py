"""Maze generation pipeline and retry loop.

``MazeGenerator`` runs one deterministic attempt for a given seed; ``build_maze``
wraps it in the validate/retry loop and never raises on generation failure:
after ``max_attempts`` invalid grids the last one is returned with
``validated=False`` and ``metrics['fallback'] = True``.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from ..logging_utils import get_logger
from . import carving
from .config import MazeConfig
from .connectivity import MazeValidation, join_floor_components, validate
from .features import GhostHouse, carve_ghost_house, create_warp_tunnels, link_door_upward
from .metrics import init_metrics
from .rng import MazeRng
from .rooms import carve_open_rooms
from .tiles import FLOOR, WALL, blank_grid, grid_to_ascii

log = get_logger("labyrinth.maze")

Coord = Tuple[int, int]


@dataclass
class Maze:
    grid: List[List[int]]
    ghost_house: GhostHouse
    warp_rows: List[int]
    room_cells: Set[Coord] = field(default_factory=set)
    seed: int = 0
    attempts: int = 1
    validated: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def cols(self) -> int:
        return len(self.grid[0])

    @property
    def rows(self) -> int:
        return len(self.grid)

    def to_ascii(self) -> str:
        return grid_to_ascii(self.grid)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'seed': self.seed,
            'cols': self.cols,
            'rows': self.rows,
            'grid': self.to_ascii().split("\n"),
            'ghost_house': self.ghost_house.to_dict(),
            'warp_rows': list(self.warp_rows),
            'validated': self.validated,
            'attempts': self.attempts,
            'metrics': self.metrics,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class MazeGenerator:
    """One generation attempt: half-maze passes, mirror, pen, warps."""

    def __init__(self, config: MazeConfig, seed: int):
        self.config = config
        self.seed = seed
        self.rng = MazeRng(seed)
        self.metrics: Dict[str, Any] = init_metrics()
        self.phase_ms: Dict[str, float] = {}

    def _phase(self, label, fn, *a, **k):
        ps = time.perf_counter()
        r = fn(*a, **k)
        self.phase_ms[label] = self.phase_ms.get(label, 0.0) + round((time.perf_counter() - ps) * 1000, 3)
        return r

    def generate(self) -> Tuple[List[List[int]], GhostHouse, List[int], Set[Coord]]:
        cfg, rng, m = self.config, self.rng, self.metrics
        cols, rows = cfg.cols, cfg.rows
        half_cols = cols // 2

        left = self._phase('carve', carving.carve_half_maze, half_cols, rows, rng, cfg.straight_bias)
        m['dead_ends_braided'] = self._phase('braid', carving.braid_dead_ends, left, rng, cfg.braid_passes)
        m['loops_added'] = self._phase('loops', carving.add_extra_loops, left, rng, cfg.loop_target)
        room_cells, m['rooms_carved'] = self._phase(
            'rooms', carve_open_rooms, left, rng, cfg.room_sizes, cfg.room_area_divisor
        )
        m['room_cells'] = len(room_cells)
        if cfg.join_pockets:
            # rooms may only touch a corridor diagonally
            m['pockets_joined'] += self._phase('room_join', join_floor_components, left)
        m['cells_thinned'] = self._phase('thin', carving.thin_double_corridors, left, cfg.thin_passes, room_cells)
        m['width_closures'] = self._phase(
            'single_width', carving.enforce_single_width, left, room_cells, cfg.single_width_cap
        )
        link_count = rng.int(*cfg.center_links)
        link_rows = self._phase('center_links', carving.open_center_links, left, rng, link_count)
        m['center_links_opened'] = len(link_rows)

        grid = self._phase('mirror', self._mirror, left, cols, rows, link_rows)
        house = self._phase('ghost_house', carve_ghost_house, grid, cfg.ghost_house_size)
        m['door_link_cells'] = self._phase('door_link', link_door_upward, grid, house)
        warp_rows = self._phase('warps', create_warp_tunnels, grid, rng, rng.int(*cfg.warp_count))
        if cfg.join_pockets:
            # the pen overwrites corridor cells; warp breaches may sit next to wall
            m['pockets_joined'] += self._phase(
                'join', join_floor_components, grid, blocked=house.wall_ring(), mirror=True
            )
        # mirrored room cells keep the full-grid picture consistent
        full_rooms = room_cells | {(cols - 1 - x, y) for x, y in room_cells}
        return grid, house, warp_rows, full_rooms

    @staticmethod
    def _mirror(left, cols: int, rows: int, link_rows=()):
        half_cols = len(left[0])
        grid = blank_grid(cols, rows, WALL)
        for y in range(rows):
            for x in range(half_cols):
                grid[y][x] = left[y][x]
                grid[y][cols - 1 - x] = left[y][x]
        if cols % 2:
            # odd width: the centre column belongs to neither half
            for y in link_rows:
                grid[y][half_cols] = FLOOR
        for x in range(cols):
            grid[0][x] = WALL
            grid[rows - 1][x] = WALL
        for y in range(rows):
            grid[y][0] = WALL
            grid[y][cols - 1] = WALL
        return grid


def coerce_seed(seed) -> int:
    if seed is None:
        return int(time.time() * 1000)
    return int(seed)


def build_maze(
    seed: Optional[int] = None,
    cols: int = 28,
    rows: int = 31,
    level: int = 0,
    config: Optional[MazeConfig] = None,
) -> Maze:
    """Generate a validated maze, retrying with ``base + level*1000 + attempt``."""
    if config is None:
        config = MazeConfig(cols=cols, rows=rows, seed=coerce_seed(seed), level=level)
    elif config.seed is None:
        config.seed = coerce_seed(seed)
    start = time.perf_counter()
    last = None
    verdict: Optional[MazeValidation] = None
    attempt = 0
    for attempt in range(config.max_attempts):
        gen = MazeGenerator(config, config.level_seed(attempt))
        grid, house, warp_rows, room_cells = gen.generate()
        verdict = validate(grid, warp_rows)
        last = (gen, grid, house, warp_rows, room_cells)
        if verdict.ok:
            break
        log.debug(
            event="maze_attempt_rejected",
            seed=gen.seed,
            attempt=attempt,
            connected=verdict.connected,
            symmetric=verdict.symmetric,
            warp_ok=verdict.warp_ok,
        )
    gen, grid, house, warp_rows, room_cells = last
    metrics = gen.metrics
    metrics['attempts'] = attempt + 1
    metrics['fallback'] = not verdict.ok
    metrics['phase_ms'] = gen.phase_ms
    metrics['attempt_seed'] = gen.seed
    metrics['runtime_ms'] = round((time.perf_counter() - start) * 1000, 3)
    if verdict.ok:
        log.info(event="maze_generated", seed=config.seed, level=config.level, attempts=attempt + 1)
    else:
        log.warn(
            event="maze_fallback",
            seed=config.seed,
            level=config.level,
            attempts=attempt + 1,
            connected=verdict.connected,
            symmetric=verdict.symmetric,
            warp_ok=verdict.warp_ok,
        )
    return Maze(
        grid=grid,
        ghost_house=house,
        warp_rows=warp_rows,
        room_cells=room_cells,
        seed=config.seed,
        attempts=attempt + 1,
        validated=verdict.ok,
        metrics=metrics,
    )


__all__ = ["Maze", "MazeGenerator", "build_maze", "coerce_seed"]
