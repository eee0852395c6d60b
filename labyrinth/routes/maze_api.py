"""
project: Labyrinth Arcade
module: maze_api.py
License: MIT

Maze generation and pathfinding API routes.

GET /api/maze        generated maze JSON for (seed, cols, rows, level)
GET /api/maze/path   A* (or best-effort) route between two tiles of that maze
"""

import hashlib
import os
import re
import threading
import time

from flask import Blueprint, current_app, jsonify, request

from labyrinth.game.board import Board, build_portals
from labyrinth.game.pathfinding import find_path, find_path_best_effort
from labyrinth.logging_utils import get_logger
from labyrinth.maze import MazeConfig, build_maze

log = get_logger("labyrinth.api")

SEED_MAX = 9223372036854775807
_INT_SEED = re.compile(r"[+-]?[0-9]+")
MIN_DIM = 7
MAX_DIM = 99
MAX_LEVEL = 99

bp_maze = Blueprint("maze", __name__)


class BadRequest(ValueError):
    pass


def _clamp_seed(value: int) -> int:
    if -SEED_MAX <= value <= SEED_MAX:
        return value
    return value % SEED_MAX


def _coerce_seed(raw):
    """Convert a provided seed (int or str) into an int; None => time based.

    Integers and signed digit strings pass through unchanged (reduced only when
    they overflow a signed 64-bit range); any other text is hashed.
    """
    if raw is None:
        return int(time.time() * 1000)
    if isinstance(raw, int):
        return _clamp_seed(raw)
    s = str(raw).strip()
    if not s:
        return int(time.time() * 1000)
    if _INT_SEED.fullmatch(s):
        return _clamp_seed(int(s))
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def _int_arg(name, default=None, lo=None, hi=None):
    raw = request.args.get(name)
    if raw is None or raw == "":
        if default is None:
            raise BadRequest(f"missing parameter: {name}")
        return default
    try:
        value = int(raw)
    except ValueError:
        raise BadRequest(f"invalid integer for {name}: {raw!r}")
    if (lo is not None and value < lo) or (hi is not None and value > hi):
        raise BadRequest(f"{name} out of range: {value}")
    return value


# Simple in-process cache (seed, cols, rows, level) -> Maze, guarded by a lock for threaded servers.
_maze_cache = {}
_maze_cache_lock = threading.Lock()
_MAZE_CACHE_MAX = 8  # small LRU-ish manual cap


def get_cached_maze(seed: int, cols: int, rows: int, level: int = 0):
    if os.environ.get("MAZE_DISABLE_CACHE") == "1":
        return build_maze(config=MazeConfig(cols=cols, rows=rows, seed=seed, level=level))
    key = (seed, cols, rows, level)
    with _maze_cache_lock:
        maze = _maze_cache.get(key)
        if maze is not None:
            return maze
    maze = build_maze(config=MazeConfig(cols=cols, rows=rows, seed=seed, level=level))
    with _maze_cache_lock:
        _maze_cache[key] = maze
        if len(_maze_cache) > _MAZE_CACHE_MAX:
            first_key = next(iter(_maze_cache.keys()))
            if first_key != key:
                _maze_cache.pop(first_key, None)
    return maze


def clear_maze_cache():
    with _maze_cache_lock:
        _maze_cache.clear()


def _maze_from_request():
    cfg = current_app.config
    seed = _coerce_seed(request.args.get("seed"))
    cols = _int_arg("cols", int(cfg.get("MAZE_COLS", 28)), MIN_DIM, MAX_DIM)
    rows = _int_arg("rows", int(cfg.get("MAZE_ROWS", 31)), MIN_DIM, MAX_DIM)
    level = _int_arg("level", 0, 0, MAX_LEVEL)
    return get_cached_maze(seed, cols, rows, level)


@bp_maze.errorhandler(BadRequest)
def _bad_request(e):
    return jsonify({"error": str(e)}), 400


@bp_maze.route("/api/maze")
def maze():
    """
    Return a generated maze.
    Response: { 'seed', 'cols', 'rows', 'grid': ['#.#..', ...], 'ghost_house', 'warp_rows',
                'validated', 'attempts', 'metrics' }
    """
    m = _maze_from_request()
    return jsonify(m.to_dict())


@bp_maze.route("/api/maze/path")
def maze_path():
    """
    Route between (sx, sy) and (gx, gy) on the maze for the same query parameters.
    With best_effort=1 an unreachable goal yields the route to the closest reachable tile.
    """
    m = _maze_from_request()
    sx = _int_arg("sx", lo=0, hi=m.cols - 1)
    sy = _int_arg("sy", lo=0, hi=m.rows - 1)
    gx = _int_arg("gx", lo=0, hi=m.cols - 1)
    gy = _int_arg("gy", lo=0, hi=m.rows - 1)
    best_effort = request.args.get("best_effort", "0").lower() in ("1", "true", "yes")
    start, goal = (sx, sy), (gx, gy)
    if best_effort:
        links = Board(m.grid, m.ghost_house, m.warp_rows, portals=build_portals(m.grid, m.warp_rows)).portal_links()
        result = find_path_best_effort(m.grid, start, goal, links=links)
        path = result.path if result else []
        target = list(result.target) if result else None
    else:
        path = find_path(m.grid, start, goal)
        target = list(goal) if path else None
    log.debug(event="maze_path", seed=m.seed, start=f"{sx},{sy}", goal=f"{gx},{gy}", steps=len(path))
    return jsonify(
        {
            "seed": m.seed,
            "start": [sx, sy],
            "goal": [gx, gy],
            "best_effort": best_effort,
            "reachable": bool(path) and tuple(path[-1]) == goal,
            "target": target,
            "path": [list(p) for p in path],
            "length": len(path),
        }
    )
