"""Tile-to-tile movement state machine.

An entity is Idle (``moving`` false) or Moving toward ``target``. Idle
entities pick a validated direction with ``start_move``; ``step_entity``
interpolates and snaps to exact integer coordinates on arrival, after which
``handle_portal`` may teleport the entity. Time is in milliseconds.
"""

from __future__ import annotations

import math
from typing import Optional

from .entities import STOP, Direction, Entity

PORTAL_COOLDOWN_MS = 500
# remaining distance (tiles) treated as arrival
ARRIVAL_EPSILON = 0.05


def next_direction(board, entity: Entity) -> Optional[Direction]:
    """Queued direction if open, else keep heading if still open, else None."""
    nd = entity.next_direction
    if nd == STOP:
        return None
    if board.is_walkable(entity.tile_x + nd[0], entity.tile_y + nd[1], entity.can_pass_walls):
        return nd
    d = entity.direction
    if d != STOP and board.is_walkable(entity.tile_x + d[0], entity.tile_y + d[1], entity.can_pass_walls):
        return d
    return None


def start_move(board, entity: Entity, direction: Optional[Direction]) -> bool:
    if entity.moving or direction is None or direction == STOP:
        return False
    tx, ty = entity.tile_x + direction[0], entity.tile_y + direction[1]
    if not board.is_walkable(tx, ty, entity.can_pass_walls):
        return False
    entity.direction = direction
    entity.target = (tx, ty)
    entity.moving = True
    return True


def step_entity(entity: Entity, delta_ms: float, speed: Optional[float] = None) -> bool:
    """Advance toward the target tile; True on the tick the entity arrives."""
    if not entity.moving or entity.target is None:
        return False
    speed = entity.speed if speed is None else speed
    tx, ty = entity.target
    dx, dy = tx - entity.x, ty - entity.y
    remaining = math.hypot(dx, dy)
    step = speed * (delta_ms / 1000.0)
    if remaining - step <= ARRIVAL_EPSILON:
        entity.place(tx, ty)
        return True
    entity.x += dx / remaining * step
    entity.y += dy / remaining * step
    return False


def handle_portal(board, entity: Entity, now_ms: float) -> bool:
    portal = board.portal_at(entity.tile_x, entity.tile_y)
    if portal is None:
        return False
    if entity.last_portal_ms is not None and now_ms - entity.last_portal_ms < PORTAL_COOLDOWN_MS:
        return False
    pair = board.portal_pair(portal)
    if pair is None:
        return False
    entity.place(pair.x, pair.y)
    entity.last_portal_ms = now_ms
    return True


def move(board, entity: Entity, delta_ms: float, now_ms: float, speed: Optional[float] = None) -> bool:
    """Step a moving entity and run the portal check on arrival."""
    arrived = step_entity(entity, delta_ms, speed)
    if arrived:
        handle_portal(board, entity, now_ms)
    return arrived


# ---------------- path following -------------------------------------------------


def set_path(entity: Entity, path, goal=None) -> bool:
    """Adopt ``path`` (start tile first) when it has somewhere to go."""
    if not path or len(path) < 2:
        return False
    entity.path = [tuple(p) for p in path]
    entity.path_index = 1
    entity.path_goal = tuple(goal) if goal is not None else entity.path[-1]
    return True


def clear_path(entity: Entity) -> None:
    entity.path = []
    entity.path_index = 0
    entity.path_goal = None


def advance_path(board, entity: Entity) -> None:
    """Move the cursor past the node the entity stands on, or past a portal hop."""
    if not entity.path or entity.path_index >= len(entity.path):
        return
    node = entity.path[entity.path_index]
    if node == entity.tile:
        entity.path_index += 1
        return
    if entity.path_index < len(entity.path) - 1:
        after = entity.path[entity.path_index + 1]
        if board.portal_at(*node) is not None and after == entity.tile:
            entity.path_index += 2


def update_path_direction(entity: Entity) -> None:
    if not entity.path or entity.path_index >= len(entity.path):
        clear_path(entity)
        entity.next_direction = STOP
        return
    nx, ny = entity.path[entity.path_index]
    dx, dy = nx - entity.tile_x, ny - entity.tile_y
    if abs(dx) + abs(dy) == 1:
        entity.next_direction = (dx, dy)


__all__ = [
    "PORTAL_COOLDOWN_MS",
    "ARRIVAL_EPSILON",
    "next_direction",
    "start_move",
    "step_entity",
    "handle_portal",
    "move",
    "set_path",
    "clear_path",
    "advance_path",
    "update_path_direction",
]
