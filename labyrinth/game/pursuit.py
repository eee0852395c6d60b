"""Pursuer target selection, direction choice and the anti-loop breaker.

Role heuristics are looked up through ``ROLE_STRATEGY`` -> ``TARGETERS`` so
the chase ghosts and the Theseus minotaurs share one implementation:

    chase   (blinky, hunter)   the pursued entity's tile
    cutoff  (pinky, warden)    4 tiles ahead of the pursued heading
    flank   (inky, tracker)    leader vector reflected through 2 tiles ahead
    ambush  (clyde, brute)     chase beyond 8 tiles, else the bottom-left corner

All targets are clamped into the grid interior.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, NamedTuple, Optional

from .entities import MODE_FRIGHT, MODE_FRUIT, STOP, Coord, Direction, Entity, reverse
from .movement import start_move

CUTOFF_LOOKAHEAD = 4
FLANK_LOOKAHEAD = 2
AMBUSH_RADIUS = 8
HISTORY_LEN = 6
LOOP_WINDOW = 5
LOOP_THRESHOLD = (2, 5)

REASON_FORCED = "forced_random"
REASON_RANDOM = "random"
REASON_SCORED = "scored"


class Decision(NamedTuple):
    direction: Direction
    reason: str


class PursuitContext(NamedTuple):
    pursued: Entity
    leader: Optional[Entity]
    cols: int
    rows: int


def clamp_target(target: Coord, cols: int, rows: int) -> Coord:
    x, y = target
    return (min(max(x, 1), cols - 2), min(max(y, 1), rows - 2))


def chase_target(entity: Entity, ctx: PursuitContext) -> Coord:
    return ctx.pursued.tile


def cutoff_target(entity: Entity, ctx: PursuitContext) -> Coord:
    px, py = ctx.pursued.tile
    dx, dy = ctx.pursued.direction
    return (px + dx * CUTOFF_LOOKAHEAD, py + dy * CUTOFF_LOOKAHEAD)


def flank_target(entity: Entity, ctx: PursuitContext) -> Coord:
    px, py = ctx.pursued.tile
    dx, dy = ctx.pursued.direction
    ahead = (px + dx * FLANK_LOOKAHEAD, py + dy * FLANK_LOOKAHEAD)
    if ctx.leader is None:
        return ahead
    lx, ly = ctx.leader.tile
    return (2 * ahead[0] - lx, 2 * ahead[1] - ly)


def ambush_target(entity: Entity, ctx: PursuitContext) -> Coord:
    px, py = ctx.pursued.tile
    if math.dist(entity.tile, (px, py)) > AMBUSH_RADIUS:
        return (px, py)
    return (1, ctx.rows - 2)


TARGETERS: Dict[str, Callable[[Entity, PursuitContext], Coord]] = {
    "chase": chase_target,
    "cutoff": cutoff_target,
    "flank": flank_target,
    "ambush": ambush_target,
}

ROLE_STRATEGY: Dict[str, str] = {
    "blinky": "chase",
    "hunter": "chase",
    "pinky": "cutoff",
    "warden": "cutoff",
    "inky": "flank",
    "tracker": "flank",
    "clyde": "ambush",
    "brute": "ambush",
}


def target_for(entity: Entity, ctx: PursuitContext) -> Coord:
    """Clamped target tile for ``entity``; frightened pursuers key off the pursued tile."""
    if entity.mode in (MODE_FRIGHT, MODE_FRUIT):
        return clamp_target(ctx.pursued.tile, ctx.cols, ctx.rows)
    strategy = ROLE_STRATEGY.get(entity.role, "chase")
    return clamp_target(TARGETERS[strategy](entity, ctx), ctx.cols, ctx.rows)


def candidate_directions(board, entity: Entity) -> List[Direction]:
    options = board.available_directions(entity.tile_x, entity.tile_y)
    if not options:
        return []
    back = reverse(entity.direction)
    filtered = [d for d in options if d != back]
    return filtered or options


def choose_direction(board, entity: Entity, target: Coord, rng) -> Optional[Decision]:
    choices = candidate_directions(board, entity)
    if not choices:
        return None
    if entity.force_random:
        entity.force_random = False
        return Decision(rng.pick(choices), REASON_FORCED)
    if entity.mode == MODE_FRUIT:
        return Decision(rng.pick(choices), REASON_RANDOM)
    scored = [
        (math.dist((entity.tile_x + dx, entity.tile_y + dy), target), i, (dx, dy))
        for i, (dx, dy) in enumerate(choices)
    ]
    if entity.mode == MODE_FRIGHT:
        best = min(scored, key=lambda s: (-s[0], s[1]))
    else:
        best = min(scored, key=lambda s: (s[0], s[1]))
    return Decision(best[2], REASON_SCORED)


def track_history(entity: Entity, pursued_moving: bool, rng) -> bool:
    """Record the tile just reached; returns True when the breaker trips."""
    if entity.loop_threshold <= 0:
        entity.loop_threshold = rng.int(*LOOP_THRESHOLD)
    entity.history.append(entity.tile)
    if len(entity.history) > HISTORY_LEN:
        del entity.history[0]
    if pursued_moving:
        entity.loop_count = 0
        entity.force_random = False
        return False
    recent = entity.history[-LOOP_WINDOW:]
    if len(set(recent)) <= 2 and len(recent) >= 4:
        entity.loop_count += 1
    else:
        entity.loop_count = 0
    if entity.loop_count >= entity.loop_threshold:
        entity.force_random = True
        entity.loop_count = 0
        entity.loop_threshold = rng.int(*LOOP_THRESHOLD)
        return True
    return False


def pursuer_step(board, entity: Entity, ctx: PursuitContext, rng) -> Optional[Decision]:
    """Decide and start the next move for an idle AI pursuer."""
    if entity.moving:
        return None
    decision = choose_direction(board, entity, target_for(entity, ctx), rng)
    if decision is None:
        entity.direction = STOP
        return None
    start_move(board, entity, decision.direction)
    return decision


__all__ = [
    "Decision",
    "PursuitContext",
    "TARGETERS",
    "ROLE_STRATEGY",
    "REASON_FORCED",
    "REASON_RANDOM",
    "REASON_SCORED",
    "clamp_target",
    "chase_target",
    "cutoff_target",
    "flank_target",
    "ambush_target",
    "target_for",
    "candidate_directions",
    "choose_direction",
    "track_history",
    "pursuer_step",
]
