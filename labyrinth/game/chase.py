"""Pac-Man style chase game: one player, four pursuers, pellets and power items.

``ChaseGame.update(delta_ms, input)`` advances one tick and returns the
events it produced; ``snapshot()`` exposes a JSON-ready view. Nothing here
renders or plays audio.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from ..maze import MazeRng, build_maze, coerce_seed
from . import events as ev
from .board import Board
from .effects import EffectMap
from .entities import GHOST_TYPES, MODE_FRIGHT, MODE_FRUIT, STOP, Coord, Entity
from .events import GameEvent
from .inputs import InputState
from .movement import (
    advance_path,
    clear_path,
    move,
    next_direction,
    set_path,
    start_move,
    update_path_direction,
)
from .pathfinding import find_path_best_effort
from .pursuit import PursuitContext, pursuer_step, track_history
from .spawns import layout_pellets, pick_spawn_points

log = get_logger("labyrinth.chase")

PELLET_POINTS = 10
POWER_POINTS = 50
CAPTURE_POINTS = 200
EXTRA_LIFE_EVERY = 10000
START_LIVES = 3
MAX_LEVELS = 3

STATE_PLAYING = "playing"
STATE_WON = "won"
STATE_LOST = "lost"


def player_speed(level: int) -> float:
    return 5 + level * 0.25


def pursuer_speed(level: int) -> float:
    return 4.4 + level * 0.2


class ChaseGame:
    def __init__(self, seed: Optional[int] = None, cols: int = 28, rows: int = 31, max_levels: int = MAX_LEVELS):
        self.seed = coerce_seed(seed)
        self.log = log.bind(seed=self.seed)
        self.cols = cols
        self.rows = rows
        self.max_levels = max_levels
        self.level = 0
        self.score = 0
        self.lives = START_LIVES
        self.extra_life_at = EXTRA_LIFE_EVERY
        self.state = STATE_PLAYING
        self.now_ms = 0.0
        self.effects = EffectMap()
        self.start_level()

    # ---------------- level lifecycle ----------------------------------------------
    def start_level(self) -> None:
        self.level += 1
        self.maze = build_maze(self.seed, cols=self.cols, rows=self.rows, level=self.level)
        level_rng = MazeRng(self.maze.metrics.get("attempt_seed", self.seed))
        self.rng = level_rng.fork(self.level)
        self.ai_rng = level_rng.fork(self.level + 101)
        self.board = Board.from_maze(self.maze, self.rng)
        self.spawns = pick_spawn_points(self.board, self.rng, len(GHOST_TYPES))
        self.pellets, self.powers = layout_pellets(self.board, self.rng, self.spawns.player)
        self.effects.clear()
        self.player = Entity(id="player", role="player", x=self.spawns.player[0], y=self.spawns.player[1], is_ai=False)
        self.ghosts: List[Entity] = [
            Entity(id=kind, role=kind, x=spawn[0], y=spawn[1]) for kind, spawn in zip(GHOST_TYPES, self.spawns.ghosts)
        ]
        self.reset_entities()
        self.log.info(
            event="level_start",
            level=self.level,
            validated=self.maze.validated,
            pellets=len(self.pellets),
            powers=len(self.powers),
        )

    def reset_entities(self) -> None:
        self.player.reset(speed=player_speed(self.level))
        self.player.can_pass_walls = False
        for ghost in self.ghosts:
            ghost.reset(speed=pursuer_speed(self.level))
        self._sync_effects()

    # ---------------- tick --------------------------------------------------------
    def update(self, delta_ms: float, input: Optional[InputState] = None) -> List[GameEvent]:
        if self.state != STATE_PLAYING:
            return []
        self.now_ms += delta_ms
        out: List[GameEvent] = []
        level = self.level
        if input is not None:
            self.handle_input(input)
        self.board.update_doors(delta_ms, self.rng)
        self._update_player(delta_ms, out)
        if self.state != STATE_PLAYING or self.level != level:
            return out
        self._update_ghosts(delta_ms)
        self._check_collisions(out)
        self._sync_effects()
        return out

    def handle_input(self, input: InputState) -> None:
        if input.target is not None:
            self.set_path_to_target(tuple(input.target))
        if input.has_direction:
            clear_path(self.player)
            self.player.next_direction = input.direction()

    def set_path_to_target(self, target: Coord) -> bool:
        p = self.player
        result = find_path_best_effort(
            self.board.grid,
            p.tile,
            target,
            walkable=self.board.walkable_fn(p.can_pass_walls),
            links=self.board.portal_links(),
        )
        if result is None:
            return False
        return set_path(p, result.path, goal=target)

    def _update_player(self, delta_ms: float, out: List[GameEvent]) -> None:
        p = self.player
        if not p.moving:
            if p.using_path:
                advance_path(self.board, p)
                update_path_direction(p)
            d = next_direction(self.board, p)
            if d is not None:
                start_move(self.board, p, d)
            else:
                p.direction = STOP
                if p.using_path and p.path_goal is not None:
                    # stalled on a closed door or stale route
                    self.set_path_to_target(p.path_goal)
        if p.moving:
            speed = self.effects.player_speed(p.speed)
            if move(self.board, p, delta_ms, self.now_ms, speed):
                self._collect(p.tile, out)
                if self.state == STATE_PLAYING:
                    advance_path(self.board, p)

    def _update_ghosts(self, delta_ms: float) -> None:
        leader = next((g for g in self.ghosts if g.role == "blinky"), None)
        ctx = PursuitContext(self.player, leader, self.board.cols, self.board.rows)
        for ghost in self.ghosts:
            if not ghost.moving:
                pursuer_step(self.board, ghost, ctx, self.ai_rng)
            if ghost.moving:
                speed = self.effects.pursuer_speed(ghost.speed)
                if move(self.board, ghost, delta_ms, self.now_ms, speed):
                    track_history(ghost, self.player.moving, self.ai_rng)

    # ---------------- scoring -----------------------------------------------------
    def _add_score(self, points: int, out: List[GameEvent]) -> None:
        self.score += points
        if self.score >= self.extra_life_at:
            self.lives += 1
            self.extra_life_at += EXTRA_LIFE_EVERY
            out.append(GameEvent(ev.EXTRA_LIFE, {"lives": self.lives}))

    def _collect(self, tile: Coord, out: List[GameEvent]) -> None:
        if tile in self.pellets:
            self.pellets.discard(tile)
            out.append(GameEvent(ev.PELLET, {"x": tile[0], "y": tile[1]}))
            self._add_score(PELLET_POINTS, out)
        effect = self.powers.pop(tile, None)
        if effect is not None:
            out.append(GameEvent(ev.POWER, {"x": tile[0], "y": tile[1], "effect": effect}))
            self._add_score(POWER_POINTS, out)
            self.effects.activate(effect, self.now_ms)
            self._sync_effects()
        if not self.pellets and not self.powers:
            out.append(GameEvent(ev.LEVEL_CLEARED, {"level": self.level, "score": self.score}))
            if self.level >= self.max_levels:
                self.state = STATE_WON
                out.append(GameEvent(ev.MATCH_WON, {"score": self.score}))
                self.log.info(event="match_won", score=self.score)
            else:
                self.start_level()

    def _check_collisions(self, out: List[GameEvent]) -> None:
        for ghost in self.ghosts:
            if ghost.tile != self.player.tile:
                continue
            if ghost.mode in (MODE_FRIGHT, MODE_FRUIT) or self.effects.has("super"):
                self._add_score(CAPTURE_POINTS, out)
                out.append(GameEvent(ev.GHOST_CAPTURED, {"id": ghost.id}))
                ghost.place(*ghost.spawn)
            else:
                self._lose_life(out)
                return

    def _lose_life(self, out: List[GameEvent]) -> None:
        self.lives -= 1
        out.append(GameEvent(ev.LIFE_LOST, {"lives": self.lives}))
        if self.lives <= 0:
            self.state = STATE_LOST
            out.append(GameEvent(ev.MATCH_LOST, {"score": self.score}))
            self.log.info(event="match_lost", score=self.score, level=self.level)
            return
        self.reset_entities()

    def _sync_effects(self) -> None:
        self.effects.expire(self.now_ms)
        self.player.can_pass_walls = self.effects.has("super")
        mode = self.effects.pursuer_mode()
        for ghost in self.ghosts:
            ghost.mode = mode

    # ---------------- views -------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        snap = self.board.to_dict()
        snap.update(
            {
                "seed": self.seed,
                "level": self.level,
                "score": self.score,
                "lives": self.lives,
                "state": self.state,
                "now_ms": self.now_ms,
                "effects": self.effects.active(),
                "entities": [self.player.to_dict()] + [g.to_dict() for g in self.ghosts],
                "pellets": [list(t) for t in sorted(self.pellets)],
                "powers": [{"x": x, "y": y, "effect": e} for (x, y), e in sorted(self.powers.items())],
            }
        )
        return snap


__all__ = ["ChaseGame", "player_speed", "pursuer_speed", "STATE_PLAYING", "STATE_WON", "STATE_LOST"]
