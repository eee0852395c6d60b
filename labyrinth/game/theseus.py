"""Theseus match: one runner, four minotaurs and the thread trail.

Minotaurs under AI control re-plan an A* route to their role target when the
current route is empty or exhausted, plus a 10% chance per decision point.
Human-controlled entities take ``InputState`` like the runner does.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..logging_utils import get_logger
from ..maze import MazeRng, build_maze, coerce_seed
from . import events as ev
from .board import Board, build_portals
from .entities import MINOTAUR_ROLES, STOP, Coord, Entity, create_minotaur, create_theseus
from .events import GameEvent
from .inputs import InputState, SlotState
from .movement import advance_path, clear_path, move, next_direction, set_path, start_move, update_path_direction
from .pathfinding import find_path
from .pursuit import PursuitContext, target_for
from .spawns import random_floor

log = get_logger("labyrinth.theseus")

PATH_REFRESH_CHANCE = 0.1

STATE_WAITING = "waiting"
STATE_PLAYING = "playing"
STATE_LOST = "lost"


class TheseusMatch:
    def __init__(self, seed: Optional[int] = None, cols: int = 28, rows: int = 31):
        self.seed = coerce_seed(seed)
        self.log = log.bind(seed=self.seed)
        self.maze = build_maze(self.seed, cols=cols, rows=rows)
        match_rng = MazeRng(self.maze.metrics.get("attempt_seed", self.seed))
        self.rng = match_rng.fork(7)
        self.ai_rng = match_rng.fork(11)
        self.board = Board(
            self.maze.grid,
            self.maze.ghost_house,
            list(self.maze.warp_rows),
            portals=build_portals(self.maze.grid, self.maze.warp_rows),
        )
        self.theseus = create_theseus("theseus", (1, 1))
        self.minotaurs: List[Entity] = []
        self.thread: List[Coord] = []
        self.state = STATE_WAITING
        self.now_ms = 0.0

    @property
    def started(self) -> bool:
        return self.state != STATE_WAITING

    def setup_slots(self, slots: Iterable[Any]) -> bool:
        """Place the runner and the four minotaurs; only accepted before the match starts."""
        if self.started:
            self.log.warn(event="slots_rejected", reason="match_started")
            return False
        slots = [s if isinstance(s, SlotState) else SlotState.from_dict(s) for s in slots]
        runner = next((s for s in slots if s.role == "theseus"), slots[0] if slots else None)
        self.theseus = create_theseus(runner.id if runner and runner.id else "theseus", random_floor(self.board, self.rng, avoid_house=True))
        house_cells = list(self.maze.ghost_house.cells)
        self.minotaurs = []
        for index, role in enumerate(MINOTAUR_ROLES):
            slot = next((s for s in slots if s.role == role), None)
            spawn = house_cells[index] if index < len(house_cells) else random_floor(self.board, self.rng, avoid_house=True)
            self.minotaurs.append(
                create_minotaur(slot.id if slot and slot.id else f"{role}-{index}", role, spawn, slot.is_ai if slot else True)
            )
        self.thread = [self.theseus.tile]
        self.state = STATE_PLAYING
        self.log.info(event="match_start", humans=sum(1 for m in self.minotaurs if not m.is_ai))
        return True

    # ---------------- tick --------------------------------------------------------
    def update(
        self,
        delta_ms: float,
        input: Optional[InputState] = None,
        minotaur_inputs: Optional[Mapping[str, InputState]] = None,
    ) -> List[GameEvent]:
        if self.state != STATE_PLAYING:
            return []
        self.now_ms += delta_ms
        out: List[GameEvent] = []
        if input is not None:
            self._apply_input(self.theseus, input)
        self._drive(self.theseus, delta_ms)
        self._extend_thread()
        ctx = PursuitContext(self.theseus, self._leader(), self.board.cols, self.board.rows)
        minotaur_inputs = minotaur_inputs or {}
        for m in self.minotaurs:
            if m.is_ai:
                self._refresh_ai_path(m, ctx)
            elif m.id in minotaur_inputs:
                self._apply_input(m, minotaur_inputs[m.id])
            self._drive(m, delta_ms)
            self._cut_thread(m.tile)
            if m.tile == self.theseus.tile:
                out.append(GameEvent(ev.CAPTURE, {"id": m.id, "role": m.role, "x": m.tile_x, "y": m.tile_y}))
                out.append(GameEvent(ev.MATCH_LOST, {"captured_by": m.id}))
                self.state = STATE_LOST
                self.log.info(event="theseus_captured", by=m.role, elapsed_ms=self.now_ms)
                break
        return out

    def _leader(self) -> Optional[Entity]:
        return next((m for m in self.minotaurs if m.role == "hunter"), None)

    def _apply_input(self, entity: Entity, input: InputState) -> None:
        if input.target is not None:
            path = find_path(self.board.grid, entity.tile, tuple(input.target))
            set_path(entity, path)
        if input.has_direction:
            clear_path(entity)
            entity.next_direction = input.direction()

    def _refresh_ai_path(self, m: Entity, ctx: PursuitContext) -> None:
        if m.moving:
            return
        exhausted = not m.path or m.path_index >= len(m.path) - 1
        if not exhausted and not self.ai_rng.chance(PATH_REFRESH_CHANCE):
            return
        target = target_for(m, ctx)
        if not self.board.is_walkable(*target):
            target = ctx.pursued.tile
        path = find_path(self.board.grid, m.tile, target)
        # unreachable: keep the old route and retry next tick
        set_path(m, path)

    def _drive(self, entity: Entity, delta_ms: float) -> None:
        if not entity.moving:
            if entity.using_path:
                advance_path(self.board, entity)
                update_path_direction(entity)
            d = next_direction(self.board, entity)
            if d is not None:
                start_move(self.board, entity, d)
            else:
                entity.direction = STOP
        if entity.moving and move(self.board, entity, delta_ms, self.now_ms):
            advance_path(self.board, entity)

    # ---------------- thread ------------------------------------------------------
    def _extend_thread(self) -> None:
        tile = self.theseus.tile
        if not self.thread or self.thread[-1] != tile:
            self.thread.append(tile)

    def _cut_thread(self, tile: Coord) -> None:
        try:
            index = self.thread.index(tile)
        except ValueError:
            return
        del self.thread[: index + 1]

    # ---------------- views -------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        snap = self.board.to_dict()
        snap.update(
            {
                "seed": self.seed,
                "state": self.state,
                "now_ms": self.now_ms,
                "entities": [self.theseus.to_dict()] + [m.to_dict() for m in self.minotaurs],
                "thread": [list(t) for t in self.thread],
            }
        )
        return snap


__all__ = ["TheseusMatch", "PATH_REFRESH_CHANCE", "STATE_WAITING", "STATE_PLAYING", "STATE_LOST"]
