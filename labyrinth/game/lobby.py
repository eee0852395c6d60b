"""Match lobby: slot list, countdown and AI fill.

The countdown is driven by ``tick(elapsed_seconds)`` from whatever loop owns
the lobby; the start callback fires exactly once.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List

from ..logging_utils import get_logger
from .entities import MINOTAUR_ROLES
from .inputs import SlotState

log = get_logger("labyrinth.lobby")

LOBBY_COUNTDOWN = 60
SLOT_ROLES = ("theseus",) + MINOTAUR_ROLES


def default_slots() -> List[SlotState]:
    slots = [SlotState(id="theseus", role="theseus", is_ai=False, connected=True)]
    slots += [SlotState(id=f"{role}-ai", role=role, is_ai=True, connected=False) for role in MINOTAUR_ROLES]
    return slots


class Lobby:
    def __init__(self, on_start: Callable[[List[SlotState]], Any]):
        self.on_start = on_start
        self.slots: List[SlotState] = []
        self.countdown = LOBBY_COUNTDOWN
        self.counting = False
        self.started = False
        self._elapsed = 0.0

    def set_slots(self, slots: Iterable[Any]) -> None:
        self.slots = [s if isinstance(s, SlotState) else SlotState.from_dict(s) for s in slots]

    def start_countdown(self, seconds: int = LOBBY_COUNTDOWN) -> None:
        if self.counting or self.started:
            return
        self.countdown = seconds
        self.counting = True
        self._elapsed = 0.0

    def tick(self, elapsed_seconds: float) -> None:
        if not self.counting or self.started:
            return
        self._elapsed += elapsed_seconds
        while self._elapsed >= 1.0:
            self._elapsed -= 1.0
            self.countdown -= 1
            if self.countdown <= 0:
                self.fill_ai()
                self._start_match()
                return

    def force_start(self) -> None:
        if not self.slots:
            self.slots = default_slots()
        self.fill_ai()
        self._start_match()

    def fill_ai(self) -> None:
        for role in SLOT_ROLES:
            slot = next((s for s in self.slots if s.role == role), None)
            if slot is not None and not slot.connected:
                slot.is_ai = True

    def _start_match(self) -> None:
        if self.started:
            return
        self.started = True
        self.counting = False
        log.info(event="lobby_start", slots=len(self.slots), ai=sum(1 for s in self.slots if s.is_ai))
        self.on_start(self.slots)


__all__ = ["Lobby", "LOBBY_COUNTDOWN", "default_slots"]
