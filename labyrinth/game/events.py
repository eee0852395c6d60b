"""Game events returned from ``update()``; collaborators consume them read-only."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

PELLET = "pellet"
POWER = "power"
GHOST_CAPTURED = "ghost_captured"
LIFE_LOST = "life_lost"
EXTRA_LIFE = "extra_life"
LEVEL_CLEARED = "level_cleared"
MATCH_WON = "match_won"
MATCH_LOST = "match_lost"
CAPTURE = "capture"

EVENT_KINDS = frozenset(
    {PELLET, POWER, GHOST_CAPTURED, LIFE_LOST, EXTRA_LIFE, LEVEL_CLEARED, MATCH_WON, MATCH_LOST, CAPTURE}
)


@dataclass(frozen=True)
class GameEvent:
    kind: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.kind not in EVENT_KINDS:
            raise ValueError(f"unknown event kind: {self.kind}")

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, **self.data}


__all__ = [
    "GameEvent",
    "EVENT_KINDS",
    "PELLET",
    "POWER",
    "GHOST_CAPTURED",
    "LIFE_LOST",
    "EXTRA_LIFE",
    "LEVEL_CLEARED",
    "MATCH_WON",
    "MATCH_LOST",
    "CAPTURE",
]
