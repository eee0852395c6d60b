"""Timed power effects for the chase game.

Effects live in an explicit effect -> expiry (ms) map. Activating an effect
that is already running restarts its timer.

Supported effects:
- speed:   player moves 1.4x faster.
- slow:    pursuers move at 0.6x.
- fright:  pursuers flee (mode ``fright``) and can be captured.
- glutton: pursuers wander at random (mode ``fruit``) and can be captured.
- super:   player passes through walls and captures on contact.
"""

from __future__ import annotations

from typing import Dict, List

from .entities import MODE_FRIGHT, MODE_FRUIT, MODE_NORMAL

POWER_TYPES = ("speed", "slow", "fright", "glutton", "super")
EFFECT_DURATION_MS = 10000

PLAYER_SPEED_MULTIPLIER = {"speed": 1.4}
PURSUER_SPEED_MULTIPLIER = {"slow": 0.6}


class EffectMap:
    def __init__(self):
        self._expiry: Dict[str, float] = {}

    def activate(self, effect: str, now_ms: float, duration_ms: float = EFFECT_DURATION_MS) -> None:
        if effect not in POWER_TYPES:
            raise ValueError(f"unknown effect: {effect}")
        self._expiry[effect] = now_ms + duration_ms

    def expire(self, now_ms: float) -> List[str]:
        expired = [k for k, until in self._expiry.items() if now_ms >= until]
        for k in expired:
            del self._expiry[k]
        return expired

    def has(self, effect: str) -> bool:
        return effect in self._expiry

    def expires_at(self, effect: str):
        return self._expiry.get(effect)

    def clear(self) -> None:
        self._expiry.clear()

    def active(self) -> List[str]:
        return sorted(self._expiry)

    def pursuer_mode(self) -> str:
        if self.has("glutton"):
            return MODE_FRUIT
        if self.has("fright"):
            return MODE_FRIGHT
        return MODE_NORMAL

    def player_speed(self, base: float) -> float:
        for effect, mult in PLAYER_SPEED_MULTIPLIER.items():
            if self.has(effect):
                base *= mult
        return base

    def pursuer_speed(self, base: float) -> float:
        for effect, mult in PURSUER_SPEED_MULTIPLIER.items():
            if self.has(effect):
                base *= mult
        return base

    def to_dict(self) -> Dict[str, float]:
        return dict(self._expiry)


__all__ = ["POWER_TYPES", "EFFECT_DURATION_MS", "EffectMap"]
