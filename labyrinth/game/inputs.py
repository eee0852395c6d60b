"""Input and lobby slot records handed to the simulations by the caller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .entities import DIRS, STOP, Direction


@dataclass
class InputState:
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    target: Optional[Tuple[int, int]] = None

    @property
    def has_direction(self) -> bool:
        return self.up or self.down or self.left or self.right

    def direction(self) -> Direction:
        """Single queued direction; horizontal wins over vertical like the arrow handlers."""
        if self.right:
            return DIRS["right"]
        if self.left:
            return DIRS["left"]
        if self.down:
            return DIRS["down"]
        if self.up:
            return DIRS["up"]
        return STOP


@dataclass
class SlotState:
    id: str
    role: str
    is_ai: bool = True
    connected: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SlotState":
        return cls(
            id=str(data.get("id") or data.get("role") or ""),
            role=str(data.get("role") or ""),
            is_ai=bool(data.get("is_ai", data.get("isAI", True))),
            connected=bool(data.get("connected", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "role": self.role, "is_ai": self.is_ai, "connected": self.connected}


__all__ = ["InputState", "SlotState"]
