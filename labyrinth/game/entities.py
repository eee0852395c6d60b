"""Entities, directions and role constants shared by both simulations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

Coord = Tuple[int, int]
Direction = Tuple[int, int]

STOP: Direction = (0, 0)
DIRS: Dict[str, Direction] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
# decision order for AI scans: up, down, left, right
DIRECTION_ORDER: Tuple[Direction, ...] = (DIRS["up"], DIRS["down"], DIRS["left"], DIRS["right"])
DIRECTION_NAMES: Dict[Direction, str] = {v: k for k, v in DIRS.items()}

GHOST_TYPES = ("blinky", "pinky", "inky", "clyde")
MINOTAUR_ROLES = ("hunter", "warden", "tracker", "brute")

# tiles per second
ROLE_SPEED = {
    "theseus": 6.0,
    "hunter": 5.2,
    "warden": 4.6,
    "tracker": 4.8,
    "brute": 4.4,
}

MODE_NORMAL = "normal"
MODE_FRIGHT = "fright"
MODE_FRUIT = "fruit"


def reverse(direction: Direction) -> Direction:
    return (-direction[0], -direction[1])


@dataclass
class Entity:
    id: str
    role: str
    x: float
    y: float
    speed: float = 5.0
    direction: Direction = STOP
    next_direction: Direction = STOP
    moving: bool = False
    target: Optional[Coord] = None
    is_ai: bool = True
    mode: str = MODE_NORMAL
    can_pass_walls: bool = False
    last_portal_ms: Optional[float] = None
    # path following (tap-to-move or AI refresh)
    path: List[Coord] = field(default_factory=list)
    path_index: int = 0
    path_goal: Optional[Coord] = None
    # anti-loop breaker state
    history: List[Coord] = field(default_factory=list)
    loop_count: int = 0
    loop_threshold: int = 0
    force_random: bool = False
    spawn: Optional[Coord] = None

    def __post_init__(self):
        self.tile_x = int(round(self.x))
        self.tile_y = int(round(self.y))
        if self.spawn is None:
            self.spawn = (self.tile_x, self.tile_y)

    @property
    def tile(self) -> Coord:
        return (self.tile_x, self.tile_y)

    @property
    def using_path(self) -> bool:
        return bool(self.path)

    def place(self, x: int, y: int) -> None:
        """Put the entity exactly on tile (x, y) and drop any in-flight move."""
        self.x, self.y = float(x), float(y)
        self.tile_x, self.tile_y = x, y
        self.moving = False
        self.target = None

    def reset(self, speed: Optional[float] = None) -> None:
        self.place(*self.spawn)
        self.direction = STOP
        self.next_direction = STOP
        self.mode = MODE_NORMAL
        self.last_portal_ms = None
        self.path = []
        self.path_index = 0
        self.path_goal = None
        self.history = []
        self.loop_count = 0
        self.force_random = False
        if speed is not None:
            self.speed = speed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role,
            "x": round(self.x, 4),
            "y": round(self.y, 4),
            "tile": list(self.tile),
            "direction": DIRECTION_NAMES.get(self.direction),
            "mode": self.mode,
            "is_ai": self.is_ai,
        }


def create_theseus(id: str, position: Coord) -> Entity:
    return Entity(id=id, role="theseus", x=position[0], y=position[1], speed=ROLE_SPEED["theseus"], is_ai=False)


def create_minotaur(id: str, role: str, position: Coord, is_ai: bool = True) -> Entity:
    return Entity(id=id, role=role, x=position[0], y=position[1], speed=ROLE_SPEED[role], is_ai=is_ai)


__all__ = [
    "Coord",
    "Direction",
    "STOP",
    "DIRS",
    "DIRECTION_ORDER",
    "DIRECTION_NAMES",
    "GHOST_TYPES",
    "MINOTAUR_ROLES",
    "ROLE_SPEED",
    "MODE_NORMAL",
    "MODE_FRIGHT",
    "MODE_FRUIT",
    "reverse",
    "Entity",
    "create_theseus",
    "create_minotaur",
]
