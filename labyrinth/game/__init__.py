"""Runtime simulation on generated mazes: pathfinding, movement, pursuit and the two game modes."""

from .board import Board, Door, Portal
from .chase import ChaseGame
from .effects import EffectMap
from .entities import Entity
from .events import GameEvent
from .inputs import InputState, SlotState
from .lobby import Lobby
from .pathfinding import PathResult, find_path, find_path_best_effort
from .pursuit import Decision
from .theseus import TheseusMatch

__all__ = [
    "Board",
    "ChaseGame",
    "Decision",
    "Door",
    "EffectMap",
    "Entity",
    "GameEvent",
    "InputState",
    "Lobby",
    "PathResult",
    "Portal",
    "SlotState",
    "TheseusMatch",
    "find_path",
    "find_path_best_effort",
]
