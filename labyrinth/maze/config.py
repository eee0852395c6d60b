import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

# (w, h, weight) room size table; 1x1 nubs dominate, large rooms are rare
DEFAULT_ROOM_SIZES: Tuple[Tuple[int, int, float], ...] = (
    (1, 1, 95),
    (1, 2, 1),
    (2, 1, 1),
    (2, 2, 0.5),
    (3, 2, 0.3),
    (2, 3, 0.3),
    (4, 4, 0.1),
)

_ENV_BOOL_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class MazeConfig:
    cols: int = 28
    rows: int = 31
    seed: Optional[int] = None
    level: int = 0
    straight_bias: float = 0.7
    braid_passes: int = 2
    loop_target: int = 6
    room_area_divisor: int = 40
    room_sizes: Tuple[Tuple[int, int, float], ...] = field(default=DEFAULT_ROOM_SIZES)
    thin_passes: int = 3
    single_width_cap: int = 200
    center_links: Tuple[int, int] = (2, 4)
    ghost_house_size: Tuple[int, int] = (6, 5)
    warp_count: Tuple[int, int] = (1, 3)
    max_attempts: int = 30
    join_pockets: bool = True

    def __post_init__(self):
        if self.cols < 7 or self.rows < 7:
            raise ValueError(f"maze must be at least 7x7, got {self.cols}x{self.rows}")
        # Environment override support (mirrors the app config keys)
        if "MAZE_MAX_ATTEMPTS" in os.environ:
            try:
                self.max_attempts = max(1, int(os.environ["MAZE_MAX_ATTEMPTS"]))
            except ValueError:
                pass
        if "MAZE_JOIN_POCKETS" in os.environ:
            self.join_pockets = os.environ["MAZE_JOIN_POCKETS"].lower() not in _ENV_BOOL_FALSE
        # Flask app config overrides (highest precedence)
        try:
            from flask import current_app, has_app_context

            if has_app_context():
                cfg = current_app.config
                if "MAZE_MAX_ATTEMPTS" in cfg:
                    self.max_attempts = max(1, int(cfg["MAZE_MAX_ATTEMPTS"]))
                if "MAZE_JOIN_POCKETS" in cfg:
                    self.join_pockets = bool(cfg["MAZE_JOIN_POCKETS"])
        except RuntimeError:
            pass

    def level_seed(self, attempt: int = 0) -> int:
        base = self.seed if self.seed is not None else 0
        return base + self.level * 1000 + attempt


__all__ = ["MazeConfig", "DEFAULT_ROOM_SIZES"]
