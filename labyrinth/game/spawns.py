"""Spawn points and pellet layout."""

from __future__ import annotations

from typing import Dict, List, NamedTuple, Set, Tuple

from .effects import POWER_TYPES
from .entities import Coord

POWER_COUNT = (3, 10)
FALLBACK_TILE: Coord = (1, 1)


class SpawnPoints(NamedTuple):
    player: Coord
    ghosts: List[Coord]


def pick_spawn_points(board, rng, ghost_count: int = 4) -> SpawnPoints:
    """Player on a shuffled open tile outside the pen; pursuers inside it when it is big enough."""
    floors = rng.shuffle(board.floor_tiles(include_house=False))
    player = floors[0] if floors else FALLBACK_TILE
    house_cells = list(board.ghost_house.cells) if board.ghost_house else []
    if len(house_cells) >= ghost_count:
        ghosts = rng.shuffle(house_cells)[:ghost_count]
    else:
        remaining = [t for t in floors if t != player]
        ghosts = rng.shuffle(remaining)[:ghost_count]
    return SpawnPoints(player, ghosts)


def random_floor(board, rng, avoid_house: bool = False) -> Coord:
    floors = board.floor_tiles(include_house=not avoid_house)
    if not floors:
        return FALLBACK_TILE
    return rng.pick(floors)


def layout_pellets(board, rng, player_spawn: Coord) -> Tuple[Set[Coord], Dict[Coord, str]]:
    """Scatter power items, then a pellet on every other eligible floor tile.

    Eligible tiles exclude portals, the pen interior and the player spawn.
    """
    power_count = rng.int(*POWER_COUNT)
    portal_tiles = {(p.x, p.y) for p in board.portals}
    tiles = [t for t in board.floor_tiles(include_house=False) if t not in portal_tiles]
    power_tiles = set(rng.shuffle(tiles)[:power_count])
    pellets: Set[Coord] = set()
    powers: Dict[Coord, str] = {}
    for tile in tiles:
        if tile == tuple(player_spawn):
            continue
        if tile in power_tiles:
            powers[tile] = rng.pick(POWER_TYPES)
        else:
            pellets.add(tile)
    return pellets, powers


__all__ = ["POWER_COUNT", "SpawnPoints", "pick_spawn_points", "random_floor", "layout_pellets"]
