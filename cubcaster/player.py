"""Player placement on the map grid, and the built-in demo map."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

CAMERA_PLANE = 0.666

_HARD_MAP = (
    "111111111",
    "1E0000001",
    "101000101",
    "111000111",
    "100000001",
    "101000101",
    "111111111",
)

# dir_x, dir_y, plane_x, plane_y for each starting orientation.
_ORIENTATIONS = {
    "N": (0.0, -1.0, CAMERA_PLANE, 0.0),
    "S": (0.0, 1.0, -CAMERA_PLANE, 0.0),
    "E": (1.0, 0.0, 0.0, CAMERA_PLANE),
    "W": (-1.0, 0.0, 0.0, -CAMERA_PLANE),
}


@dataclass
class Player:
    """Position, viewing direction and camera plane of the player."""

    pos_x: float = 0.0
    pos_y: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0


def init_player(grid: Sequence[str]) -> Player:
    """Place the player at the centre of the first N, S, E or W cell.

    A grid without a player cell gives a player with every field zero.
    """
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            orientation = _ORIENTATIONS.get(cell)
            if orientation is not None:
                dir_x, dir_y, plane_x, plane_y = orientation
                return Player(x + 0.5, y + 0.5, dir_x, dir_y, plane_x, plane_y)
    return Player()


def create_hard_map() -> list[str]:
    """Return a fresh copy of the small built-in demo map."""
    return list(_HARD_MAP)