"""Casting rays through the map grid and sizing the wall slices they hit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .player import Player

_FAR = 1e30


@dataclass
class Ray:
    """State of one ray walked through the grid cell by cell."""

    map_x: int
    map_y: int
    step_x: int
    step_y: int
    delta_dst_x: float
    delta_dst_y: float
    side_dst_x: float
    side_dst_y: float
    side: int = 0
    hit: bool = False


@dataclass(frozen=True)
class WallSlice:
    """Vertical span of one screen column covered by a wall.

    ``side`` is 0 for a wall crossed along x and 1 for one crossed along y.
    Rows ``draw_start`` up to, not including, ``draw_end`` are wall.
    """

    wall_dist: float
    height: int
    draw_start: int
    draw_end: int
    side: int


def camera_ray(player: Player, x: int, width: int) -> tuple[float, float]:
    """Direction ``(ray_dir_x, ray_dir_y)`` of the ray for screen column ``x``."""
    camera_x = 2 * x / width - 1
    return (
        player.dir_x + player.plane_x * camera_x,
        player.dir_y + player.plane_y * camera_x,
    )


def _delta(direction: float) -> float:
    return _FAR if direction == 0 else abs(1 / direction)


def _cell(grid: Sequence[str], y: int, x: int) -> str:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    raise ValueError(f"ray left the map at ({x}, {y})")


def cast_ray(
    grid: Sequence[str], player: Player, ray_dir_x: float, ray_dir_y: float
) -> Ray:
    """Walk a ray from the player until it enters a wall cell.

    Raises ValueError if the ray leaves the grid before hitting a wall.
    """
    map_x = int(player.pos_x)
    map_y = int(player.pos_y)
    delta_x = _delta(ray_dir_x)
    delta_y = _delta(ray_dir_y)
    if ray_dir_x < 0:
        step_x, side_x = -1, (player.pos_x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - player.pos_x) * delta_x
    if ray_dir_y < 0:
        step_y, side_y = -1, (player.pos_y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - player.pos_y) * delta_y
    ray = Ray(map_x, map_y, step_x, step_y, delta_x, delta_y, side_x, side_y)
    while not ray.hit:
        if ray.side_dst_x < ray.side_dst_y:
            ray.side_dst_x += ray.delta_dst_x
            ray.map_x += ray.step_x
            ray.side = 0
        else:
            ray.side_dst_y += ray.delta_dst_y
            ray.map_y += ray.step_y
            ray.side = 1
        ray.hit = _cell(grid, ray.map_y, ray.map_x) == "1"
    return ray


def wall_slice(ray: Ray, height: int) -> WallSlice:
    """Size the wall hit by ``ray`` on a screen ``height`` rows tall.

    The span is centred on the screen and clipped to it.
    """
    if ray.side == 0:
        dist = ray.side_dst_x - ray.delta_dst_x
    else:
        dist = ray.side_dst_y - ray.delta_dst_y
    line = int(height / dist) if dist > 0 else height
    start = max(-(line // 2) + height // 2, 0)
    end = min(line // 2 + height // 2, height - 1)
    return WallSlice(dist, line, start, end, ray.side)


def column_slice(
    grid: Sequence[str], player: Player, x: int, width: int, height: int
) -> WallSlice:
    """Cast the ray for screen column ``x`` and size the wall it hits."""
    ray_dir_x, ray_dir_y = camera_ray(player, x, width)
    return wall_slice(cast_ray(grid, player, ray_dir_x, ray_dir_y), height)