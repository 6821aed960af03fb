import pytest

from cubcaster.player import init_player
from cubcaster.raycast import (
    Ray,
    WallSlice,
    camera_ray,
    cast_ray,
    column_slice,
    wall_slice,
)

CORRIDOR = ["11111", "1E001", "11111"]
EAST_WALL_X = CORRIDOR[1].rindex("1")


def test_centre_column_follows_direction():
    player = init_player(CORRIDOR)
    assert camera_ray(player, 500, 1000) == (player.dir_x, player.dir_y)


def test_edge_columns_are_symmetric():
    player = init_player(CORRIDOR)
    left = camera_ray(player, 0, 640)
    right = camera_ray(player, 640, 640)
    assert left[0] + right[0] == pytest.approx(2 * player.dir_x)
    assert left[1] + right[1] == pytest.approx(2 * player.dir_y)
    assert left[1] == pytest.approx(-right[1])


def test_ray_hits_east_wall():
    player = init_player(CORRIDOR)
    ray = cast_ray(CORRIDOR, player, 1.0, 0.0)
    assert ray.hit
    assert (ray.map_x, ray.map_y) == (EAST_WALL_X, 1)
    assert ray.side == 0
    assert ray.step_x == 1


def test_ray_hits_north_wall():
    player = init_player(CORRIDOR)
    ray = cast_ray(CORRIDOR, player, 0.0, -1.0)
    assert (ray.map_x, ray.map_y) == (1, 0)
    assert ray.side == 1
    assert ray.step_y == -1


def test_perpendicular_distance():
    player = init_player(CORRIDOR)
    slice_ = wall_slice(cast_ray(CORRIDOR, player, 1.0, 0.0), 100)
    assert slice_.wall_dist == pytest.approx(EAST_WALL_X - player.pos_x)
    assert slice_.side == 0


def test_ray_leaving_map_raises():
    grid = ["E00"]
    with pytest.raises(ValueError):
        cast_ray(grid, init_player(grid), 1.0, 0.0)


def _ray(dist, side=0):
    return Ray(
        map_x=0, map_y=0, step_x=1, step_y=1,
        delta_dst_x=1.0, delta_dst_y=1.0,
        side_dst_x=1.0 + dist, side_dst_y=1.0 + dist,
        side=side, hit=True,
    )


@pytest.mark.parametrize("dist", [0.1, 0.0])
def test_close_wall_is_clipped(dist):
    slice_ = wall_slice(_ray(dist), 100)
    assert slice_.draw_start == 0
    assert slice_.draw_end == 100 - 1


@pytest.mark.parametrize("dist", [2.0, 3.0, 7.0])
@pytest.mark.parametrize("side", [0, 1])
def test_far_wall_is_centred(dist, side):
    slice_ = wall_slice(_ray(dist, side), 1000)
    assert slice_.draw_start > 0
    assert slice_.draw_start + slice_.draw_end == 1000
    assert slice_.side == side
    assert isinstance(slice_, WallSlice) and slice_.wall_dist == pytest.approx(dist)


def test_farther_walls_are_shorter():
    near = wall_slice(_ray(2.0), 1000)
    far = wall_slice(_ray(5.0), 1000)
    assert far.height < near.height


def test_column_slice_matches_manual_cast():
    player = init_player(CORRIDOR)
    slice_ = column_slice(CORRIDOR, player, 320, 640, 480)
    manual = wall_slice(cast_ray(CORRIDOR, player, *camera_ray(player, 320, 640)), 480)
    assert slice_ == manual
    assert slice_.wall_dist == pytest.approx(EAST_WALL_X - player.pos_x)