import pytest

from cubcaster.player import init_player
from cubcaster.raycast import WallSlice
from cubcaster.render import (
    FrameBuffer,
    create_rgb,
    draw_background,
    draw_wall,
    render_frame,
    render_tree_frame,
)

CORRIDOR = ["11111", "1E001", "11111"]


def test_create_rgb_matches_sky_colour():
    assert create_rgb(0, 135, 206, 235) == 0x87CEEB


def test_create_rgb_packs_bytes():
    assert create_rgb(0, 0x12, 0x34, 0x56) == 0x123456
    assert create_rgb(1, 0, 0, 0) >> 24 == 1


def test_framebuffer_round_trip():
    frame = FrameBuffer(4, 3)
    frame.put_pixel(3, 2, 0xABCDEF)
    assert frame.get_pixel(3, 2) == 0xABCDEF
    assert frame.get_pixel(0, 0) == 0


def test_framebuffer_bounds():
    frame = FrameBuffer(4, 3)
    with pytest.raises(IndexError):
        frame.put_pixel(4, 0, 1)
    with pytest.raises(IndexError):
        frame.get_pixel(0, -1)


def test_framebuffer_rejects_empty_size():
    with pytest.raises(ValueError):
        FrameBuffer(0, 5)


def test_background_split():
    frame = FrameBuffer(6, 5)
    draw_background(frame, 0x111111, 0x222222)
    half = frame.height // 2
    for y in range(frame.height):
        expected = 0x111111 if y < half else 0x222222
        assert all(frame.get_pixel(x, y) == expected for x in range(frame.width))


@pytest.mark.parametrize("side, color", [(1, create_rgb(0, 0, 176, 16)), (0, create_rgb(0, 0, 255, 0))])
def test_draw_wall(side, color):
    frame = FrameBuffer(3, 10)
    draw_wall(frame, 1, WallSlice(1.0, 6, 2, 8, side))
    column = [frame.get_pixel(1, y) for y in range(frame.height)]
    assert column == [color if 2 <= y < 8 else 0 for y in range(frame.height)]
    assert all(frame.get_pixel(0, y) == 0 for y in range(frame.height))


def test_render_frame_centre_column():
    frame = FrameBuffer(20, 20)
    render_frame(frame, CORRIDOR, init_player(CORRIDOR), 0x111111, 0x222222)
    mid = frame.width // 2
    assert frame.get_pixel(mid, frame.height // 2) == create_rgb(0, 0, 255, 0)
    assert frame.get_pixel(mid, 0) == 0x111111
    assert frame.get_pixel(mid, frame.height - 1) == 0x222222


def test_tree_frame_diagonal():
    frame = FrameBuffer(100, 100)
    render_tree_frame(frame)
    assert frame.get_pixel(0, 0) == 0x964B00
    assert frame.get_pixel(50, 50) == 0x964B00
    assert frame.get_pixel(82, 82) == 0x008000
    assert frame.get_pixel(87, 87) == 0x654321
    assert frame.get_pixel(0, 1) == 0


def test_tree_frame_wide_frame_stays_inside():
    frame = FrameBuffer(10, 4)
    render_tree_frame(frame)
    assert frame.get_pixel(3, 3) == 0x964B00
    assert frame.get_pixel(9, 3) == 0