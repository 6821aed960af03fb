"""Drawing frames into an in-memory pixel buffer."""

from __future__ import annotations

from array import array
from typing import Sequence

from .player import Player
from .raycast import WallSlice, column_slice

SKY_COLOR = 0x87CEEB
GROUND_COLOR = 0x964B00
LEAVES_COLOR = 0x008000
TRUNK_COLOR = 0x654321


def create_rgb(t: int, r: int, g: int, b: int) -> int:
    """Pack transparency and red, green, blue bytes into one integer."""
    return t << 24 | r << 16 | g << 8 | b


WALL_Y_COLOR = create_rgb(0, 0, 176, 16)
WALL_X_COLOR = create_rgb(0, 0, 255, 0)


class FrameBuffer:
    """A width by height grid of 32-bit pixels, all zero to start with."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("frame size must be positive")
        self.width = width
        self.height = height
        self.pixels = array("I", [0]) * (width * height)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the frame")
        return y * self.width + x

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at ``(x, y)``; the colour is kept to 32 bits."""
        self.pixels[self._index(x, y)] = color & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at ``(x, y)``."""
        return self.pixels[self._index(x, y)]


def draw_background(frame: FrameBuffer, ceiling: int, floor: int) -> None:
    """Fill the upper half with ``ceiling`` and the rest with ``floor``."""
    split = (frame.height // 2) * frame.width
    total = frame.width * frame.height
    frame.pixels[:split] = array("I", [ceiling & 0xFFFFFFFF]) * split
    frame.pixels[split:] = array("I", [floor & 0xFFFFFFFF]) * (total - split)


def draw_wall(frame: FrameBuffer, x: int, slice_: WallSlice) -> None:
    """Paint column ``x`` over the span of ``slice_``, shaded by wall side."""
    color = WALL_Y_COLOR if slice_.side == 1 else WALL_X_COLOR
    for y in range(slice_.draw_start, slice_.draw_end):
        frame.put_pixel(x, y, color)


def render_frame(
    frame: FrameBuffer,
    grid: Sequence[str],
    player: Player,
    ceiling: int,
    floor: int,
) -> None:
    """Draw background and walls as seen by ``player``."""
    draw_background(frame, ceiling, floor)
    for x in range(frame.width):
        draw_wall(frame, x, column_slice(grid, player, x, frame.width, frame.height))


def _paint_diagonal(
    frame: FrameBuffer, columns: range, rows: range, color: int
) -> None:
    if not rows:
        return
    for x in columns:
        if x < frame.height:
            frame.put_pixel(x, x, color)


def render_tree_frame(frame: FrameBuffer) -> None:
    """Paint the sky, ground and tree demo frame.

    Every span is painted along the diagonal: column ``x`` is drawn at row
    ``x``, only when the span's rows are not empty and ``x`` is inside the
    frame.
    """
    width, height = frame.width, frame.height
    tree_start_x = int(width * 0.8)
    tree_end_x = int(width * 0.95)
    leaves_start_y = int(height * 0.3)
    leaves_end_y = int(height * 0.6)
    trunk_end_y = int(height * 0.9)
    trunk_width = (tree_end_x - tree_start_x) // 3
    trunk_start_x = tree_start_x + trunk_width
    trunk_end_x = trunk_start_x + trunk_width

    _paint_diagonal(frame, range(width), range(height // 2), SKY_COLOR)
    _paint_diagonal(frame, range(width), range(height // 2, height), GROUND_COLOR)
    _paint_diagonal(
        frame,
        range(tree_start_x, tree_end_x),
        range(leaves_start_y, leaves_end_y),
        LEAVES_COLOR,
    )
    _paint_diagonal(
        frame,
        range(trunk_start_x, trunk_end_x),
        range(leaves_end_y, trunk_end_y),
        TRUNK_COLOR,
    )