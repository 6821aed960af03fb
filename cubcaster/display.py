"""Windows, images and drawing on top of pygame.

pygame shows one operating-system window at a time: every Window keeps
its own off-screen surface, and the most recently created one is the
window that is shown.
"""

from __future__ import annotations

import os
import sys
from array import array
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

import pygame

from .xpm import XpmImage, parse_xpm, read_xpm_file, reduce_color

# Event numbers and masks of the X protocol, used as hook keys.
KEY_PRESS = 2
KEY_RELEASE = 3
BUTTON_PRESS = 4
BUTTON_RELEASE = 5
MOTION_NOTIFY = 6
EXPOSE = 12
DESTROY_NOTIFY = 17
MAX_EVENT = 36

KEY_PRESS_MASK = 1 << 0
KEY_RELEASE_MASK = 1 << 1
BUTTON_PRESS_MASK = 1 << 2
BUTTON_RELEASE_MASK = 1 << 3
POINTER_MOTION_MASK = 1 << 6
EXPOSURE_MASK = 1 << 15
STRUCTURE_NOTIFY_MASK = 1 << 17

DEFAULT_FONT_SIZE = 16
_DEFAULT_MASKS = (0xFF0000, 0x00FF00, 0x0000FF)


class DisplayError(RuntimeError):
    """The display could not be opened or a closed object was used."""


@dataclass
class Hook:
    """A callback registered for one event, with its event mask."""

    mask: int
    func: Callable[..., object]


def _rgb_shifts(masks: Iterable[int]) -> tuple[int, ...]:
    """Bit offset and bit width of each channel mask, red first."""
    shifts: list[int] = []
    for mask in masks:
        offset = 0
        while mask and not mask & 1:
            mask >>= 1
            offset += 1
        width = 0
        while mask & 1:
            mask >>= 1
            width += 1
        shifts.extend((offset, width))
    return tuple(shifts)


def _to_rgb(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


class Image:
    """An off-screen image of 32-bit pixels, 0x00RRGGBB each."""

    bits_per_pixel = 32

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("image size must be positive")
        self.width = width
        self.height = height
        self.size_line = width * 4
        self.endian = 0 if sys.byteorder == "little" else 1
        self.pixels = array("I", [0]) * (width * height)

    @classmethod
    def from_xpm(cls, decoded: XpmImage) -> "Image":
        image = cls(decoded.width, decoded.height)
        image.pixels = array("I", (p & 0xFFFFFFFF for p in decoded.pixels))
        return image

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the image")
        return y * self.width + x

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at ``(x, y)``; the colour is kept to 32 bits."""
        self.pixels[self._index(x, y)] = color & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at ``(x, y)``."""
        return self.pixels[self._index(x, y)]

    def to_surface(self) -> pygame.Surface:
        """Copy the pixels into a pygame surface; the top byte is dropped."""
        data = array("I", self.pixels)
        if sys.byteorder == "little":
            data.byteswap()
        raw = bytearray(data.tobytes())
        del raw[::4]
        return pygame.image.frombuffer(bytes(raw), (self.width, self.height), "RGB")


class Window:
    """A drawable window with its own event hooks."""

    def __init__(self, display: "Display", width: int, height: int, title: str) -> None:
        self.display = display
        self.width = width
        self.height = height
        self.title = title
        self.surface = pygame.Surface((width, height))
        self.surface.fill((0, 0, 0))
        self.hooks: dict[int, Hook] = {}
        self.font: Optional[pygame.font.Font] = None
        self.destroyed = False

    def _check(self) -> None:
        if self.destroyed:
            raise DisplayError("window has been destroyed")
        self.display._check()

    def _flush(self) -> None:
        if self.display.do_flush:
            self.present()

    def present(self) -> None:
        """Copy the window contents to the screen if it is the shown window."""
        screen = self.display._screen
        if self.display._shown is self and screen is not None:
            screen.blit(self.surface, (0, 0))
            pygame.display.flip()

    def clear(self) -> None:
        """Fill the window with black."""
        self._check()
        self.surface.fill((0, 0, 0))
        self._flush()

    def pixel_put(self, x: int, y: int, color: int) -> None:
        """Draw one pixel; points outside the window are ignored."""
        self._check()
        if 0 <= x < self.width and 0 <= y < self.height:
            value = self.display.get_color_value(color)
            self.surface.set_at((x, y), _to_rgb(value))
        self._flush()

    def _current_font(self) -> pygame.font.Font:
        if self.font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self.font = pygame.font.Font(None, DEFAULT_FONT_SIZE)
        return self.font

    def string_put(self, x: int, y: int, color: int, text: str) -> None:
        """Draw ``text`` with its baseline at row ``y``, starting at column ``x``."""
        self._check()
        font = self._current_font()
        value = self.display.get_color_value(color)
        rendered = font.render(text, False, _to_rgb(value))
        self.surface.blit(rendered, (x, y - font.get_ascent()))
        self._flush()

    def put_image(self, image: Image, x: int, y: int) -> None:
        """Copy ``image`` into the window with its top-left corner at ``(x, y)``."""
        self._check()
        self.surface.blit(image.to_surface(), (x, y))
        self._flush()

    def set_font(self, name: str) -> None:
        """Use the font file or system font ``name`` for string_put."""
        self._check()
        if not pygame.font.get_init():
            pygame.font.init()
        try:
            if os.path.isfile(name):
                self.font = pygame.font.Font(name, DEFAULT_FONT_SIZE)
            else:
                self.font = pygame.font.SysFont(name, DEFAULT_FONT_SIZE)
        except (pygame.error, OSError) as exc:
            raise DisplayError(f"cannot load font {name!r}") from exc

    def hook(self, event: int, mask: int, func: Callable[..., object]) -> None:
        """Register ``func`` for ``event``, replacing any earlier hook."""
        if not 0 <= event < MAX_EVENT:
            raise ValueError(f"event {event} is out of range")
        self.hooks[event] = Hook(mask, func)

    def key_hook(self, func: Callable[..., object]) -> None:
        """Call ``func(keysym)`` when a key is released."""
        self.hook(KEY_RELEASE, KEY_RELEASE_MASK, func)

    def mouse_hook(self, func: Callable[..., object]) -> None:
        """Call ``func(button, x, y)`` when a mouse button is pressed."""
        self.hook(BUTTON_PRESS, BUTTON_PRESS_MASK, func)

    def expose_hook(self, func: Callable[..., object]) -> None:
        """Call ``func()`` when the window needs redrawing."""
        self.hook(EXPOSE, EXPOSURE_MASK, func)

    def destroy(self) -> None:
        """Close the window and forget it."""
        self._check()
        self.display._forget(self)
        self.destroyed = True


class Display:
    """Connection to the graphics system, owning windows and images."""

    def __init__(self) -> None:
        try:
            pygame.display.init()
        except pygame.error as exc:
            raise DisplayError("cannot open display") from exc
        info = pygame.display.Info()
        self.depth = info.bitsize if info.bitsize else 24
        masks = tuple(info.masks[:3]) if all(info.masks[:3]) else _DEFAULT_MASKS
        self.shifts = _rgb_shifts(masks)
        self.windows: list[Window] = []
        self.do_flush = True
        self.closed = False
        self._screen: Optional[pygame.Surface] = None
        self._shown: Optional[Window] = None

    def __enter__(self) -> "Display":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _check(self) -> None:
        if self.closed:
            raise DisplayError("display has been closed")

    def _forget(self, window: Window) -> None:
        self.windows = [w for w in self.windows if w is not window]
        if self._shown is window:
            self._shown = None
            self._screen = None
            pygame.display.quit()

    def new_window(self, width: int, height: int, title: str) -> Window:
        """Open a fixed-size window and show it."""
        self._check()
        if width <= 0 or height <= 0:
            raise ValueError("window size must be positive")
        try:
            if not pygame.display.get_init():
                pygame.display.init()
            screen = pygame.display.set_mode((width, height))
        except pygame.error as exc:
            raise DisplayError("cannot create window") from exc
        pygame.display.set_caption(title)
        window = Window(self, width, height, title)
        self.windows.insert(0, window)
        self._screen = screen
        self._shown = window
        window.present()
        return window

    def new_image(self, width: int, height: int) -> Image:
        """Create a black image."""
        self._check()
        return Image(width, height)

    def xpm_file_to_image(self, path: Union[str, os.PathLike]) -> Image:
        """Load an XPM file into an image."""
        self._check()
        return Image.from_xpm(read_xpm_file(path))

    def xpm_to_image(self, lines: Iterable[str]) -> Image:
        """Build an image from the strings of an XPM array."""
        self._check()
        return Image.from_xpm(parse_xpm(lines))

    def get_color_value(self, color: int) -> int:
        """Convert 0xRRGGBB to a pixel value for this display's depth."""
        return reduce_color(color, self.depth, self.shifts)

    def screen_size(self) -> tuple[int, int]:
        """Size of the desktop as ``(width, height)``."""
        self._check()
        if not pygame.display.get_init():
            pygame.display.init()
        sizes = pygame.display.get_desktop_sizes()
        if not sizes:
            raise DisplayError("no screen available")
        width, height = sizes[0]
        return width, height

    def close(self) -> None:
        """Destroy every window and close the connection."""
        if self.closed:
            return
        for window in list(self.windows):
            window.destroy()
        pygame.display.quit()
        self.closed = True