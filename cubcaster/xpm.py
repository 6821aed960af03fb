"""Reading XPM images into pixel lists."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Union

from .colornames import lookup_color
from .textutil import atoi

TRANSPARENT = 0xFF000000
_NAME_LIMIT = 63
_HEX = re.compile(r"([+-]?)(?:0[xX](?=[0-9A-Fa-f]))?([0-9A-Fa-f]+)")


class XpmError(ValueError):
    """The XPM data is malformed or could not be read."""


@dataclass
class XpmImage:
    """Decoded image: ``pixels`` holds width * height colours, row by row."""

    width: int
    height: int
    pixels: list[int]


def split_words(text: str) -> list[str]:
    """Split on spaces and tabs, dropping empty words."""
    return [word for word in re.split(r"[ \t]", text) if word]


def find_unquoted(text: str, needle: str) -> int:
    """Position of the first ``needle`` outside double quotes, or -1."""
    if not needle:
        raise ValueError("needle must not be empty")
    quoted = False
    for pos, char in enumerate(text):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, pos):
            return pos
    return -1


def strip_comments(text: str) -> str:
    """Blank out C comments that lie outside quoted strings.

    A block comment is replaced with spaces including its delimiters; a
    line comment is replaced including its newline. The length of the text
    is kept.
    """
    for opener, closer, extra in (("/*", "*/", 4), ("//", "\n", 3)):
        while (begin := find_unquoted(text, opener)) != -1:
            end = text.find(closer, begin + 2)
            inner = end - (begin + 2) if end != -1 else -1
            length = min(inner + extra, len(text) - begin)
            text = text[:begin] + " " * length + text[begin + length:]
    return text


def text_rgb(name: str, extra: Optional[str] = None) -> int:
    """Colour value of an XPM colour word.

    "#RRGGBB" is read as hexadecimal. Otherwise ``name`` (joined with
    ``extra`` by a space when given) is looked up among the named colours;
    "none" gives -1 and an unknown name gives 0.
    """
    if name.startswith("#"):
        match = _HEX.match(name[1:])
        if match is None:
            return 0
        value = int(match.group(2), 16)
        return -value if match.group(1) == "-" else value
    if extra is not None:
        name = f"{name} {extra}"[:_NAME_LIMIT]
    color = lookup_color(name)
    return 0 if color is None else color


def reduce_color(color: int, depth: int, shifts: Sequence[int]) -> int:
    """Convert 0xRRGGBB to a pixel value for a display of ``depth`` bits.

    Depths of 24 and more take the colour as it is. ``shifts`` holds, for
    red, green and blue in turn, the bit offset and bit width of the channel.
    """
    if len(shifts) != 6:
        raise ValueError("shifts must hold six values")
    if depth >= 24:
        return color
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - shifts[1])) << shifts[0])
        + ((green >> (16 - shifts[3])) << shifts[2])
        + ((blue >> (16 - shifts[5])) << shifts[4])
    )


def _next_line(lines: Iterator[str]) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError("unexpected end of XPM data") from None


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode XPM strings: header, colour definitions, then pixel rows.

    Transparent pixels become 0xFF000000 and unknown pixel codes 0.
    """
    rows = iter(lines)
    header = split_words(_next_line(rows))
    if len(header) < 4:
        raise XpmError("invalid XPM header")
    width, height, ncolors, cpp = (atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError("invalid XPM header")

    overwrite = cpp <= 2
    table: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(rows)
        words = split_words(line[cpp:])
        if "c" not in words:
            raise XpmError("colour definition without a 'c' key")
        pos = words.index("c") + 1
        if pos >= len(words):
            raise XpmError("colour definition without a colour")
        extra = words[pos + 1] if pos + 1 < len(words) else None
        color = text_rgb(words[pos], extra)
        code = line[:cpp]
        if overwrite:
            table[code] = color
        else:
            table.setdefault(code, color)

    pixels: list[int] = []
    for _ in range(height):
        line = _next_line(rows)
        for x in range(width):
            color = table.get(line[cpp * x:cpp * (x + 1)], 0)
            pixels.append(TRANSPARENT if color == -1 else color)
    return XpmImage(width, height, pixels)


def _quoted_strings(text: str) -> Iterator[str]:
    pos = 0
    while True:
        start = text.find('"', pos)
        if start == -1:
            return
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def parse_xpm_text(text: str) -> XpmImage:
    """Decode the text of an XPM file."""
    return parse_xpm(_quoted_strings(strip_comments(text)))


def read_xpm_file(path: Union[str, os.PathLike]) -> XpmImage:
    """Read and decode the XPM file at ``path``."""
    try:
        with open(path, encoding="latin-1") as stream:
            text = stream.read()
    except OSError as exc:
        raise XpmError(f"cannot read {os.fspath(path)}") from exc
    return parse_xpm_text(text)