"""Small text helpers used by the scene parser."""

from __future__ import annotations

from typing import Optional, TextIO

_SPACE_CHARS = frozenset(" \t\n\v\f\r")
_ATOI_SKIP = frozenset(" \t\n\v\f\r")
_DIGITS = "0123456789"


def is_space(c: str) -> bool:
    """Return True if ``c`` is one of the six ASCII whitespace characters."""
    return len(c) == 1 and c in _SPACE_CHARS


def atoi(text: str) -> int:
    """Parse a leading decimal integer, ignoring anything after it.

    Leading whitespace is skipped and one optional sign is accepted.
    Text without digits yields 0.
    """
    pos = 0
    length = len(text)
    while pos < length and text[pos] in _ATOI_SKIP:
        pos += 1
    sign = 1
    if pos < length and text[pos] in "+-":
        if text[pos] == "-":
            sign = -1
        pos += 1
    result = 0
    while pos < length and text[pos] in _DIGITS:
        result = result * 10 + _DIGITS.index(text[pos])
        pos += 1
    return sign * result


def split(text: str, delim: str) -> list[str]:
    """Split ``text`` on ``delim``, dropping empty pieces."""
    if len(delim) != 1:
        raise ValueError("delimiter must be a single character")
    return [piece for piece in text.split(delim) if piece]


def strtrim(text: str, charset: str) -> str:
    """Remove every leading and trailing character found in ``charset``."""
    return text.strip(charset)


def strncmp(s1: str, s2: str, n: int) -> int:
    """Compare at most ``n`` characters of two strings.

    Returns zero when they match, otherwise the difference between the
    first differing character codes (a missing character counts as 0).
    """
    for index in range(n):
        a = ord(s1[index]) if index < len(s1) else 0
        b = ord(s2[index]) if index < len(s2) else 0
        if a != b:
            return a - b
        if a == 0:
            return 0
    return 0


def substr(text: str, start: int, length: int) -> str:
    """Return at most ``length`` characters of ``text`` starting at ``start``."""
    if start < 0 or length < 0:
        raise ValueError("start and length must not be negative")
    if start >= len(text):
        return ""
    return text[start:start + length]


def write_str(text: Optional[str], stream: Optional[TextIO]) -> None:
    """Write ``text`` to ``stream``; does nothing if either is missing."""
    if not text or stream is None:
        return
    stream.write(text)