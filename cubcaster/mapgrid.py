"""Checks on the map grid of a scene."""

from __future__ import annotations

from typing import Optional, Sequence

PLAYER_CHARS = "NSEW"
_CELL_CHARS = "01 "
_BLOCKING = "1F"


def has_only_valid_characters(grid: Sequence[str]) -> bool:
    """True if every cell is 0, 1, space or a player, with exactly one player."""
    players = 0
    for row in grid:
        for cell in row:
            if cell in PLAYER_CHARS:
                players += 1
            elif cell not in _CELL_CHARS:
                return False
    return players == 1


def map_width(grid: Sequence[str]) -> int:
    """Length of the longest row."""
    return max((len(row) for row in grid), default=0)


def find_player(grid: Sequence[str]) -> Optional[tuple[int, int]]:
    """Return ``(y, x)`` of the first player cell, or None if there is none."""
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell in PLAYER_CHARS:
                return y, x
    return None


def flood_fill(grid: Sequence[str], y: int, x: int) -> bool:
    """True if no open cell reachable from ``(y, x)`` touches the void.

    Walls stop the fill. Reaching a space, a cell past the end of its row
    or anything outside the grid means the map leaks. The grid is not
    modified.
    """
    height = len(grid)
    width = map_width(grid)
    visited: set[tuple[int, int]] = set()
    pending = [(y, x)]
    while pending:
        cy, cx = pending.pop()
        if not (0 <= cy < height and 0 <= cx < width):
            return False
        row = grid[cy]
        if cx >= len(row) or row[cx] == " ":
            return False
        if row[cx] in _BLOCKING or (cy, cx) in visited:
            continue
        visited.add((cy, cx))
        pending.extend(((cy + 1, cx), (cy - 1, cx), (cy, cx + 1), (cy, cx - 1)))
    return True


def is_map_closed(grid: Sequence[str]) -> bool:
    """True if the area around the player is enclosed by walls."""
    y, x = find_player(grid) or (0, 0)
    return flood_fill(grid, y, x)