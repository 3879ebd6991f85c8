"""Grid level resolution.

The flag starts as a 16x10 grid (level 1). Whenever the claimed cells fill
every non-reserved cell of the current level, both dimensions double and
the level goes up by one, up to level 5 (256x160).
"""

from __future__ import annotations

from typing import NamedTuple

from .zones import get_reserved_cells

BASE_COLS = 16
BASE_ROWS = 10
MAX_LEVEL = 5


class GridDimensions(NamedTuple):
    rows: int
    cols: int


def get_grid_dimensions(level: int) -> GridDimensions:
    """Return ``(rows, cols)`` for ``level`` (1-based)."""
    factor = 2 ** (level - 1)
    return GridDimensions(rows=BASE_ROWS * factor, cols=BASE_COLS * factor)


def level_capacity(level: int) -> int:
    """Return the number of non-reserved cells at ``level``."""
    rows, cols = get_grid_dimensions(level)
    return rows * cols - len(get_reserved_cells(rows, cols))


def compute_grid_level(occupied_count: int) -> int:
    """Return the smallest level whose capacity exceeds ``occupied_count``.

    Demand beyond the capacity of :data:`MAX_LEVEL` is clamped to
    :data:`MAX_LEVEL`; callers must then check the available cells
    themselves before accepting a new claim.
    """
    level = 1
    while level < MAX_LEVEL and occupied_count >= level_capacity(level):
        level += 1
    return level


__all__ = [
    "BASE_COLS",
    "BASE_ROWS",
    "MAX_LEVEL",
    "GridDimensions",
    "get_grid_dimensions",
    "level_capacity",
    "compute_grid_level",
]
