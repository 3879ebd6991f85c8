"""Reserved zones of the flag image.

The background flag has features that must stay visible: the star, the
bear, the grass patch, the "CALIFORNIA REPUBLIC" lettering and the red
stripe. Each is approximated by one or more axis-aligned rectangles in
image-fraction coordinates (0.0 to 1.0 on both axes), so the same zones
apply at every grid resolution.

A cell is reserved when its *center* falls inside a zone. Bounds are
inclusive on all four sides.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from .cells import cell_key


@dataclass(frozen=True, slots=True)
class ReservedZone:
    """Axis-aligned rectangle in normalized image coordinates.

    ``name`` is documentation only; classification never looks at it.
    """

    name: str
    x1: float
    y1: float
    x2: float
    y2: float

    def contains(self, x: float, y: float) -> bool:
        """Return True if ``(x, y)`` lies inside the closed rectangle."""
        return self.x1 <= x <= self.x2 and self.y1 <= y <= self.y2


# The bear is split into three boxes to follow its silhouette and free up
# cells above its back and between the grass and the lettering.
RESERVED_ZONES: tuple[ReservedZone, ...] = (
    ReservedZone("star", 0.07, 0.05, 0.17, 0.20),
    ReservedZone("bear-back", 0.27, 0.20, 0.77, 0.34),
    ReservedZone("bear-body", 0.21, 0.34, 0.77, 0.52),
    ReservedZone("bear-legs", 0.21, 0.52, 0.77, 0.59),
    ReservedZone("grass", 0.17, 0.57, 0.82, 0.67),
    ReservedZone("text", 0.14, 0.69, 0.86, 0.80),
    ReservedZone("stripe", 0.0, 0.84, 1.0, 1.0),
)


def is_cell_reserved(row: int, col: int, total_rows: int, total_cols: int) -> bool:
    """Return True if the center of ``(row, col)`` lies in a reserved zone."""
    cx = (col + 0.5) / total_cols
    cy = (row + 0.5) / total_rows
    return any(zone.contains(cx, cy) for zone in RESERVED_ZONES)


@lru_cache(maxsize=8)
def get_reserved_cells(rows: int, cols: int) -> frozenset[str]:
    """Return the keys of every reserved cell at a ``rows x cols`` resolution.

    Zones never change, so the set for a given resolution is memoized. The
    result is immutable; callers derive their own sets from it.
    """
    return frozenset(
        cell_key(r, c)
        for r in range(rows)
        for c in range(cols)
        if is_cell_reserved(r, c, rows, cols)
    )


__all__ = ["ReservedZone", "RESERVED_ZONES", "is_cell_reserved", "get_reserved_cells"]
