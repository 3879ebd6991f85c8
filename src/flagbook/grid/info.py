"""Grid Info aggregation.

There is no stored grid. Every read derives the full grid state from the
current list of messages:

1. sum the spans of all messages to get the claimed-cell count;
2. resolve the level (and so the dimensions) from that count;
3. compute the reserved cells at that resolution;
4. mark each message's origin and the cells to its right as occupied;
5. list every remaining free cell in row-major order.

Messages keep the raw ``(row, col, span)`` they were created with. When the
grid subdivides, those indices now address smaller cells; a claimed cell
that lands inside a reserved zone at the new resolution stays claimed and
is left out of the reserved set, so the three cell sets always partition
the grid.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, Literal, Protocol, TypeVar

from flagbook.core.settings import get_logger

from .cells import cell_key
from .levels import MAX_LEVEL, compute_grid_level, get_grid_dimensions
from .zones import get_reserved_cells

P = TypeVar("P")

CellState = Literal["available", "reserved", "occupied", "out_of_bounds"]

logger = get_logger(__name__)


class Placement(Protocol):
    """Anything that sits on the grid: an origin cell and a column span."""

    @property
    def row(self) -> int: ...

    @property
    def col(self) -> int: ...

    @property
    def span(self) -> int: ...


@dataclass(frozen=True, slots=True)
class PlacedMessage(Generic[P]):
    """A message as the grid sees it.

    ``payload`` carries whatever the store keeps alongside the placement
    (author, text, color, image). The grid never reads it.
    """

    row: int
    col: int
    span: int = 1
    payload: P | None = None


@dataclass(frozen=True)
class GridInfo:
    """Snapshot of the grid derived from one list of messages."""

    level: int
    rows: int
    cols: int
    reserved_cells: frozenset[str]
    occupied_cells: frozenset[str]
    available_cells: tuple[str, ...]

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def available_count(self) -> int:
        return len(self.available_cells)

    @property
    def is_full(self) -> bool:
        """True when the grid cannot grow any more and no free cell is left."""
        return self.level >= MAX_LEVEL and not self.available_cells

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def status_of(self, row: int, col: int) -> CellState:
        """Classify a single cell of this snapshot."""
        if not self.in_bounds(row, col):
            return "out_of_bounds"
        key = cell_key(row, col)
        if key in self.occupied_cells:
            return "occupied"
        if key in self.reserved_cells:
            return "reserved"
        return "available"


def _span_of(message: Placement) -> int:
    # Records written before spans existed carry 0 or None.
    return message.span or 1


def compute_grid_info(messages: Iterable[Placement]) -> GridInfo:
    """Derive the authoritative grid state from ``messages``.

    Must be called fresh whenever the message set may have changed; the
    result is never cached.
    """
    snapshot = list(messages)
    total_claimed = sum(_span_of(m) for m in snapshot)

    level = compute_grid_level(total_claimed)
    rows, cols = get_grid_dimensions(level)
    zone_cells = get_reserved_cells(rows, cols)

    occupied: set[str] = set()
    for message in snapshot:
        for offset in range(_span_of(message)):
            row, col = message.row, message.col + offset
            if not (0 <= row < rows and 0 <= col < cols):
                logger.warning(
                    "Dropping out-of-bounds claim %s at level %d (%dx%d)",
                    cell_key(row, col),
                    level,
                    cols,
                    rows,
                )
                continue
            occupied.add(cell_key(row, col))

    reserved = zone_cells - occupied

    available = tuple(
        key
        for key in (cell_key(r, c) for r in range(rows) for c in range(cols))
        if key not in reserved and key not in occupied
    )

    return GridInfo(
        level=level,
        rows=rows,
        cols=cols,
        reserved_cells=frozenset(reserved),
        occupied_cells=frozenset(occupied),
        available_cells=available,
    )


__all__ = ["CellState", "GridInfo", "PlacedMessage", "Placement", "compute_grid_info"]
