"""Grid allocation core.

Pure functions only: no I/O, no shared mutable state. Callers pass the full
current message list on every call and get a fresh snapshot back.
"""

from __future__ import annotations

from .allocation import Allocation, RejectionReason, allocate_cell, max_span_at
from .cells import Cell, cell_key, parse_key
from .info import GridInfo, PlacedMessage, Placement, compute_grid_info
from .levels import (
    BASE_COLS,
    BASE_ROWS,
    MAX_LEVEL,
    compute_grid_level,
    get_grid_dimensions,
    level_capacity,
)
from .span import MAX_SPAN, compute_actual_span, compute_desired_span
from .zones import RESERVED_ZONES, ReservedZone, get_reserved_cells, is_cell_reserved

__all__ = [
    "Allocation",
    "BASE_COLS",
    "BASE_ROWS",
    "Cell",
    "GridInfo",
    "MAX_LEVEL",
    "MAX_SPAN",
    "PlacedMessage",
    "Placement",
    "RESERVED_ZONES",
    "RejectionReason",
    "ReservedZone",
    "allocate_cell",
    "cell_key",
    "compute_actual_span",
    "compute_desired_span",
    "compute_grid_info",
    "compute_grid_level",
    "get_grid_dimensions",
    "get_reserved_cells",
    "is_cell_reserved",
    "level_capacity",
    "max_span_at",
    "parse_key",
]
