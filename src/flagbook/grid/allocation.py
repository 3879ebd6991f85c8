"""Validation and allocation of a new claim against a Grid Info snapshot.

Given where a visitor clicked and how long their message is, decide whether
the origin cell may be claimed and how many cells the message gets.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from flagbook.core.result import Result, err, ok

from .cells import cell_key
from .info import GridInfo
from .span import MAX_SPAN, compute_actual_span, compute_desired_span


class RejectionReason(str, Enum):
    """Why a claim was refused. Each value is shown to visitors separately."""

    OUT_OF_BOUNDS = "out_of_bounds"
    RESERVED = "reserved"
    OCCUPIED = "occupied"
    GRID_FULL = "grid_full"


@dataclass(frozen=True, slots=True)
class Allocation:
    """An accepted claim, ready to be persisted."""

    row: int
    col: int
    span: int
    desired_span: int
    level: int


def allocate_cell(
    row: int, col: int, message_length: int, info: GridInfo
) -> Result[Allocation, RejectionReason]:
    """Validate ``(row, col)`` against ``info`` and compute the span to store.

    Checks run in this order: bounds, full grid, reserved zone, existing
    claim. A full grid is reported before the per-cell reasons so that
    visitors can tell "flag complete" apart from "pick another cell".
    """
    if not info.in_bounds(row, col):
        return err(RejectionReason.OUT_OF_BOUNDS)
    if info.is_full:
        return err(RejectionReason.GRID_FULL)

    key = cell_key(row, col)
    if key in info.reserved_cells:
        return err(RejectionReason.RESERVED)
    if key in info.occupied_cells:
        return err(RejectionReason.OCCUPIED)

    desired = compute_desired_span(message_length)
    span = compute_actual_span(
        desired, row, col, info.cols, info.reserved_cells, info.occupied_cells
    )
    return ok(Allocation(row=row, col=col, span=span, desired_span=desired, level=info.level))


def max_span_at(row: int, col: int, info: GridInfo) -> int:
    """Widest span a message could take at ``(row, col)``; 0 if not free."""
    if info.status_of(row, col) != "available":
        return 0
    return compute_actual_span(
        MAX_SPAN, row, col, info.cols, info.reserved_cells, info.occupied_cells
    )


__all__ = ["Allocation", "RejectionReason", "allocate_cell", "max_span_at"]
