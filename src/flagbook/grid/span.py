"""Horizontal span allocation.

Longer messages get more horizontal room, up to :data:`MAX_SPAN` cells.
A message always grows to the right of its origin, never wraps to the next
row, and stops in front of the first reserved or occupied cell.
"""

from __future__ import annotations

from collections.abc import Container

from .cells import cell_key

MAX_SPAN = 4

# (inclusive upper bound on message length, span)
_SPAN_STEPS: tuple[tuple[int, int], ...] = ((20, 1), (50, 2), (100, 3))


def compute_desired_span(message_length: int) -> int:
    """Map a message length to the number of cells it would like to use."""
    for limit, span in _SPAN_STEPS:
        if message_length <= limit:
            return span
    return MAX_SPAN


def compute_actual_span(
    desired_span: int,
    row: int,
    col: int,
    cols: int,
    reserved_cells: Container[str],
    occupied_cells: Container[str],
) -> int:
    """Return how many cells a message at ``(row, col)`` may actually take.

    The origin cell is assumed to be free; the caller validates it first.
    The result is between 1 and ``desired_span`` inclusive.
    """
    span = min(desired_span, cols - col)
    for offset in range(1, span):
        key = cell_key(row, col + offset)
        if key in reserved_cells or key in occupied_cells:
            span = offset
            break
    return max(span, 1)


__all__ = ["MAX_SPAN", "compute_desired_span", "compute_actual_span"]
