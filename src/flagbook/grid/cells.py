"""Cell coordinates and their string keys.

A cell is a ``(row, col)`` pair at one grid resolution. Keys are only
meaningful inside a single resolution snapshot: cell ``"3-5"`` at level 1
and cell ``"3-5"`` at level 2 cover different parts of the flag.
"""

from __future__ import annotations

from typing import NamedTuple


class Cell(NamedTuple):
    """Zero-based grid coordinate."""

    row: int
    col: int

    @property
    def key(self) -> str:
        return cell_key(self.row, self.col)


def cell_key(row: int, col: int) -> str:
    """Return the deterministic set/map key for ``(row, col)``."""
    return f"{row}-{col}"


def parse_key(key: str) -> Cell:
    """Parse a key produced by :func:`cell_key` back into a :class:`Cell`.

    Raises
    ------
    ValueError
        If ``key`` is not two integers joined by a dash.
    """
    row_text, sep, col_text = key.partition("-")
    if not sep:
        raise ValueError(f"Malformed cell key: {key!r}")
    return Cell(int(row_text), int(col_text))


__all__ = ["Cell", "cell_key", "parse_key"]
