"""Read models for the grid status endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from flagbook.grid.allocation import max_span_at
from flagbook.grid.cells import cell_key
from flagbook.grid.info import GridInfo

from .base import CamelModel


class GridStatus(CamelModel):
    """Public summary of a Grid Info snapshot."""

    level: int = Field(ge=1)
    cols: int
    rows: int
    reserved_cells: list[str]
    occupied_cells: list[str]
    available_count: int
    is_full: bool

    @classmethod
    def from_info(cls, info: GridInfo) -> GridStatus:
        return cls(
            level=info.level,
            cols=info.cols,
            rows=info.rows,
            reserved_cells=sorted(info.reserved_cells),
            occupied_cells=sorted(info.occupied_cells),
            available_count=info.available_count,
            is_full=info.is_full,
        )


class CellStatus(CamelModel):
    """State of one cell, plus how wide a message placed there could be."""

    key: str
    status: Literal["available", "reserved", "occupied", "out_of_bounds"]
    max_span: int = Field(ge=0)

    @classmethod
    def from_info(cls, info: GridInfo, row: int, col: int) -> CellStatus:
        return cls(
            key=cell_key(row, col),
            status=info.status_of(row, col),
            max_span=max_span_at(row, col, info),
        )


__all__ = ["CellStatus", "GridStatus"]
