"""
API Routes for grid status.

Endpoints
---------
- `GET /grid-info`: level, dimensions and the reserved/occupied cell keys.
- `GET /grid-info/cells/{row}/{col}`: state of one cell and the widest
  message it could hold.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from flagbook.core.contracts.grid import CellStatus, GridStatus
from flagbook.core.store.messages import MessageStore, get_message_store
from flagbook.grid.info import compute_grid_info

router = APIRouter(prefix="/grid-info", tags=["Grid"])

StoreDep = Annotated[MessageStore, Depends(get_message_store)]


@router.get("", response_model=GridStatus, summary="Current grid state")
async def get_grid_info(store: StoreDep) -> GridStatus:
    return GridStatus.from_info(compute_grid_info(store.placements()))


@router.get(
    "/cells/{row}/{col}",
    response_model=CellStatus,
    summary="State of a single cell",
)
async def get_cell_status(row: int, col: int, store: StoreDep) -> CellStatus:
    """
    Report whether a cell can be claimed right now.

    Coordinates outside the current grid are not an error; they are
    reported with status `out_of_bounds`.
    """
    info = compute_grid_info(store.placements())
    return CellStatus.from_info(info, row, col)


__all__ = ["router"]
