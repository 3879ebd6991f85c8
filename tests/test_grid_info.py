"""End-to-end tests for Grid Info derivation.

Scenarios
---------
A. Empty flag: level 1, 16x10, every non-reserved cell available.
B. One short message at (0, 0): span 1, reported occupied on the next read.
C. A 60-character message squeezed by a reserved cell: span truncated.
D. Filling level 1: the next read reports level 2 and keeps every claim.
"""

from __future__ import annotations

from flagbook.grid.allocation import allocate_cell
from flagbook.grid.cells import cell_key, parse_key
from flagbook.grid.info import GridInfo, PlacedMessage, compute_grid_info
from flagbook.grid.levels import get_grid_dimensions


def _all_keys(info: GridInfo) -> set[str]:
    return {cell_key(r, c) for r in range(info.rows) for c in range(info.cols)}


def _assert_partition(info: GridInfo) -> None:
    reserved, occupied = info.reserved_cells, info.occupied_cells
    available = set(info.available_cells)
    assert len(available) == len(info.available_cells), "available cells must be unique"
    assert not reserved & occupied
    assert not reserved & available
    assert not occupied & available
    assert reserved | occupied | available == _all_keys(info)


def test_scenario_a_empty_grid() -> None:
    info = compute_grid_info([])
    assert (info.level, info.cols, info.rows) == (1, 16, 10)
    assert info.total_cells == 160
    assert len(info.reserved_cells) == 93
    assert info.available_count == 160 - 93
    assert not info.occupied_cells
    assert not info.is_full
    _assert_partition(info)


def test_available_cells_are_row_major() -> None:
    info = compute_grid_info([])
    coords = [parse_key(k) for k in info.available_cells]
    assert coords == sorted(coords)
    assert info.available_cells[:3] == ("0-0", "0-3", "0-4")


def test_scenario_b_short_message_claims_one_cell() -> None:
    before = compute_grid_info([])
    allocation = allocate_cell(0, 0, 5, before).unwrap()
    assert allocation.span == 1

    after = compute_grid_info([PlacedMessage(row=0, col=0, span=allocation.span)])
    assert "0-0" in after.occupied_cells
    assert "0-0" not in after.available_cells
    assert after.status_of(0, 0) == "occupied"
    _assert_partition(after)


def test_scenario_c_span_truncated_by_reserved_cell() -> None:
    info = compute_grid_info([])
    at_corner = allocate_cell(0, 0, 60, info).unwrap()
    assert (at_corner.desired_span, at_corner.span) == (3, 1)

    before_bear = allocate_cell(2, 2, 60, info).unwrap()
    assert (before_bear.desired_span, before_bear.span) == (3, 2)


def test_multi_cell_span_is_marked_occupied() -> None:
    info = compute_grid_info([PlacedMessage(row=0, col=3, span=4)])
    assert {"0-3", "0-4", "0-5", "0-6"} <= info.occupied_cells
    assert "0-7" in info.available_cells
    _assert_partition(info)


def test_missing_span_counts_as_one() -> None:
    info = compute_grid_info([PlacedMessage(row=0, col=3, span=0)])
    assert info.occupied_cells == frozenset({"0-3"})


def test_scenario_d_fill_level_one_then_subdivide() -> None:
    empty = compute_grid_info([])
    placed = [PlacedMessage(row=c.row, col=c.col) for c in map(parse_key, empty.available_cells)]

    almost = compute_grid_info(placed[:-1])
    assert almost.level == 1
    assert almost.available_cells == (empty.available_cells[-1],)

    full = compute_grid_info(placed)
    assert full.level == 2
    assert (full.rows, full.cols) == get_grid_dimensions(2) == (20, 32)
    for message in placed:
        assert cell_key(message.row, message.col) in full.occupied_cells
    assert len(full.occupied_cells) == len(placed)
    _assert_partition(full)


def test_claims_win_over_zones_after_subdivision() -> None:
    """A level-1 claim can land inside a zone at level 2; it stays occupied."""
    empty = compute_grid_info([])
    placed = [PlacedMessage(row=c.row, col=c.col) for c in map(parse_key, empty.available_cells)]
    info = compute_grid_info(placed)

    # (5, 12) was free at level 1; at level 2 its center sits on the bear's back.
    assert "5-12" in info.occupied_cells
    assert "5-12" not in info.reserved_cells
    _assert_partition(info)


def test_out_of_bounds_claims_are_dropped() -> None:
    info = compute_grid_info([PlacedMessage(row=0, col=15, span=3)])
    assert info.occupied_cells == frozenset({"0-15"})
    _assert_partition(info)


def test_payload_is_opaque() -> None:
    payload = {"author": "Ada", "text": "hi"}
    info = compute_grid_info([PlacedMessage(row=1, col=0, span=1, payload=payload)])
    assert "1-0" in info.occupied_cells


def test_recomputed_from_scratch_every_call() -> None:
    messages = [PlacedMessage(row=0, col=0)]
    first = compute_grid_info(messages)
    messages.append(PlacedMessage(row=0, col=3, span=2))
    second = compute_grid_info(messages)
    assert "0-3" not in first.occupied_cells
    assert {"0-3", "0-4"} <= second.occupied_cells
