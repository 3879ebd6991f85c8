"""Unit tests for the lightweight Result utilities."""

from __future__ import annotations

import pytest

from flagbook.core.result import Err, Ok, Result, err, ok
from flagbook.grid.allocation import RejectionReason


def test_ok_unwrap() -> None:
    r: Result[int, str] = ok(10)
    assert r.is_ok() and not r.is_err()
    assert r.unwrap() == 10
    assert Ok(1) == ok(1)


def test_err_carries_reason() -> None:
    r: Result[int, RejectionReason] = err(RejectionReason.RESERVED)
    assert r.is_err() and not r.is_ok()
    assert isinstance(r, Err)
    assert r.unwrap_err() is RejectionReason.RESERVED


def test_unwrap_on_wrong_variant_raises() -> None:
    with pytest.raises(RuntimeError):
        err("nope").unwrap()
    with pytest.raises(RuntimeError):
        ok(1).unwrap_err()
