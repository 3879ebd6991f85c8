"""Unit tests for the message store and its JSON mirror."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from flagbook.core.contracts.message import MessageCreate
from flagbook.core.store.messages import MessageStore, OriginConflictError
from flagbook.grid.allocation import RejectionReason
from flagbook.pipelines.signing import sign_flag


def _draft(row: int = 0, col: int = 0, message: str = "Hello!") -> MessageCreate:
    return MessageCreate(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        message=message,
        grid_row=row,
        grid_col=col,
    )


def test_create_and_list() -> None:
    store = MessageStore()
    first = store.create(_draft(0, 0), span_cols=1)
    second = store.create(_draft(0, 3), span_cols=2)

    assert len(store) == 2
    assert [m.id for m in store.list_messages()] == [first.id, second.id]
    assert second.span_cols == 2
    assert first.color == "#1a1a1a"
    assert first.size == "medium"


def test_placements_expose_grid_fields_and_payload() -> None:
    store = MessageStore()
    stored = store.create(_draft(1, 4), span_cols=3)

    (placement,) = store.placements()
    assert (placement.row, placement.col, placement.span) == (1, 4, 3)
    assert placement.payload == stored


def test_origin_uniqueness_is_enforced() -> None:
    store = MessageStore()
    store.create(_draft(0, 0), span_cols=1)
    with pytest.raises(OriginConflictError) as info:
        store.create(_draft(0, 0, "Second!"), span_cols=1)
    assert (info.value.row, info.value.col) == (0, 0)
    assert len(store) == 1


def test_recaptcha_token_is_not_persisted(tmp_path: Path) -> None:
    path = tmp_path / "messages.json"
    store = MessageStore(path=path)
    draft = _draft().model_copy(update={"recaptcha_token": "secret-token"})
    store.create(draft, span_cols=1)

    assert "secret-token" not in path.read_text(encoding="utf-8")


def test_json_mirror_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "data" / "messages.json"
    store = MessageStore(path=path)
    stored = store.create(_draft(2, 0, "Persist me"), span_cols=1)
    assert path.exists()

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["messages"][0]["grid_row"] == 2

    reopened = MessageStore(path=path)
    assert len(reopened) == 1
    assert reopened.list_messages()[0].id == stored.id
    # The reopened store still knows which origins are taken.
    with pytest.raises(OriginConflictError):
        reopened.create(_draft(2, 0), span_cols=1)


def _legacy(row: int, col: int, **extra: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": f"legacy-{row}-{col}",
        "firstName": "Old",
        "lastName": "Timer",
        "email": "old@example.com",
        "message": "From before spans",
        "gridRow": row,
        "gridCol": col,
        "createdAt": "2024-05-01T12:00:00Z",
    }
    record.update(extra)
    return record


def test_zero_or_missing_span_counts_as_one(tmp_path: Path) -> None:
    path = tmp_path / "messages.json"
    path.write_text(
        json.dumps({"messages": [_legacy(0, 0, spanCols=0), _legacy(0, 3)]}),
        encoding="utf-8",
    )

    store = MessageStore(path=path)
    assert len(store) == 2
    assert [p.span for p in store.placements()] == [1, 1]

    # Their origins stay taken, through the store and through signing.
    with pytest.raises(OriginConflictError):
        store.create(_draft(0, 0), span_cols=1)
    result = sign_flag(_draft(0, 3), store)
    assert result.unwrap_err() is RejectionReason.OCCUPIED


def test_unreadable_entries_survive_rewrites(tmp_path: Path) -> None:
    path = tmp_path / "messages.json"
    broken = _legacy(1, 3, color="not-a-color")
    path.write_text(json.dumps({"messages": [{"id": "junk"}, broken]}), encoding="utf-8")

    store = MessageStore(path=path)
    assert len(store) == 0

    with pytest.raises(OriginConflictError):
        store.create(_draft(1, 3), span_cols=1)

    store.create(_draft(2, 0), span_cols=1)
    kept = json.loads(path.read_text(encoding="utf-8"))["messages"]
    assert len(kept) == 3
    assert {"id": "junk"} in kept
    assert broken in kept


def test_failed_flush_leaves_store_unchanged(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    store = MessageStore(path=tmp_path / "messages.json")

    def disk_full(self: MessageStore, path: Path, messages: list[Any]) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(MessageStore, "_flush", disk_full)
    with pytest.raises(OSError):
        store.create(_draft(0, 0), span_cols=1)

    assert len(store) == 0
    assert store.placements() == []

    monkeypatch.undo()
    store.create(_draft(0, 0), span_cols=1)
    assert len(store) == 1
