"""
Message Store: the persistence collaborator of the grid.

Responsibilities
----------------
- **Read**: hand out message lists and placement snapshots. Callers never
  receive the live list, only copies.
- **Create**: insert a new message, enforcing that at most one message owns
  a given origin cell. The check and the insert happen under one lock, so
  two concurrent writers cannot both claim the same origin.
- **Persist**: optionally mirror the store to a JSON file. The file is read
  once at construction and rewritten after every insert. Records that no
  longer validate are carried through rewrites untouched.

Note on Persistence
-------------------
Without ``path`` this is a volatile memory store: a restart loses every
signature. Set ``FLAGBOOK_DATA_FILE`` to keep them.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, ClassVar

from pydantic import ValidationError

from flagbook.core.contracts.message import Message, MessageCreate
from flagbook.core.settings import get_logger, load_settings
from flagbook.grid.cells import cell_key
from flagbook.grid.info import PlacedMessage

logger = get_logger(__name__)


class OriginConflictError(Exception):
    """Raised when a new message targets an origin cell that already has one."""

    def __init__(self, row: int, col: int) -> None:
        super().__init__(f"Origin cell {cell_key(row, col)} is already claimed")
        self.row = row
        self.col = col


class MessageStore:
    """
    A list-backed store of :class:`Message` records with an optional JSON mirror.
    """

    _instance: ClassVar[MessageStore | None] = None

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._messages: list[Message] = []
        self._origins: set[str] = set()
        self._unreadable: list[Any] = []
        self._lock = threading.Lock()
        if path is not None and path.exists():
            self._load(path)

    @classmethod
    def get_instance(cls) -> MessageStore:
        """Accessor for the process-wide store built from settings."""
        if cls._instance is None:
            cls._instance = cls(path=load_settings().data_file)
        return cls._instance

    # ------------------------------- Reads ----------------------------------

    def list_messages(self) -> list[Message]:
        """Return all messages, oldest first."""
        with self._lock:
            return sorted(self._messages, key=lambda m: m.created_at)

    def placements(self) -> list[PlacedMessage[Message]]:
        """Return a snapshot of every message as the grid sees it."""
        with self._lock:
            return [m.to_placement() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    # ------------------------------- Writes ---------------------------------

    def create(self, draft: MessageCreate, span_cols: int) -> Message:
        """
        Persist a new message at the draft's origin cell.

        The message becomes visible only once the JSON mirror (if any) has
        been written; a failed write leaves the store unchanged.

        Raises
        ------
        OriginConflictError
            If another message already owns ``(draft.grid_row, draft.grid_col)``.
        OSError
            If the JSON mirror cannot be written.
        """
        key = cell_key(draft.grid_row, draft.grid_col)
        with self._lock:
            if key in self._origins:
                raise OriginConflictError(draft.grid_row, draft.grid_col)
            message = Message.from_draft(draft, span_cols)
            messages = [*self._messages, message]
            if self.path is not None:
                self._flush(self.path, messages)
            self._messages = messages
            self._origins.add(key)
        return message

    # ----------------------------- JSON mirror ------------------------------

    def _load(self, path: Path) -> None:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)

        for entry in raw.get("messages", []):
            try:
                message = Message.model_validate(entry)
            except ValidationError as exc:
                # Unreadable records are kept verbatim and written back on
                # every flush; their origin stays taken when it can be read.
                logger.warning("Keeping unreadable message in %s as-is: %s", path, exc)
                self._unreadable.append(entry)
                origin = _raw_origin(entry)
                if origin is not None:
                    self._origins.add(origin)
                continue
            key = cell_key(message.grid_row, message.grid_col)
            if key in self._origins:
                logger.warning("Ignoring duplicate origin %s in %s", key, path)
                self._unreadable.append(entry)
                continue
            self._messages.append(message)
            self._origins.add(key)

        logger.info(
            "Loaded %d messages from %s (%d kept unread)",
            len(self._messages),
            path,
            len(self._unreadable),
        )

    def _flush(self, path: Path, messages: list[Message]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "messages": [m.model_dump(mode="json") for m in messages] + self._unreadable
        }
        tmp = path.with_suffix(path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
            f.write("\n")
        tmp.replace(path)


def _raw_origin(entry: Any) -> str | None:
    """Return the origin key of a raw record, if both coordinates are integers."""
    if not isinstance(entry, dict):
        return None
    row = entry.get("grid_row", entry.get("gridRow"))
    col = entry.get("grid_col", entry.get("gridCol"))
    if isinstance(row, int) and isinstance(col, int):
        return cell_key(row, col)
    return None


# Global accessor for convenience (also used as a FastAPI dependency)
def get_message_store() -> MessageStore:
    return MessageStore.get_instance()


__all__ = ["MessageStore", "OriginConflictError", "get_message_store"]
