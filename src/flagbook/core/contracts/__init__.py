"""Pydantic contracts exchanged between the store, the API and the CLI."""

from __future__ import annotations

from .grid import CellStatus, GridStatus
from .message import DEFAULT_COLOR, Message, MessageCreate, MessagePublic

__all__ = [
    "CellStatus",
    "DEFAULT_COLOR",
    "GridStatus",
    "Message",
    "MessageCreate",
    "MessagePublic",
]
