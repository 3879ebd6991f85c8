"""Message contracts: what a visitor submits and what the store keeps.

Only ``grid_row``, ``grid_col``, ``span_cols`` and the length of ``message``
matter to the grid. Everything else is payload carried for display.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Literal

from pydantic import Field, field_validator

from flagbook.grid.info import PlacedMessage

from .base import CamelModel

DEFAULT_COLOR = "#1a1a1a"

MessageSize = Literal["small", "medium", "large"]


class _Signature(CamelModel):
    """Fields shared by submissions and stored messages."""

    first_name: str = Field(min_length=1, max_length=80)
    last_name: str = Field(min_length=1, max_length=80)
    message: str = Field(min_length=1, max_length=500)
    color: str = Field(default=DEFAULT_COLOR, pattern=r"^#[0-9a-fA-F]{6}$")
    size: MessageSize = "medium"
    image_path: str | None = Field(default=None, description="Filename returned by /upload.")

    @field_validator("first_name", "last_name", "message")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class MessageCreate(_Signature):
    """A visitor's request to sign the flag at ``(grid_row, grid_col)``."""

    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    grid_row: int = Field(ge=0)
    grid_col: int = Field(ge=0)
    recaptcha_token: str | None = Field(default=None, exclude=True)


class MessagePublic(_Signature):
    """A stored message as shown to everyone (no email address)."""

    id: str
    grid_row: int
    grid_col: int
    span_cols: int = Field(default=1, ge=1)
    created_at: datetime

    @field_validator("span_cols", mode="before")
    @classmethod
    def _legacy_span(cls, v: object) -> object:
        # Records written before spans existed carry 0 or null.
        return v or 1


class Message(MessagePublic):
    """A stored message, as persisted by the message store."""

    email: str

    @classmethod
    def from_draft(cls, draft: MessageCreate, span_cols: int) -> Message:
        """Build a new record from a validated submission and its span."""
        return cls(
            id=str(uuid.uuid4()),
            created_at=datetime.now(UTC),
            span_cols=span_cols,
            **draft.model_dump(exclude={"recaptcha_token"}),
        )

    def to_placement(self) -> PlacedMessage[Message]:
        """Return the grid's view of this message."""
        return PlacedMessage(
            row=self.grid_row, col=self.grid_col, span=self.span_cols, payload=self
        )

    def to_public(self) -> MessagePublic:
        return MessagePublic.model_validate(self.model_dump(exclude={"email"}))


__all__ = ["DEFAULT_COLOR", "Message", "MessageCreate", "MessagePublic", "MessageSize"]
