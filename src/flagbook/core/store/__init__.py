"""Persistence collaborators: signed messages and uploaded images."""

from __future__ import annotations

from .messages import MessageStore, OriginConflictError, get_message_store
from .uploads import UploadRejectedError, UploadStore, get_upload_store

__all__ = [
    "MessageStore",
    "OriginConflictError",
    "UploadRejectedError",
    "UploadStore",
    "get_message_store",
    "get_upload_store",
]
