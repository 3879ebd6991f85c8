"""Disk-backed storage for images attached to messages.

- Default directory: ``FLAGBOOK_UPLOADS_DIR`` setting (``uploads/``)
- Filename pattern:  ``{uuid4}.{ext}``, extension taken from the client's name
- Reads only ever use the basename of the requested file, so a request can
  not walk out of the uploads directory.
"""

from __future__ import annotations

import uuid
from pathlib import Path, PurePosixPath
from typing import Literal

from flagbook.core.settings import get_logger, load_settings

ALLOWED_TYPES: frozenset[str] = frozenset(
    {"image/jpeg", "image/png", "image/gif", "image/webp", "image/svg+xml"}
)

MIME_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
}

RejectionCode = Literal["unsupported_type", "too_large"]

logger = get_logger(__name__)


class UploadRejectedError(ValueError):
    """Raised when an upload has a forbidden type or is too large."""

    def __init__(self, code: RejectionCode) -> None:
        super().__init__(code)
        self.code: RejectionCode = code


class UploadStore:
    """Save uploaded images and read them back by filename."""

    def __init__(self, base_dir: Path, max_bytes: int) -> None:
        self.base_dir = base_dir
        self.max_bytes = max_bytes

    @classmethod
    def from_settings(cls) -> UploadStore:
        s = load_settings()
        return cls(base_dir=s.uploads_dir, max_bytes=s.max_upload_bytes)

    def save(self, data: bytes, content_type: str | None, original_name: str | None) -> str:
        """Validate and write ``data``; return the stored filename.

        Raises
        ------
        UploadRejectedError
            ``unsupported_type`` or ``too_large``.
        """
        if content_type not in ALLOWED_TYPES:
            raise UploadRejectedError("unsupported_type")
        if len(data) > self.max_bytes:
            raise UploadRejectedError("too_large")

        ext = PurePosixPath(original_name or "").suffix.lstrip(".").lower() or "png"
        filename = f"{uuid.uuid4()}.{ext}"

        self.base_dir.mkdir(parents=True, exist_ok=True)
        (self.base_dir / filename).write_bytes(data)
        logger.info("Stored upload %s (%d bytes, %s)", filename, len(data), content_type)
        return filename

    def load(self, filename: str) -> tuple[bytes, str]:
        """Return ``(bytes, media_type)`` for a stored file.

        Raises
        ------
        FileNotFoundError
            If no such file exists in the uploads directory.
        """
        safe_name = PurePosixPath(filename.replace("\\", "/")).name
        path = self.base_dir / safe_name
        if not safe_name or not path.is_file():
            raise FileNotFoundError(safe_name)

        ext = PurePosixPath(safe_name).suffix.lstrip(".").lower()
        media_type = MIME_TYPES.get(ext, "application/octet-stream")
        return path.read_bytes(), media_type


def get_upload_store() -> UploadStore:
    return UploadStore.from_settings()


__all__ = [
    "ALLOWED_TYPES",
    "MIME_TYPES",
    "UploadRejectedError",
    "UploadStore",
    "get_upload_store",
]
