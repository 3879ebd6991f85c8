"""Integration tests for image upload and download."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from flagbook.api.app import create_app
from flagbook.core.store.messages import MessageStore
from flagbook.core.store.uploads import UploadStore, get_upload_store

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture  # type: ignore[misc]
def uploads(tmp_path: Path) -> UploadStore:
    return UploadStore(base_dir=tmp_path / "uploads", max_bytes=1024)


@pytest.fixture  # type: ignore[misc]
def client(uploads: UploadStore) -> Generator[TestClient, None, None]:
    MessageStore._instance = None
    app = create_app()
    app.dependency_overrides[get_upload_store] = lambda: uploads
    with TestClient(app) as c:
        yield c


def test_upload_then_download(client: TestClient, uploads: UploadStore) -> None:
    resp = client.post("/upload", files={"file": ("bear.png", PNG_BYTES, "image/png")})
    assert resp.status_code == 200, resp.text
    filename = resp.json()["filename"]
    assert filename.endswith(".png")
    assert (uploads.base_dir / filename).read_bytes() == PNG_BYTES

    got = client.get(f"/uploads/{filename}")
    assert got.status_code == 200
    assert got.content == PNG_BYTES
    assert got.headers["content-type"] == "image/png"
    assert "immutable" in got.headers["cache-control"]


def test_unsupported_type_is_rejected(client: TestClient) -> None:
    resp = client.post("/upload", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert resp.status_code == 400
    assert resp.json()["detail"]["reason"] == "unsupported_type"


def test_oversized_file_is_rejected(client: TestClient) -> None:
    resp = client.post(
        "/upload",
        files={"file": ("huge.png", b"\x00" * 2048, "image/png")},
        headers={"Accept-Language": "en"},
    )
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["reason"] == "too_large"
    assert detail["message"].startswith("File too large")


def test_missing_file_is_rejected(client: TestClient) -> None:
    resp = client.post("/upload", data={"other": "field"})
    assert resp.status_code == 400
    assert resp.json()["detail"]["reason"] == "no_file"


def test_unknown_file_is_404(client: TestClient) -> None:
    assert client.get("/uploads/does-not-exist.png").status_code == 404


def test_download_cannot_escape_uploads_dir(tmp_path: Path, uploads: UploadStore) -> None:
    secret = tmp_path / "secret.png"
    secret.write_bytes(PNG_BYTES)

    with pytest.raises(FileNotFoundError):
        uploads.load("../secret.png")
    with pytest.raises(FileNotFoundError):
        uploads.load("..\\secret.png")


def test_extension_defaults_to_png(uploads: UploadStore) -> None:
    name = uploads.save(PNG_BYTES, "image/png", None)
    assert name.endswith(".png")
