"""
API Routes for image attachments.

Endpoints
---------
- `POST /upload`: store an image, return its generated filename.
- `GET /uploads/{filename}`: serve a stored image.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Header, HTTPException, Response, UploadFile, status

from flagbook.api.i18n import pick_lang, translate
from flagbook.api.schemas import UploadResult
from flagbook.core.store.uploads import UploadRejectedError, UploadStore, get_upload_store

router = APIRouter(tags=["Uploads"])

UploadsDep = Annotated[UploadStore, Depends(get_upload_store)]

# Filenames are random UUIDs, so a served file never changes.
IMMUTABLE_CACHE = "public, max-age=31536000, immutable"


@router.post("/upload", response_model=UploadResult, summary="Upload an image")
async def upload_image(
    store: UploadsDep,
    file: Annotated[UploadFile | None, File()] = None,
    accept_language: Annotated[str | None, Header()] = None,
) -> UploadResult:
    lang = pick_lang(accept_language)
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"reason": "no_file", "message": translate("no_file", lang)},
        )

    data = await file.read()
    try:
        filename = store.save(data, file.content_type, file.filename)
    except UploadRejectedError as exc:
        max_mb = store.max_bytes // (1024 * 1024) or 1
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"reason": exc.code, "message": translate(exc.code, lang, max_mb=max_mb)},
        ) from exc

    return UploadResult(filename=filename)


@router.get("/uploads/{filename}", summary="Download an uploaded image")
async def get_upload(filename: str, store: UploadsDep) -> Response:
    try:
        content, media_type = store.load(filename)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found") from exc

    return Response(
        content=content,
        media_type=media_type,
        headers={"Cache-Control": IMMUTABLE_CACHE},
    )


__all__ = ["router"]
