"""
API Routes for signed messages.

Endpoints
---------
- `GET /messages`: every message on the flag, oldest first.
- `POST /messages`: sign the flag at a chosen cell.

Design Decisions
----------------
- **Fresh grid per write**: validation goes through :func:`sign_flag`, which
  re-derives the grid from the store on every attempt.
- **Distinct rejections**: reserved, occupied, out-of-bounds and full-grid
  refusals each carry their own `reason` code and localized message.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, status

from flagbook.api.i18n import pick_lang, translate
from flagbook.api.recaptcha import RecaptchaError, RecaptchaVerifier, get_recaptcha_verifier
from flagbook.api.schemas import Rejection
from flagbook.core.contracts.message import MessageCreate, MessagePublic
from flagbook.core.store.messages import MessageStore, get_message_store
from flagbook.grid.allocation import RejectionReason
from flagbook.pipelines.signing import sign_flag

router = APIRouter(tags=["Messages"])

REJECTION_STATUS: dict[RejectionReason, int] = {
    RejectionReason.OUT_OF_BOUNDS: status.HTTP_400_BAD_REQUEST,
    RejectionReason.RESERVED: status.HTTP_400_BAD_REQUEST,
    RejectionReason.OCCUPIED: status.HTTP_409_CONFLICT,
    RejectionReason.GRID_FULL: status.HTTP_409_CONFLICT,
}

StoreDep = Annotated[MessageStore, Depends(get_message_store)]


@router.get(
    "/messages",
    response_model=list[MessagePublic],
    summary="List every signature",
)
async def list_messages(store: StoreDep) -> list[MessagePublic]:
    return [m.to_public() for m in store.list_messages()]


@router.post(
    "/messages",
    response_model=MessagePublic,
    status_code=status.HTTP_201_CREATED,
    summary="Sign the flag",
    responses={400: {"model": Rejection}, 403: {"model": Rejection}, 409: {"model": Rejection}},
)
def create_message(
    draft: MessageCreate,
    store: StoreDep,
    verifier: Annotated[RecaptchaVerifier, Depends(get_recaptcha_verifier)],
    accept_language: Annotated[str | None, Header()] = None,
) -> MessagePublic:
    """
    Claim the requested cell and store the message.

    The span is computed server-side from the message length and what is
    free to the right of the chosen cell; clients cannot request one.
    """
    lang = pick_lang(accept_language)

    try:
        verifier.verify(draft.recaptcha_token)
    except RecaptchaError as exc:
        code = (
            status.HTTP_400_BAD_REQUEST
            if exc.code == "missing_token"
            else status.HTTP_403_FORBIDDEN
        )
        raise HTTPException(
            status_code=code,
            detail={"reason": "recaptcha", "message": translate("recaptcha_failed", lang)},
        ) from exc

    result = sign_flag(draft, store)
    if result.is_err():
        reason = result.unwrap_err()
        raise HTTPException(
            status_code=REJECTION_STATUS[reason],
            detail={"reason": reason.value, "message": translate(reason.value, lang)},
        )

    return result.unwrap().to_public()


__all__ = ["router"]
