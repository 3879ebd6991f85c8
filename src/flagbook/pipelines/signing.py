"""
Signing pipeline: validate a submission against a fresh grid and persist it.

Flow
----
1. Snapshot the store's placements.
2. Derive Grid Info from that snapshot (never cached).
3. Validate the origin cell and compute the span (:func:`allocate_cell`).
4. Ask the store to insert the message.

Reading the grid and writing the message are separate steps, so another
writer can take the same origin cell in between. The store refuses the
second insert with :class:`OriginConflictError`; we then start over from
step 1 with a fresh snapshot, which normally turns the conflict into a
regular ``OCCUPIED`` rejection.
"""

from __future__ import annotations

from flagbook.core.contracts.message import Message, MessageCreate
from flagbook.core.result import Result, err, ok
from flagbook.core.settings import get_logger, load_settings
from flagbook.core.store.messages import MessageStore, OriginConflictError
from flagbook.grid.allocation import RejectionReason, allocate_cell
from flagbook.grid.cells import cell_key
from flagbook.grid.info import compute_grid_info

logger = get_logger(__name__)


def sign_flag(
    draft: MessageCreate,
    store: MessageStore,
    *,
    max_attempts: int | None = None,
) -> Result[Message, RejectionReason]:
    """
    Claim ``(draft.grid_row, draft.grid_col)`` for ``draft`` and store it.

    Parameters
    ----------
    draft:
        A validated submission.
    store:
        The message store to read the grid from and write into.
    max_attempts:
        How many validate-then-write rounds to try when the store reports an
        origin conflict. Defaults to ``settings.sign_max_attempts``.

    Returns
    -------
    Result[Message, RejectionReason]
        ``Ok`` with the stored message, or ``Err`` with the reason the claim
        was refused.
    """
    attempts = max_attempts if max_attempts is not None else load_settings().sign_max_attempts
    key = cell_key(draft.grid_row, draft.grid_col)

    for attempt in range(1, attempts + 1):
        info = compute_grid_info(store.placements())
        allocation = allocate_cell(draft.grid_row, draft.grid_col, len(draft.message), info)
        if allocation.is_err():
            reason = allocation.unwrap_err()
            logger.info("Rejected claim on %s at level %d: %s", key, info.level, reason.value)
            return err(reason)

        span = allocation.unwrap().span
        try:
            message = store.create(draft, span_cols=span)
        except OriginConflictError:
            logger.warning(
                "Origin %s taken concurrently (attempt %d/%d); re-validating",
                key,
                attempt,
                attempts,
            )
            continue

        logger.info(
            "Accepted message %s on %s (span %d, level %d)", message.id, key, span, info.level
        )
        return ok(message)

    logger.warning("Giving up on %s after %d conflicting attempts", key, attempts)
    return err(RejectionReason.OCCUPIED)


__all__ = ["sign_flag"]
