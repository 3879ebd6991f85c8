"""
HTTP-only response schemas.

Domain read models (messages, grid status) live in
:mod:`flagbook.core.contracts`; this module holds the small envelopes that
exist only at the HTTP boundary.
"""

from __future__ import annotations

from pydantic import BaseModel

from flagbook.core.contracts.base import CamelModel


class HealthStatus(BaseModel):
    status: str
    environment: str
    version: str


class UploadResult(CamelModel):
    filename: str


class Rejection(BaseModel):
    """Body of a refused request: a stable machine code and a readable text."""

    reason: str
    message: str


__all__ = ["HealthStatus", "Rejection", "UploadResult"]
