"""Shared base for wire models.

The browser client speaks camelCase (``gridRow``, ``spanCols``); Python
code uses snake_case. Models accept both on input and emit camelCase when
FastAPI serializes them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases and by-name population."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


__all__ = ["CamelModel"]
