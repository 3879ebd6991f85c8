"""Pipeline entry points for Flagbook.

Currently exposed:

- :func:`sign_flag`: validate a claim against a fresh grid snapshot and
  persist it, retrying on origin conflicts (``signing.py``).
"""

from __future__ import annotations

from .signing import sign_flag

__all__ = ["sign_flag"]
