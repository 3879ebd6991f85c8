"""Flagbook: a "sign the flag" guestbook.

Visitors claim a free cell on a subdivided flag image and leave a short
signed message. The grid allocation logic lives in :mod:`flagbook.grid`;
the HTTP surface in :mod:`flagbook.api`; the terminal surface in
:mod:`flagbook.cli`.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.3.0"
