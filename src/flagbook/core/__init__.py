"""Core package initializer for Flagbook.

Holds the ambient pieces shared by every surface:
    from flagbook.core.settings import settings, load_settings, Settings, get_logger
    from flagbook.core.result import Result, ok, err
"""

from __future__ import annotations

__all__ = ["__doc__"]
