"""
Smoke tests for package structure and availability.

Scope
-----
These tests strictly verify that the package is installed correctly in the
environment and that top-level modules are importable.
"""

from __future__ import annotations

import importlib

from flagbook import __version__


def test_package_importable() -> None:
    """Ensure the top-level package and its surfaces can be imported."""
    for name in ("flagbook", "flagbook.grid", "flagbook.api.app", "flagbook.pipelines"):
        assert importlib.import_module(name) is not None


def test_version_is_set() -> None:
    assert isinstance(__version__, str)
    assert len(__version__) > 0


def test_cli_module_exposes_app() -> None:
    """The `flagbook` console script points at `flagbook.cli:app`."""
    cli = importlib.import_module("flagbook.cli")
    assert hasattr(cli, "app"), "flagbook.cli must expose an 'app' Typer object."


def test_grid_package_reexports_core_operations() -> None:
    grid = importlib.import_module("flagbook.grid")
    for name in (
        "is_cell_reserved",
        "get_reserved_cells",
        "compute_grid_level",
        "get_grid_dimensions",
        "compute_desired_span",
        "compute_actual_span",
        "compute_grid_info",
        "allocate_cell",
        "cell_key",
        "parse_key",
    ):
        assert callable(getattr(grid, name))
