# src/flagbook/cli.py
"""
Flagbook Command Line Interface (CLI).

This module implements the terminal interface using `typer` and `rich`. It
works directly on a JSON message file (the same one the API mirrors to), so
it can inspect or seed a flag without running the server.

Features
--------
- **Status**: Level, dimensions, capacity and free-cell counts.
- **Map**: A colored rendering of the grid (reserved, occupied, free).
- **Messages**: A table of every signature.
- **Sign**: Claim a cell through the same write path as the API.

Usage
-----
    $ flagbook status --data data/messages.json
    $ flagbook map --data data/messages.json
    $ flagbook sign 0 0 "Hello from San Diego" --first Ada --last Lovelace \\
        --email ada@example.com --data data/messages.json
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from flagbook.api.i18n import translate
from flagbook.core.contracts.message import DEFAULT_COLOR, MessageCreate
from flagbook.core.settings import load_settings
from flagbook.core.store.messages import MessageStore
from flagbook.grid.cells import cell_key
from flagbook.grid.info import GridInfo, compute_grid_info
from flagbook.grid.levels import MAX_LEVEL, level_capacity
from flagbook.pipelines.signing import sign_flag

load_dotenv()

app = typer.Typer(
    help="Flagbook: sign the flag from your terminal.",
    rich_markup_mode="markdown",
)
console = Console()

DataOption = Annotated[
    Path | None,
    typer.Option(
        "--data",
        "-d",
        dir_okay=False,
        help="JSON message file (defaults to FLAGBOOK_DATA_FILE).",
    ),
]


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _open_store(data: Path | None) -> MessageStore:
    """Open the message store at ``data`` or the configured default."""
    path = data if data is not None else load_settings().data_file
    if path is None:
        console.print("[dim yellow]No message file configured; using an empty flag.[/dim yellow]")
    return MessageStore(path=path)


def _render_map(info: GridInfo) -> Text:
    """Render the grid one character per cell."""
    text = Text()
    for r in range(info.rows):
        for c in range(info.cols):
            key = cell_key(r, c)
            if key in info.occupied_cells:
                text.append("■", style="bold blue")
            elif key in info.reserved_cells:
                text.append("#", style="red")
            else:
                text.append("·", style="dim")
        text.append("\n")
    return text


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def status(data: DataOption = None) -> None:
    """Show the current grid level, size and how much room is left."""
    store = _open_store(data)
    info = compute_grid_info(store.placements())

    table = Table(title="Flag status", show_header=False)
    table.add_column("field", style="bold")
    table.add_column("value")
    table.add_row("Signatures", str(len(store)))
    table.add_row("Level", f"{info.level} / {MAX_LEVEL}")
    table.add_row("Grid", f"{info.cols} x {info.rows} ({info.total_cells} cells)")
    table.add_row("Reserved", str(len(info.reserved_cells)))
    table.add_row("Occupied", str(len(info.occupied_cells)))
    table.add_row("Available", str(info.available_count))
    table.add_row("Level capacity", str(level_capacity(info.level)))
    if info.is_full:
        table.add_row("State", "[bold red]FULL[/bold red]")
    console.print(table)


@app.command("map")  # type: ignore[misc]
def show_map(data: DataOption = None) -> None:
    """Draw the grid: `#` reserved, `■` occupied, `·` free."""
    store = _open_store(data)
    info = compute_grid_info(store.placements())
    console.print(f"[bold cyan]Level {info.level}[/bold cyan] ({info.cols}x{info.rows})")
    console.print(Panel(_render_map(info), border_style="cyan", expand=False))


@app.command()  # type: ignore[misc]
def messages(data: DataOption = None) -> None:
    """List every signature, oldest first."""
    store = _open_store(data)
    table = Table(title="Signatures")
    table.add_column("Cell")
    table.add_column("Span", justify="right")
    table.add_column("Author")
    table.add_column("Message")
    for m in store.list_messages():
        table.add_row(
            cell_key(m.grid_row, m.grid_col),
            str(m.span_cols),
            f"{m.first_name} {m.last_name}",
            Text(m.message, style=m.color),
        )
    console.print(table)


@app.command()  # type: ignore[misc]
def sign(
    row: Annotated[int, typer.Argument(min=0, help="Origin row at the current level.")],
    col: Annotated[int, typer.Argument(min=0, help="Origin column at the current level.")],
    message: Annotated[str, typer.Argument(help="The message to leave on the flag.")],
    first_name: Annotated[str, typer.Option("--first", help="First name.")],
    last_name: Annotated[str, typer.Option("--last", help="Last name.")],
    email: Annotated[str, typer.Option("--email", help="Contact email (not shown).")],
    color: Annotated[str, typer.Option("--color", help="Hex text color.")] = DEFAULT_COLOR,
    data: DataOption = None,
) -> None:
    """
    Claim the cell at ROW, COL and leave MESSAGE there.

    The message gets up to four cells depending on its length, fewer if
    something blocks the way to the right.
    """
    try:
        draft = MessageCreate(
            first_name=first_name,
            last_name=last_name,
            email=email,
            message=message,
            grid_row=row,
            grid_col=col,
            color=color,
        )
    except ValidationError as e:
        console.print(f"[bold red]❌ Invalid message:[/bold red] {e}")
        raise typer.Exit(code=2) from e

    store = _open_store(data)
    result = sign_flag(draft, store)
    if result.is_err():
        reason = result.unwrap_err()
        console.print(
            f"[bold red]❌ Rejected ({reason.value}):[/bold red] {translate(reason.value, 'en')}"
        )
        raise typer.Exit(code=1)

    stored = result.unwrap()
    console.print(
        f"[bold green]✅ Signed![/bold green] {cell_key(row, col)} "
        f"spanning {stored.span_cols} cell(s) (id {stored.id})"
    )


if __name__ == "__main__":
    app()
