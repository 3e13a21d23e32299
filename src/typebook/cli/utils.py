"""
CLI utility helpers - output formatting and error reporting.
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from typebook.core.errors import TypebookError
from typebook.core.settings import TypebookSettings
from typebook.index import DocumentIndex, TopicEntry, load_index

console = Console()
err_console = Console(stderr=True)


# ── Context helpers ──────────────────────────────────────────────────────


def get_settings(ctx: typer.Context) -> TypebookSettings:
    """Settings resolved by the root callback, or defaults."""
    root = ctx.find_root()
    if isinstance(root.obj, TypebookSettings):
        return root.obj
    return TypebookSettings()


def open_index(ctx: typer.Context) -> DocumentIndex:
    """Load the index for the current book, exiting on failure."""
    try:
        return load_index(get_settings(ctx))
    except TypebookError as e:
        fail(e)


# ── Output helpers ───────────────────────────────────────────────────────


def fail(error: TypebookError) -> NoReturn:
    """Report an error on stderr and exit with code 1."""
    err_console.print(
        f"[bold red]Error[/bold red] ({error.category.value}): {escape(error.message)}",
        soft_wrap=True,
    )
    location = error.context.to_dict()
    if "path" in location and "line" in location:
        err_console.print(f"  at {escape(location['path'])}:{location['line']}", soft_wrap=True)
    raise typer.Exit(code=1)


def output_json(payload: Any) -> None:
    console.print_json(json.dumps(payload, default=str))


def output_entries(entries: tuple[TopicEntry, ...] | list[TopicEntry], *, title: str = "") -> None:
    """Render entries as a Rich table."""
    if not entries:
        console.print("[dim]No entries.[/dim]")
        return

    table = Table(title=title or None)
    table.add_column("Tier", style="magenta")
    table.add_column("#", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Reference")

    for entry in entries:
        table.add_row(
            entry.tier.label,
            str(entry.order),
            escape(entry.title),
            escape(entry.page_reference),
        )

    console.print(table)
    console.print(f"[dim]{len(entries)} entries[/dim]")


def output_entry(entry: TopicEntry) -> None:
    console.print(f"[bold cyan]{escape(entry.title)}[/bold cyan]")
    console.print(f"  Reference: {escape(entry.page_reference)}")
    console.print(f"  Path:      {escape(entry.path)}")
    console.print(f"  Tier:      {entry.tier.label}")
    console.print(f"  Order:     {entry.order}")
