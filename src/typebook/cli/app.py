"""
Root Typer application for the typebook CLI.

Usage:
    typebook list --tier basic
    typebook resolve dict --json
    typebook show callable
    typebook --book docs validate
    typebook render --format json --output nav.json
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

import typer
from rich.markup import escape

from typebook.cli.utils import (
    console,
    err_console,
    fail,
    get_settings,
    open_index,
    output_entries,
    output_entry,
    output_json,
)
from typebook.core.errors import TypebookError
from typebook.core.logging import bind_context, configure_logging
from typebook.core.settings import TypebookSettings
from typebook.pages import PageCatalog
from typebook.renderers import TocRenderer

app = typer.Typer(
    name="typebook",
    help="typebook — navigation index and page checks for the type-hints book.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


class RenderFormat(str, Enum):
    summary = "summary"
    json = "json"


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        from typebook import __version__

        try:
            v = pkg_version("typebook")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"typebook {v}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    book: Path | None = typer.Option(
        None, "--book", "-b", help="Book root holding SUMMARY.md and the pages."
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="YAML settings file."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level."),
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """typebook CLI — list, resolve and validate the book's topics."""
    overrides: dict[str, object] = {}
    if book is not None:
        overrides["book_root"] = book
    if log_level is not None:
        overrides["log_level"] = log_level

    try:
        if config is not None:
            settings = TypebookSettings.from_yaml(config, **overrides)
        else:
            settings = TypebookSettings.load(**overrides)
    except TypebookError as e:
        fail(e)

    configure_logging(level=settings.log_level, json_format=settings.log_json)
    bind_context(book_root=str(settings.book_root))
    ctx.obj = settings


# ------------------------------------------------------------------ #
# Index Commands
# ------------------------------------------------------------------ #


@app.command("list")
def list_entries(
    ctx: typer.Context,
    tier: str | None = typer.Option(None, "--tier", "-t", help="BASIC or INTERMEDIATE"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List topic entries in authored order."""
    index = open_index(ctx)
    entries = index.list_entries(tier)

    if json_out:
        output_json([entry.to_dict() for entry in entries])
        return
    output_entries(entries, title="Topics")


@app.command("resolve")
def resolve(
    ctx: typer.Context,
    reference: str = typer.Argument(..., help="Page reference, e.g. dict or ./dict.md"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Look up a single topic entry."""
    index = open_index(ctx)
    try:
        entry = index.resolve(reference)
    except TypebookError as e:
        fail(e)

    if json_out:
        output_json(entry.to_dict())
        return
    output_entry(entry)


# ------------------------------------------------------------------ #
# Page Commands
# ------------------------------------------------------------------ #


@app.command("show")
def show(
    ctx: typer.Context,
    reference: str = typer.Argument(..., help="Page reference"),
) -> None:
    """Show a page's heading and its code blocks and diagrams."""
    settings = get_settings(ctx)
    catalog = PageCatalog(settings.book_root, open_index(ctx))
    try:
        page = catalog.read_page(reference)
    except TypebookError as e:
        fail(e)

    output_entry(page.entry)
    console.print(f"  Heading:   {escape(page.title) if page.title else '[dim]none[/dim]'}")
    counts = page.block_counts()
    if counts:
        for language, count in sorted(counts.items()):
            console.print(f"    {language}: {count}")
    else:
        console.print("  [dim]No code blocks.[/dim]")


@app.command("validate")
def validate(
    ctx: typer.Context,
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Check that every indexed page exists and report orphan pages."""
    settings = get_settings(ctx)
    catalog = PageCatalog(settings.book_root, open_index(ctx))
    try:
        report = catalog.validate()
    except TypebookError as e:
        fail(e)

    if json_out:
        output_json(report.to_dict())
    else:
        if report.valid:
            console.print("[bold green]✅ Validation passed![/bold green]")
        else:
            err_console.print("[bold red]❌ Validation failed![/bold red]")
        for issue in report.issues:
            console.print(f"  ❌ {issue}", markup=False, soft_wrap=True)
        for warning in report.warnings:
            console.print(f"  ⚠️  {warning}", markup=False, soft_wrap=True)
        console.print(f"Pages checked: {report.pages_checked}")

    if not report.valid:
        raise typer.Exit(code=1)


@app.command("render")
def render(
    ctx: typer.Context,
    fmt: RenderFormat = typer.Option(RenderFormat.summary, "--format", "-f"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to file."),
) -> None:
    """Render SUMMARY.md or a JSON navigation tree from the index."""
    renderer = TocRenderer(open_index(ctx))
    if fmt is RenderFormat.json:
        content = json.dumps(renderer.to_navigation(), indent=2) + "\n"
    else:
        content = renderer.render_summary()

    if output is None:
        typer.echo(content, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    console.print(f"✅ Wrote {output}", markup=False, soft_wrap=True)


def run() -> None:
    """Entry point for the ``typebook`` console script."""
    app()


if __name__ == "__main__":
    run()
