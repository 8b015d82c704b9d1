"""Rich rendering of link records and the mixed library view.

All display logic lives here — no registry access, no persistence.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from vidlinks.cli.console import console
from vidlinks.core.library_view import FileItem, LibraryItem, LinkItem, is_selectable
from vidlinks.core.models import VideoLinkRecord
from vidlinks.exceptions import EnvironmentError


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for record rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms — no I/O themselves)
# ---------------------------------------------------------------------------

def _format_timestamp(epoch_ms: int) -> str:
    """Render epoch milliseconds as local ``YYYY-MM-DD HH:MM``."""
    if epoch_ms <= 0:
        return "—"
    return datetime.fromtimestamp(epoch_ms / 1000).strftime("%Y-%m-%d %H:%M")


def _format_size(num_bytes: int) -> str:
    """Convert bytes to a human-readable string."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def _format_label(record: VideoLinkRecord) -> str:
    return record.format or "…"


def _validity_marker(record: VideoLinkRecord) -> str:
    return "[green]yes[/green]" if record.is_valid_url else "[red]no[/red]"


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def render_links(records: Sequence[VideoLinkRecord], *, title: str = "Network Links") -> None:
    """Print *records* as a Rich table, in the order given."""
    if not records:
        console.print("[dim]No links.[/dim]")
        return

    table_class = _import_rich_table()
    table = table_class(
        title=title,
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", min_width=16)
    table.add_column("Format", justify="left", min_width=6)
    table.add_column("Host", min_width=10)
    table.add_column("Added", justify="right")
    table.add_column("Plays", justify="right")

    for record in records:
        table.add_row(
            record.id,
            record.display_title,
            _format_label(record),
            record.hostname,
            _format_timestamp(record.date_added),
            str(record.access_count),
        )

    console.print(table)


def render_record(record: VideoLinkRecord) -> None:
    """Print every field of a single record."""
    console.print(f"[bold cyan]Title:[/bold cyan]     {record.display_title}")
    console.print(f"[bold cyan]URL:[/bold cyan]       {record.url}")
    console.print(f"[bold cyan]ID:[/bold cyan]        {record.id}")
    console.print(f"[bold cyan]Format:[/bold cyan]    {_format_label(record)}")
    console.print(f"[bold cyan]Duration:[/bold cyan]  {record.duration_string()}")
    console.print(f"[bold cyan]Supported:[/bold cyan] {_validity_marker(record)}")
    console.print(f"[bold cyan]Added:[/bold cyan]     {_format_timestamp(record.date_added)}")
    console.print(
        f"[bold cyan]Accessed:[/bold cyan]  {_format_timestamp(record.last_accessed)}"
        f" ({record.access_count}x)"
    )
    if record.description:
        console.print(f"[bold cyan]Notes:[/bold cyan]     {record.description}")
    if record.has_thumbnail:
        console.print(f"[bold cyan]Thumbnail:[/bold cyan] {record.thumbnail_path}")
    elif record.thumbnail_path:
        console.print(f"[bold cyan]Thumbnail:[/bold cyan] [red]missing[/red] ({record.thumbnail_path})")


def render_library(items: Sequence[LibraryItem], *, storage_used: int = 0) -> None:
    """Print the mixed library view; selectable rows are numbered."""
    if not items:
        console.print("[dim]Library is empty.[/dim]")
        return

    number = 0
    for item in items:
        if not is_selectable(item):
            console.print(f"\n[bold underline]{item.text}[/bold underline]")  # type: ignore[union-attr]
            continue
        number += 1
        if isinstance(item, LinkItem):
            record = item.record
            console.print(
                f"  {number:>2}. {record.display_title}  [dim]{record.hostname} · "
                f"{_format_label(record)} · {record.id}[/dim]"
            )
        elif isinstance(item, FileItem):
            size = item.path.stat().st_size if item.path.exists() else 0
            console.print(f"  {number:>2}. {item.path.name}  [dim]{_format_size(size)}[/dim]")

    if any(isinstance(item, FileItem) for item in items):
        console.print(f"\n[dim]Local files use {_format_size(storage_used)}.[/dim]")
