"""CLI application entry point and command routing for vidlinks.

This module is the **sole error boundary** for the entire application.
It catches :class:`~vidlinks.exceptions.VidlinksError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the registry
  and the infrastructure adapters wired in :mod:`vidlinks.bootstrap`.
* ``print()`` is forbidden outside the CLI layer.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from vidlinks.cli import exit_codes
from vidlinks.cli.console import console
from vidlinks.core.models import SortOrder
from vidlinks.exceptions import EnvironmentError, NotFoundError, VidlinksError
from vidlinks.version import __version__

if TYPE_CHECKING:
    from vidlinks.config import Settings
    from vidlinks.core.registry import LinkRegistry

ENRICHMENT_WAIT_SECONDS: float = 10.0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(
        prog="vidlinks",
        description="Keep a library of network video links.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = parser.add_subparsers(dest="command", metavar="<command>")

    add = sub.add_parser("add", help="Add a link (returns the existing one if present).")
    add.add_argument("url")
    add.add_argument("-t", "--title", default=None, help="Custom display title.")

    list_cmd = sub.add_parser("list", help="List links, newest first.")
    list_cmd.add_argument(
        "-s",
        "--sort",
        choices=[order.value for order in SortOrder],
        default=None,
        help="Sort order.",
    )

    search = sub.add_parser("search", help="Search titles, URLs and notes.")
    search.add_argument("query")

    show = sub.add_parser("show", help="Show every field of one link.")
    show.add_argument("id")

    rename = sub.add_parser("rename", help="Change a link's title.")
    rename.add_argument("id")
    rename.add_argument("title")

    open_cmd = sub.add_parser("open", help="Mark a link as played and print its URL.")
    open_cmd.add_argument("id")

    remove = sub.add_parser("remove", help="Remove a link and its thumbnail.")
    remove.add_argument("id")

    clear = sub.add_parser("clear", help="Remove every link.")
    clear.add_argument("-y", "--yes", action="store_true", help="Skip confirmation.")

    import_cmd = sub.add_parser("import", help="Copy a local media file into the library.")
    import_cmd.add_argument("path")
    import_cmd.add_argument("-n", "--name", default=None, help="File name inside the library.")

    remove_file = sub.add_parser("remove-file", help="Delete one imported file.")
    remove_file.add_argument("name")

    clear_files = sub.add_parser("clear-files", help="Delete every imported file.")
    clear_files.add_argument("-y", "--yes", action="store_true", help="Skip confirmation.")

    sub.add_parser("library", help="Show links and local files together.")
    return parser


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def _settings() -> Settings:
    from vidlinks.config import get_settings
    from vidlinks.utils.logger import configure_logging

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file)
    return settings


def _open_registry(settings: Settings | None = None) -> LinkRegistry:
    from vidlinks.bootstrap import open_registry

    return open_registry(settings or _settings())


def _import_questionary() -> Any:
    """Import questionary lazily for interactive confirmation."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
            hint="Or pass --yes to skip the confirmation prompt.",
        ) from exc
    return questionary


def _not_found(record_id: str) -> NotFoundError:
    return NotFoundError(
        f"No link with id {record_id!r}.",
        hint="Run 'vidlinks list' to see link ids.",
    )


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _handle_add(url: str, title: str | None) -> int:
    from vidlinks.cli.render import render_record

    with _open_registry() as registry:
        before = registry.total_count()
        record = registry.add(url, title)
        if registry.total_count() == before:
            console.print("[yellow]Already in library.[/yellow]")
        else:
            console.print("[bold green]Added.[/bold green]")
            registry.wait_for_enrichment(ENRICHMENT_WAIT_SECONDS)
            record = registry.find_by_id(record.id) or record
        render_record(record)
    return exit_codes.SUCCESS


def _handle_list(sort: str | None) -> int:
    from vidlinks.cli.render import render_links

    with _open_registry() as registry:
        records = registry.sorted(SortOrder(sort)) if sort else registry.list()
    render_links(records)
    return exit_codes.SUCCESS


def _handle_search(query: str) -> int:
    from vidlinks.cli.render import render_links

    with _open_registry() as registry:
        records = registry.search(query)
    render_links(records, title=f"Results for {query!r}")
    return exit_codes.SUCCESS


def _handle_show(record_id: str) -> int:
    from vidlinks.cli.render import render_record

    with _open_registry() as registry:
        record = registry.find_by_id(record_id)
    if record is None:
        raise _not_found(record_id)
    render_record(record)
    return exit_codes.SUCCESS


def _handle_rename(record_id: str, title: str) -> int:
    with _open_registry() as registry:
        if not registry.update_title(record_id, title):
            raise _not_found(record_id)
    console.print("[bold green]Renamed.[/bold green]")
    return exit_codes.SUCCESS


def _handle_open(record_id: str) -> int:
    with _open_registry() as registry:
        record = registry.find_by_id(record_id)
        if record is None:
            raise _not_found(record_id)
        registry.mark_accessed(record_id)
    console.print(record.url)
    return exit_codes.SUCCESS


def _handle_remove(record_id: str) -> int:
    with _open_registry() as registry:
        if not registry.remove(record_id):
            raise _not_found(record_id)
    console.print("[bold green]Removed.[/bold green]")
    return exit_codes.SUCCESS


def _handle_clear(assume_yes: bool) -> int:
    with _open_registry() as registry:
        count = registry.total_count()
        if not assume_yes:
            questionary = _import_questionary()
            confirmed = questionary.confirm(
                f"Remove all {count} links?",
                default=False,
            ).ask()  # Returns None on Ctrl+C / Esc
            if not confirmed:
                console.print("[yellow]Nothing removed.[/yellow]")
                return exit_codes.SUCCESS
        registry.clear_all()
    console.print(f"[bold green]Removed {count} links.[/bold green]")
    return exit_codes.SUCCESS


def _handle_import(path: str, name: str | None) -> int:
    from vidlinks.bootstrap import open_media_library

    library = open_media_library(_settings())
    destination = library.import_file(path, name or Path(path).name)
    console.print(f"[bold green]Imported:[/bold green] {destination}")
    return exit_codes.SUCCESS


def _handle_library() -> int:
    from vidlinks.bootstrap import open_media_library
    from vidlinks.cli.render import render_library
    from vidlinks.core.library_view import build_library_items

    settings = _settings()
    with _open_registry(settings) as registry:
        links = registry.list()
    library = open_media_library(settings)
    render_library(
        build_library_items(library.files(), links),
        storage_used=library.total_storage_used(),
    )
    return exit_codes.SUCCESS


def _handle_remove_file(name: str) -> int:
    from vidlinks.bootstrap import open_media_library

    if not open_media_library(_settings()).remove(name):
        raise NotFoundError(
            f"No imported file named {name!r}.",
            hint="Run 'vidlinks library' to see imported files.",
        )
    console.print("[bold green]Removed.[/bold green]")
    return exit_codes.SUCCESS


def _handle_clear_files(assume_yes: bool) -> int:
    from vidlinks.bootstrap import open_media_library

    library = open_media_library(_settings())
    if not assume_yes:
        questionary = _import_questionary()
        confirmed = questionary.confirm(
            f"Delete all {len(library.files())} imported files?",
            default=False,
        ).ask()
        if not confirmed:
            console.print("[yellow]Nothing removed.[/yellow]")
            return exit_codes.SUCCESS
    removed = library.clear()
    console.print(f"[bold green]Removed {removed} files.[/bold green]")
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the vidlinks CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    command: str | None = args.command
    if command is None:
        parser.print_help()
        return exit_codes.SUCCESS
    if command == "add":
        return _handle_add(args.url, args.title)
    if command == "list":
        return _handle_list(args.sort)
    if command == "search":
        return _handle_search(args.query)
    if command == "show":
        return _handle_show(args.id)
    if command == "rename":
        return _handle_rename(args.id, args.title)
    if command == "open":
        return _handle_open(args.id)
    if command == "remove":
        return _handle_remove(args.id)
    if command == "clear":
        return _handle_clear(args.yes)
    if command == "import":
        return _handle_import(args.path, args.name)
    if command == "remove-file":
        return _handle_remove_file(args.name)
    if command == "clear-files":
        return _handle_clear_files(args.yes)
    return _handle_library()


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except VidlinksError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
