"""Tagged-variant model of the mixed library display list.

The display list interleaves section headers, local media files and
network links.  Each row is one of three frozen dataclasses so that a
renderer can dispatch on type instead of inspecting untyped objects.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from vidlinks.core.models import VideoLinkRecord

LINKS_HEADER: str = "Network Links"
FILES_HEADER: str = "Local Files"


@dataclass(frozen=True, slots=True)
class HeaderItem:
    text: str


@dataclass(frozen=True, slots=True)
class FileItem:
    path: Path


@dataclass(frozen=True, slots=True)
class LinkItem:
    record: VideoLinkRecord


LibraryItem = HeaderItem | FileItem | LinkItem


def build_library_items(
    files: Sequence[Path],
    links: Sequence[VideoLinkRecord],
) -> list[LibraryItem]:
    """Assemble the display list: links section first, then local files.

    Empty sections are omitted together with their header.
    """
    items: list[LibraryItem] = []
    if links:
        items.append(HeaderItem(LINKS_HEADER))
        items.extend(LinkItem(record) for record in links)
    if files:
        items.append(HeaderItem(FILES_HEADER))
        items.extend(FileItem(path) for path in files)
    return items


def is_selectable(item: LibraryItem) -> bool:
    """Headers are not clickable; every other row is."""
    return not isinstance(item, HeaderItem)
