"""Tests for the mixed library display list (core/library_view.py)."""

from __future__ import annotations

from pathlib import Path

from vidlinks.core.library_view import (
    FILES_HEADER,
    LINKS_HEADER,
    FileItem,
    HeaderItem,
    LinkItem,
    build_library_items,
    is_selectable,
)
from vidlinks.core.models import VideoLinkRecord


def _make_record(url: str) -> VideoLinkRecord:
    return VideoLinkRecord.create(url, validator=lambda _: True, now_ms=1)


class TestBuildLibraryItems:
    def test_empty(self) -> None:
        assert build_library_items([], []) == []

    def test_links_then_files(self) -> None:
        link = _make_record("https://x.org/a.mp4")
        path = Path("/media/b.mkv")
        items = build_library_items([path], [link])
        assert items == [
            HeaderItem(LINKS_HEADER),
            LinkItem(link),
            HeaderItem(FILES_HEADER),
            FileItem(path),
        ]

    def test_empty_section_has_no_header(self) -> None:
        items = build_library_items([Path("/media/b.mkv")], [])
        assert items == [HeaderItem(FILES_HEADER), FileItem(Path("/media/b.mkv"))]

    def test_link_order_is_kept(self) -> None:
        links = [_make_record(f"https://x.org/{n}.mp4") for n in range(3)]
        items = build_library_items([], links)
        assert [item.record for item in items if isinstance(item, LinkItem)] == links


class TestSelectable:
    def test_headers_are_not_selectable(self) -> None:
        assert is_selectable(HeaderItem("Network Links")) is False
        assert is_selectable(FileItem(Path("/a.mp4"))) is True
        assert is_selectable(LinkItem(_make_record("https://x.org/a.mp4"))) is True
