"""URL-pattern metadata heuristics.

A stand-in for real media probing: format and platform titles are
guessed from the URL string alone.  Every function in this module is a
**pure** transformation — no I/O, no side effects.
"""

from __future__ import annotations

from vidlinks.core.models import VideoLinkRecord
from vidlinks.core.protocols import MetadataHints

# Checked in order; the first marker found in the lower-cased URL wins.
FORMAT_MARKERS: tuple[tuple[str, str], ...] = (
    (".mp4", "MP4"),
    (".mkv", "MKV"),
    (".avi", "AVI"),
    (".mov", "MOV"),
    (".webm", "WebM"),
    ("m3u8", "HLS"),
    ("mpd", "DASH"),
)

DEFAULT_FORMAT: str = "Stream"

PLATFORM_TITLES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("youtube.com", "youtu.be"), "YouTube Video"),
    (("vimeo.com",), "Vimeo Video"),
    (("dailymotion.com",), "Dailymotion Video"),
)


def detect_format(url: str) -> str:
    """Return the format label implied by *url*."""
    lowered = url.lower()
    for marker, label in FORMAT_MARKERS:
        if marker in lowered:
            return label
    return DEFAULT_FORMAT


def platform_title(url: str) -> str | None:
    """Return a fixed title for known hosting platforms, else ``None``."""
    lowered = url.lower()
    for hosts, title in PLATFORM_TITLES:
        if any(host in lowered for host in hosts):
            return title
    return None


class UrlPatternMetadataExtractor:
    """Default :class:`~vidlinks.core.protocols.MetadataExtractor`.

    Platform titles deliberately override user-supplied titles.
    """

    def extract(self, record: VideoLinkRecord) -> MetadataHints:
        return MetadataHints(
            format=detect_format(record.url),
            title=platform_title(record.url),
        )
