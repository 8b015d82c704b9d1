"""Domain models for vidlinks.

:class:`VideoLinkRecord` is a plain mutable dataclass: pure data plus
derived display helpers.  It performs no persistence and no network
I/O — the registry owns every live instance and hands out copies.
"""

from __future__ import annotations

import enum
import hashlib
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from vidlinks.core.urls import (
    FALLBACK_TITLE,
    hostname_of,
    is_supported_network_uri,
    title_from_url,
)

UNKNOWN_DURATION: int = -1


def epoch_millis() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def generate_link_id(url: str, now_ms: int) -> str:
    """Build a record id from a digest of *url* and a timestamp.

    Collision-resistant enough for a single library; the registry
    disambiguates the rare clash.
    """
    digest = hashlib.sha1(url.encode("utf-8")).hexdigest()[:12]
    return f"link_{digest}_{now_ms}"


# ---------------------------------------------------------------------------
# Sort orders
# ---------------------------------------------------------------------------

class SortOrder(enum.Enum):
    """Orderings supported by :meth:`LinkRegistry.sorted`."""

    DATE_ADDED_DESC = "date-desc"
    DATE_ADDED_ASC = "date-asc"
    TITLE_ASC = "title-asc"
    TITLE_DESC = "title-desc"
    MOST_ACCESSED = "most-accessed"
    LAST_ACCESSED = "last-accessed"


# ---------------------------------------------------------------------------
# Video link record
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class VideoLinkRecord:
    """Metadata describing one user-supplied network video URL."""

    id: str
    url: str
    title: str
    description: str = ""
    duration_ms: int = UNKNOWN_DURATION
    format: str = ""
    thumbnail_path: str | None = None
    date_added: int = 0
    last_accessed: int = 0
    access_count: int = 0
    is_valid_url: bool = True

    @classmethod
    def create(
        cls,
        url: str,
        title: str | None = None,
        *,
        validator: Callable[[str], bool] = is_supported_network_uri,
        now_ms: int | None = None,
    ) -> VideoLinkRecord:
        """Build a fresh record for *url*.

        A non-blank *title* replaces the title derived from the URL.
        """
        now = epoch_millis() if now_ms is None else now_ms
        return cls(
            id=generate_link_id(url, now),
            url=url,
            title=title if title and title.strip() else title_from_url(url),
            date_added=now,
            last_accessed=now,
            is_valid_url=validator(url),
        )

    # ------------------------------------------------------------------
    # Mutation helpers
    # ------------------------------------------------------------------

    def set_url(
        self,
        url: str,
        validator: Callable[[str], bool] = is_supported_network_uri,
    ) -> None:
        """Reassign the URL and re-run the validity predicate."""
        self.url = url
        self.is_valid_url = validator(url)

    def mark_accessed(self, now_ms: int | None = None) -> None:
        """Bump the access counter and refresh ``last_accessed``."""
        now = epoch_millis() if now_ms is None else now_ms
        self.access_count += 1
        self.last_accessed = max(now, self.last_accessed, self.date_added)

    # ------------------------------------------------------------------
    # Display helpers
    # ------------------------------------------------------------------

    @property
    def display_title(self) -> str:
        return self.title if self.title and self.title.strip() else FALLBACK_TITLE

    @property
    def hostname(self) -> str:
        return hostname_of(self.url) or "Unknown"

    @property
    def has_thumbnail(self) -> bool:
        """``True`` when a cached thumbnail file exists on disk."""
        return self.thumbnail_path is not None and Path(self.thumbnail_path).exists()

    def duration_string(self) -> str:
        """Render the duration as ``H:MM:SS`` / ``M:SS`` or ``"Unknown"``."""
        if self.duration_ms <= 0:
            return "Unknown"
        seconds = self.duration_ms // 1000
        minutes, secs = divmod(seconds, 60)
        hours, mins = divmod(minutes, 60)
        if hours > 0:
            return f"{hours}:{mins:02d}:{secs:02d}"
        return f"{minutes}:{secs:02d}"
