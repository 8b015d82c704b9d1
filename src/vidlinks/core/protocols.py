"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so real probing or frame capture can replace the
URL heuristics without touching the registry.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from vidlinks.core.models import VideoLinkRecord

UrlValidator = Callable[[str], bool]
"""Predicate deciding whether a URL is a supported network stream."""


class KeyValueStore(Protocol):
    """String-keyed persistence backend holding the serialized library."""

    def get(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None`` when absent.

        Raises
        ------
        PersistenceError
            When the backend cannot be read.
        """
        ...  # pragma: no cover

    def put(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value.

        Raises
        ------
        PersistenceError
            When the backend cannot be written.
        """
        ...  # pragma: no cover


class FileStore(Protocol):
    """Filesystem collaborator used for cached thumbnail files."""

    def write_bytes(self, path: str, data: bytes) -> None:
        """Write *data* to *path*, creating parent directories."""
        ...  # pragma: no cover

    def delete(self, path: str) -> bool:
        """Delete *path*; return ``False`` when nothing was there."""
        ...  # pragma: no cover

    def exists(self, path: str) -> bool:
        ...  # pragma: no cover


@dataclass(frozen=True, slots=True)
class MetadataHints:
    """Derived fields produced by a :class:`MetadataExtractor`."""

    format: str
    """Short container/stream label (``"MP4"``, ``"HLS"``, ...)."""

    title: str | None = None
    """Title override, or ``None`` to keep the current title."""


class MetadataExtractor(Protocol):
    """Enrichment stage 1 — derive format and title for a record."""

    def extract(self, record: VideoLinkRecord) -> MetadataHints:
        ...  # pragma: no cover


class ThumbnailGenerator(Protocol):
    """Enrichment stage 2 — produce a cached thumbnail for a record."""

    def generate(self, record: VideoLinkRecord) -> str:
        """Write a thumbnail for *record* and return its path."""
        ...  # pragma: no cover


class MediaImporter(Protocol):
    """Copy-and-rename primitive for local media files."""

    def import_file(self, source_path: str | Path, desired_name: str) -> Path:
        """Copy *source_path* into managed storage and return the new path.

        Raises
        ------
        ImportFailedError
            When the source is missing or the copy fails.
        """
        ...  # pragma: no cover

    def files(self) -> list[Path]:
        """Managed files, sorted by name."""
        ...  # pragma: no cover

    def remove(self, file_name: str) -> bool:
        ...  # pragma: no cover

    def clear(self) -> int:
        """Delete every managed file and return how many were removed."""
        ...  # pragma: no cover

    def total_storage_used(self) -> int:
        ...  # pragma: no cover
