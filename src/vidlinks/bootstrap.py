"""Wiring of infra adapters into a ready-to-use :class:`LinkRegistry`."""

from __future__ import annotations

from vidlinks.config import Settings
from vidlinks.core.protocols import MediaImporter
from vidlinks.core.enrichment import EnrichmentWorkerPool
from vidlinks.core.heuristics import UrlPatternMetadataExtractor
from vidlinks.core.registry import LinkRegistry
from vidlinks.infra.media_library import LocalMediaLibrary
from vidlinks.infra.stores import JsonFileStore, LocalFileStore
from vidlinks.infra.thumbnails import PlaceholderThumbnailGenerator


def open_registry(settings: Settings) -> LinkRegistry:
    """Build a registry persisted under ``settings.data_dir``.

    Enrichment runs on a pool of ``settings.enrichment_workers`` threads
    with URL heuristics and Pillow placeholder thumbnails.
    """
    files = LocalFileStore()
    pool = EnrichmentWorkerPool(
        UrlPatternMetadataExtractor(),
        PlaceholderThumbnailGenerator(settings.thumbnails_dir, files),
        max_workers=settings.enrichment_workers,
    )
    return LinkRegistry(
        JsonFileStore(settings.store_file),
        files=files,
        storage_key=settings.storage_key,
        enrichment=pool,
    )


def open_media_library(settings: Settings) -> MediaImporter:
    return LocalMediaLibrary(settings.library_dir)
