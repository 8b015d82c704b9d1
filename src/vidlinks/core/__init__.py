"""Core / service layer — registry, codec, models and enrichment.

Rules
-----
* No ``print()`` calls.
* No direct filesystem or network I/O — storage and thumbnail files go
  through the collaborators in :mod:`vidlinks.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from vidlinks.core.codec import decode_records, encode_records
from vidlinks.core.enrichment import EnrichmentResult, EnrichmentWorkerPool
from vidlinks.core.heuristics import UrlPatternMetadataExtractor
from vidlinks.core.models import SortOrder, VideoLinkRecord
from vidlinks.core.protocols import (
    FileStore,
    KeyValueStore,
    MediaImporter,
    MetadataExtractor,
    MetadataHints,
    ThumbnailGenerator,
)
from vidlinks.core.registry import LinkRegistry

__all__: list[str] = [
    "EnrichmentResult",
    "EnrichmentWorkerPool",
    "FileStore",
    "KeyValueStore",
    "LinkRegistry",
    "MediaImporter",
    "MetadataExtractor",
    "MetadataHints",
    "SortOrder",
    "ThumbnailGenerator",
    "UrlPatternMetadataExtractor",
    "VideoLinkRecord",
    "decode_records",
    "encode_records",
]
