"""Infrastructure layer — filesystem, storage and imaging adapters.

Every raw third-party or OS exception must be caught here and
re-raised as a :class:`~vidlinks.exceptions.VidlinksError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must satisfy the protocols in :mod:`vidlinks.core.protocols`.
"""

from vidlinks.infra.media_library import LocalMediaLibrary
from vidlinks.infra.stores import JsonFileStore, LocalFileStore, MemoryStore
from vidlinks.infra.thumbnails import PlaceholderThumbnailGenerator

__all__: list[str] = [
    "JsonFileStore",
    "LocalFileStore",
    "LocalMediaLibrary",
    "MemoryStore",
    "PlaceholderThumbnailGenerator",
]
