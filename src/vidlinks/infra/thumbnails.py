"""Infrastructure: placeholder thumbnail generation with Pillow.

Real frame capture is out of reach without probing the stream, so each
link gets a solid-colour 320x180 JPEG whose colour is derived from the
URL.  This module is the **only** place in the codebase that imports
``PIL``; Pillow failures are re-raised as
:class:`~vidlinks.exceptions.EnrichmentError`.
"""

from __future__ import annotations

import hashlib
import io
from pathlib import Path

from vidlinks.core.models import VideoLinkRecord
from vidlinks.core.protocols import FileStore
from vidlinks.exceptions import EnrichmentError, VidlinksError

THUMBNAIL_WIDTH: int = 320
THUMBNAIL_HEIGHT: int = 180
JPEG_QUALITY: int = 80


def placeholder_color(url: str) -> tuple[int, int, int]:
    """Deterministic RGB colour for *url*."""
    digest = hashlib.md5(url.encode("utf-8")).digest()
    return digest[0], digest[1], digest[2]


def thumbnail_filename(record_id: str) -> str:
    return f"thumb_{record_id}.jpg"


def render_placeholder(url: str) -> bytes:
    """Encode a solid-colour JPEG for *url*."""
    try:
        from PIL import Image
    except ModuleNotFoundError as exc:
        raise EnrichmentError(
            "Pillow is not installed. Install with: pip install Pillow",
        ) from exc

    buffer = io.BytesIO()
    try:
        image = Image.new("RGB", (THUMBNAIL_WIDTH, THUMBNAIL_HEIGHT), placeholder_color(url))
        image.save(buffer, format="JPEG", quality=JPEG_QUALITY)
    except (OSError, ValueError) as exc:
        raise EnrichmentError(f"Cannot render placeholder thumbnail: {exc}") from exc
    return buffer.getvalue()


class PlaceholderThumbnailGenerator:
    """Concrete :class:`~vidlinks.core.protocols.ThumbnailGenerator`.

    Parameters
    ----------
    directory:
        Cache directory; files are named ``thumb_<record id>.jpg``.
    files:
        Filesystem collaborator used for the write.
    """

    def __init__(self, directory: str | Path, files: FileStore) -> None:
        self._directory: Path = Path(directory)
        self._files: FileStore = files

    def generate(self, record: VideoLinkRecord) -> str:
        path = (self._directory / thumbnail_filename(record.id)).resolve()
        data = render_placeholder(record.url)
        try:
            self._files.write_bytes(str(path), data)
        except VidlinksError as exc:
            raise EnrichmentError(str(exc)) from exc
        return str(path)
