"""JSON persistence codec for :class:`VideoLinkRecord` sequences.

The whole library is stored as one JSON array under a single storage
key.  Each element is validated through :class:`StoredLink`, a pydantic
model whose aliases fix the persisted (camelCase) field names
independently of the Python attribute names.

Guarantees
----------
* :func:`decode_records` never raises — a corrupt blob reads as an
  empty library and elements that fail validation are skipped one by
  one.
* ``decode_records(encode_records(rs)) == rs`` for every field of
  records holding valid Unicode text; lone surrogates are written as ``?``.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vidlinks.core.models import (
    UNKNOWN_DURATION,
    VideoLinkRecord,
    epoch_millis,
    generate_link_id,
)
from vidlinks.core.urls import scrub_surrogates, title_from_url


class StoredLink(BaseModel):
    """One persisted library entry.

    Fields that older or hand-edited files may lack are optional here;
    :meth:`to_record` fills them from the URL and the clock.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = None
    url: str = Field(..., min_length=1)
    title: str | None = None
    description: str = ""
    duration_ms: int = Field(UNKNOWN_DURATION, alias="duration")
    format: str = ""
    thumbnail_path: str | None = Field(None, alias="thumbnailPath")
    date_added: int | None = Field(None, alias="dateAdded")
    last_accessed: int | None = Field(None, alias="lastAccessed")
    access_count: int = Field(0, alias="accessCount")
    is_valid_url: bool = Field(True, alias="isValidUrl")

    @field_validator("access_count")
    @classmethod
    def clamp_access_count(cls, value: int) -> int:
        return max(0, value)

    @field_validator("thumbnail_path")
    @classmethod
    def empty_path_is_none(cls, value: str | None) -> str | None:
        return value or None

    @classmethod
    def from_record(cls, record: VideoLinkRecord) -> StoredLink:
        thumbnail = record.thumbnail_path
        return cls(
            id=scrub_surrogates(record.id),
            url=scrub_surrogates(record.url),
            title=scrub_surrogates(record.title),
            description=scrub_surrogates(record.description),
            duration_ms=record.duration_ms,
            format=scrub_surrogates(record.format),
            thumbnail_path=scrub_surrogates(thumbnail) if thumbnail else None,
            date_added=record.date_added,
            last_accessed=record.last_accessed,
            access_count=record.access_count,
            is_valid_url=record.is_valid_url,
        )

    def to_record(self, *, clock: Callable[[], int] = epoch_millis) -> VideoLinkRecord:
        """Build the domain record; a missing ``id`` is regenerated."""
        now = clock()
        date_added = now if self.date_added is None else self.date_added
        return VideoLinkRecord(
            id=self.id or generate_link_id(self.url, now),
            url=self.url,
            title=title_from_url(self.url) if self.title is None else self.title,
            description=self.description,
            duration_ms=self.duration_ms,
            format=self.format,
            thumbnail_path=self.thumbnail_path,
            date_added=date_added,
            last_accessed=date_added if self.last_accessed is None else self.last_accessed,
            access_count=self.access_count,
            is_valid_url=self.is_valid_url,
        )


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def record_to_dict(record: VideoLinkRecord) -> dict[str, Any]:
    """Map a record onto its persisted JSON object."""
    return StoredLink.from_record(record).model_dump(by_alias=True)


def encode_records(records: Iterable[VideoLinkRecord]) -> str:
    """Serialize *records* (in order) to an ASCII-only JSON array string."""
    return json.dumps([record_to_dict(r) for r in records])


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def record_from_dict(
    data: object,
    *,
    clock: Callable[[], int] = epoch_millis,
) -> VideoLinkRecord | None:
    """Rebuild a record from one persisted element, or ``None`` if invalid."""
    try:
        stored = StoredLink.model_validate(data)
    except ValidationError as exc:
        logger.debug("Invalid link entry: {}", exc)
        return None
    return stored.to_record(clock=clock)


def decode_records(
    blob: str | None,
    *,
    clock: Callable[[], int] = epoch_millis,
) -> list[VideoLinkRecord]:
    """Parse a persisted blob; malformed input yields an empty list."""
    if not blob or not blob.strip():
        return []
    try:
        raw: object = json.loads(blob)
    except ValueError as exc:
        logger.error("Discarding unreadable link library: {}", exc)
        return []
    if not isinstance(raw, list):
        logger.error("Discarding link library: expected a JSON array, got {}", type(raw).__name__)
        return []

    records: list[VideoLinkRecord] = []
    for index, entry in enumerate(raw):
        record = record_from_dict(entry, clock=clock)
        if record is None:
            logger.warning("Skipping malformed link entry at index {}", index)
            continue
        records.append(record)
    return records
