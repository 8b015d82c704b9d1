"""Core link registry — the single owner of the network-link library.

:class:`LinkRegistry` keeps the library in memory (newest link first),
rewrites the serialized blob through a
:class:`~vidlinks.core.protocols.KeyValueStore` after every mutation,
and schedules background enrichment for newly added links.

Guarantees
----------
* Exactly one record per distinct URL; ids are unique.
* Every mutation, snapshot and persist runs under one re-entrant lock,
  so enrichment write-back never races a caller's edit.
* Callers only ever receive copies of records.
* Storage failures are logged, never raised — memory stays
  authoritative and the next successful persist reconciles storage.
"""

from __future__ import annotations

import dataclasses
import threading
from collections.abc import Callable
from types import TracebackType

from loguru import logger

from vidlinks.core.codec import decode_records, encode_records
from vidlinks.core.enrichment import EnrichmentResult, EnrichmentWorkerPool
from vidlinks.core.models import SortOrder, VideoLinkRecord, epoch_millis
from vidlinks.core.protocols import FileStore, KeyValueStore, UrlValidator
from vidlinks.core.urls import is_supported_network_uri, scrub_surrogates
from vidlinks.exceptions import InvalidInputError

DEFAULT_STORAGE_KEY: str = "links_json"


def _copy(record: VideoLinkRecord) -> VideoLinkRecord:
    return dataclasses.replace(record)


class LinkRegistry:
    """Persistent, thread-safe registry of :class:`VideoLinkRecord` objects.

    Parameters
    ----------
    store:
        Backend holding the serialized library under *storage_key*.
    files:
        Filesystem collaborator used to delete cached thumbnails.
    storage_key:
        Key of the JSON blob inside *store*.
    validator:
        Predicate computing ``is_valid_url`` for new and re-pointed links.
    enrichment:
        Worker pool for background enrichment; ``None`` disables it.
    clock:
        Millisecond clock, injectable for deterministic tests.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        files: FileStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        validator: UrlValidator = is_supported_network_uri,
        enrichment: EnrichmentWorkerPool | None = None,
        clock: Callable[[], int] = epoch_millis,
    ) -> None:
        self._store: KeyValueStore = store
        self._files: FileStore = files
        self._storage_key: str = storage_key
        self._validator: UrlValidator = validator
        self._enrichment: EnrichmentWorkerPool | None = enrichment
        self._clock: Callable[[], int] = clock
        self._lock = threading.RLock()
        self._records: list[VideoLinkRecord] = self._load()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, url: str, title: str | None = None) -> VideoLinkRecord:
        """Add *url* to the library, or return the record that already has it.

        Raises
        ------
        InvalidInputError
            If *url* is empty or whitespace.
        """
        cleaned = scrub_surrogates((url or "").strip())
        if not cleaned:
            raise InvalidInputError(
                "URL must not be empty.",
                hint="Pass a full link such as https://example.com/video.mp4",
            )

        with self._lock:
            existing = self._find_by_url(cleaned)
            if existing is not None:
                logger.debug("Link already present: {}", existing.id)
                return _copy(existing)

            record = VideoLinkRecord.create(
                cleaned,
                scrub_surrogates(title) if title else title,
                validator=self._validator,
                now_ms=self._clock(),
            )
            record = self._with_unique_id(record)
            self._records.insert(0, record)
            self._persist()
            snapshot = _copy(record)

        logger.debug("Added link {} ({})", snapshot.id, snapshot.url)
        self._schedule_enrichment(snapshot)
        return snapshot

    def remove(self, record_id: str) -> bool:
        """Remove a link and its cached thumbnail; ``False`` if unknown."""
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return False
            record = self._records.pop(index)
            self._delete_thumbnail(record.thumbnail_path)
            self._persist()
        logger.debug("Removed link {}", record_id)
        return True

    def update_title(self, record_id: str, title: str) -> bool:
        with self._lock:
            record = self._get(record_id)
            if record is None:
                return False
            record.title = scrub_surrogates(title)
            self._persist()
        return True

    def update_record(self, updated: VideoLinkRecord) -> bool:
        """Replace the stored record that shares ``updated.id``.

        ``date_added`` is kept from the stored record and ``access_count``
        never goes down.  Enrichment output the caller left empty
        (``format``, ``thumbnail_path``) is carried over from the stored
        record, so passing back an old snapshot keeps the cached
        thumbnail.  Returns ``False`` when the id is unknown or the new URL
        already belongs to another link.
        """
        replacement = _copy(updated)
        replacement.url = scrub_surrogates(replacement.url)
        replacement.title = scrub_surrogates(replacement.title)
        replacement.description = scrub_surrogates(replacement.description)

        with self._lock:
            index = self._index_of(replacement.id)
            if index is None:
                return False
            current = self._records[index]

            clash = self._find_by_url(replacement.url)
            if clash is not None and clash.id != replacement.id:
                logger.warning(
                    "Refusing update of {}: URL already used by {}", replacement.id, clash.id,
                )
                return False

            url_changed = replacement.url != current.url
            if url_changed:
                replacement.set_url(replacement.url, self._validator)
            elif not replacement.format:
                replacement.format = current.format
            if replacement.thumbnail_path is None:
                replacement.thumbnail_path = current.thumbnail_path
            replacement.date_added = current.date_added
            replacement.access_count = max(current.access_count, replacement.access_count)
            replacement.last_accessed = max(replacement.last_accessed, replacement.date_added)

            if current.thumbnail_path and current.thumbnail_path != replacement.thumbnail_path:
                self._delete_thumbnail(current.thumbnail_path)

            self._records[index] = replacement
            self._persist()
            snapshot = _copy(replacement)

        if url_changed:
            self._schedule_enrichment(snapshot)
        return True

    def mark_accessed(self, record_id: str) -> None:
        """Record a playback of *record_id*; unknown ids are ignored."""
        with self._lock:
            record = self._get(record_id)
            if record is None:
                return
            record.mark_accessed(self._clock())
            self._persist()

    def clear_all(self) -> None:
        """Drop every link and delete every cached thumbnail."""
        with self._lock:
            for record in self._records:
                self._delete_thumbnail(record.thumbnail_path)
            count = len(self._records)
            self._records.clear()
            self._persist()
        logger.debug("Cleared {} links", count)

    # ------------------------------------------------------------------
    # Reads (snapshots)
    # ------------------------------------------------------------------

    def list(self) -> list[VideoLinkRecord]:
        """Return copies of all records, newest first."""
        with self._lock:
            return [_copy(r) for r in self._records]

    def sorted(self, order: SortOrder) -> list[VideoLinkRecord]:
        """Return a snapshot sorted by *order*; ties keep stored order."""
        snapshot = self.list()
        if order is SortOrder.DATE_ADDED_DESC:
            snapshot.sort(key=lambda r: r.date_added, reverse=True)
        elif order is SortOrder.DATE_ADDED_ASC:
            snapshot.sort(key=lambda r: r.date_added)
        elif order is SortOrder.TITLE_ASC:
            snapshot.sort(key=lambda r: r.display_title.casefold())
        elif order is SortOrder.TITLE_DESC:
            snapshot.sort(key=lambda r: r.display_title.casefold(), reverse=True)
        elif order is SortOrder.MOST_ACCESSED:
            snapshot.sort(key=lambda r: r.access_count, reverse=True)
        elif order is SortOrder.LAST_ACCESSED:
            snapshot.sort(key=lambda r: r.last_accessed, reverse=True)
        return snapshot

    def search(self, query: str | None) -> list[VideoLinkRecord]:
        """Case-insensitive substring search over title, URL and description."""
        if query is None or not query.strip():
            return self.list()
        needle = query.casefold()
        return [
            r
            for r in self.list()
            if needle in r.display_title.casefold()
            or needle in r.url.casefold()
            or needle in r.description.casefold()
        ]

    def find_by_id(self, record_id: str) -> VideoLinkRecord | None:
        with self._lock:
            record = self._get(record_id)
            return _copy(record) if record is not None else None

    def total_count(self) -> int:
        with self._lock:
            return len(self._records)

    def __len__(self) -> int:
        return self.total_count()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def wait_for_enrichment(self, timeout: float | None = None) -> bool:
        """Block until queued enrichment is done; ``True`` if nothing is left."""
        if self._enrichment is None:
            return True
        return self._enrichment.drain(timeout)

    def close(self, wait: bool = False) -> None:
        """Stop accepting enrichment tasks; persisted state stays consistent."""
        if self._enrichment is None or self._enrichment.closed:
            return
        pending = self._enrichment.pending_count
        if pending and not wait:
            logger.debug("Closing with {} enrichment tasks outstanding", pending)
        self._enrichment.shutdown(wait=wait)

    cleanup = close

    def __enter__(self) -> LinkRegistry:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Enrichment write-back
    # ------------------------------------------------------------------

    def _schedule_enrichment(self, record: VideoLinkRecord) -> None:
        if self._enrichment is not None and not self._enrichment.closed:
            self._enrichment.submit(record, self._apply_enrichment)

    def _apply_enrichment(self, record_id: str, result: EnrichmentResult) -> None:
        """Merge derived fields into the live record and persist."""
        with self._lock:
            record = self._get(record_id)
            if record is None:
                # Removed while the task ran; the fresh thumbnail is an orphan.
                self._delete_thumbnail(result.thumbnail_path)
                return
            if record.url != result.source_url:
                logger.debug("Dropping stale enrichment for {}", record_id)
                return
            if result.failed:
                logger.info("Keeping partial enrichment for {}: {}", record_id, result.error)

            if result.format is not None:
                record.format = result.format
            if result.title:
                record.title = result.title
            if result.thumbnail_path is not None:
                if record.thumbnail_path and record.thumbnail_path != result.thumbnail_path:
                    self._delete_thumbnail(record.thumbnail_path)
                record.thumbnail_path = result.thumbnail_path
            self._persist()

    # ------------------------------------------------------------------
    # Internal helpers (call with the lock held)
    # ------------------------------------------------------------------

    def _get(self, record_id: str) -> VideoLinkRecord | None:
        index = self._index_of(record_id)
        return self._records[index] if index is not None else None

    def _index_of(self, record_id: str) -> int | None:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def _find_by_url(self, url: str) -> VideoLinkRecord | None:
        return next((r for r in self._records if r.url == url), None)

    def _with_unique_id(self, record: VideoLinkRecord) -> VideoLinkRecord:
        taken = {r.id for r in self._records}
        if record.id not in taken:
            return record
        suffix = 1
        while f"{record.id}_{suffix}" in taken:
            suffix += 1
        return dataclasses.replace(record, id=f"{record.id}_{suffix}")

    def _delete_thumbnail(self, path: str | None) -> None:
        if not path:
            return
        try:
            if self._files.exists(path):
                self._files.delete(path)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not delete thumbnail {}: {}", path, exc)

    # ------------------------------------------------------------------
    # Persistence (best effort)
    # ------------------------------------------------------------------

    def _load(self) -> list[VideoLinkRecord]:
        try:
            blob = self._store.get(self._storage_key)
        except Exception as exc:  # noqa: BLE001
            logger.opt(exception=exc).error("Could not read link library; starting empty")
            return []

        records: list[VideoLinkRecord] = []
        seen_ids: set[str] = set()
        seen_urls: set[str] = set()
        for record in decode_records(blob, clock=self._clock):
            if record.id in seen_ids or record.url in seen_urls:
                logger.warning("Dropping duplicate stored link {} ({})", record.id, record.url)
                continue
            seen_ids.add(record.id)
            seen_urls.add(record.url)
            records.append(record)
        logger.debug("Loaded {} links", len(records))
        return records

    def _persist(self) -> bool:
        try:
            self._store.put(self._storage_key, encode_records(self._records))
        except Exception as exc:  # noqa: BLE001
            logger.opt(exception=exc).error(
                "Could not save {} links; keeping them in memory", len(self._records),
            )
            return False
        return True
