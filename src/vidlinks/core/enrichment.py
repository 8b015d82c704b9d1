"""Bounded background enrichment of link records.

:class:`EnrichmentWorkerPool` runs the two enrichment stages for a
record off the caller's thread:

1. **Metadata** — a :class:`~vidlinks.core.protocols.MetadataExtractor`
   derives the format label and an optional title override.
2. **Thumbnail** — a :class:`~vidlinks.core.protocols.ThumbnailGenerator`
   writes a cached image and reports its path.

Each task works on a private copy of the record and hands an
:class:`EnrichmentResult` to the completion callback, which is where the
registry merges the derived fields back under its own lock.

Guarantees
----------
* A failing stage is logged as :class:`~vidlinks.exceptions.EnrichmentError`;
  later stages are skipped and the partial result is still delivered.
* Failures never escape a task and never affect other tasks.
* No retries.  After :meth:`EnrichmentWorkerPool.shutdown` new tasks
  are refused and queued ones are cancelled.
"""

from __future__ import annotations

import dataclasses
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_for_futures
from dataclasses import dataclass

from loguru import logger

from vidlinks.core.heuristics import UrlPatternMetadataExtractor
from vidlinks.core.models import VideoLinkRecord
from vidlinks.core.protocols import MetadataExtractor, ThumbnailGenerator
from vidlinks.exceptions import EnrichmentError

DEFAULT_POOL_SIZE: int = 3


@dataclass(frozen=True, slots=True)
class EnrichmentResult:
    """Fields derived for one record.  ``None`` means "not produced"."""

    source_url: str
    """URL the task enriched; stale results are dropped on write-back."""

    format: str | None = None
    title: str | None = None
    thumbnail_path: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


EnrichmentCallback = Callable[[str, EnrichmentResult], None]


class EnrichmentWorkerPool:
    """Fixed-size thread pool running fire-and-forget enrichment tasks.

    Parameters
    ----------
    extractor:
        Stage 1 strategy.  Defaults to URL-pattern heuristics.
    thumbnailer:
        Stage 2 strategy.  ``None`` disables thumbnail generation.
    max_workers:
        Number of worker threads (at least 1).
    """

    def __init__(
        self,
        extractor: MetadataExtractor | None = None,
        thumbnailer: ThumbnailGenerator | None = None,
        *,
        max_workers: int = DEFAULT_POOL_SIZE,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._extractor: MetadataExtractor = extractor or UrlPatternMetadataExtractor()
        self._thumbnailer: ThumbnailGenerator | None = thumbnailer
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="vidlinks-enrich",
        )
        self._lock = threading.Lock()
        self._pending: set[Future[EnrichmentResult]] = set()
        self._closed: bool = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def submit(
        self,
        record: VideoLinkRecord,
        on_complete: EnrichmentCallback,
    ) -> Future[EnrichmentResult] | None:
        """Queue enrichment for *record*; ``None`` once the pool is shut down."""
        task_record = dataclasses.replace(record)
        with self._lock:
            if self._closed:
                logger.debug("Enrichment pool closed; skipping {}", record.id)
                return None
            future = self._executor.submit(self._run, task_record, on_complete)
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return future

    def drain(self, timeout: float | None = None) -> bool:
        """Wait for outstanding tasks; return ``True`` if all finished."""
        with self._lock:
            pending = set(self._pending)
        if not pending:
            return True
        _, not_done = wait_for_futures(pending, timeout=timeout)
        return not not_done

    def shutdown(self, wait: bool = False) -> None:
        """Stop accepting tasks and cancel queued ones (idempotent).

        In-flight tasks are allowed to finish; with *wait* the call
        blocks until they have.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
        logger.debug("Shutting down enrichment pool (wait={})", wait)
        self._executor.shutdown(wait=wait, cancel_futures=True)

    # ------------------------------------------------------------------
    # Worker body
    # ------------------------------------------------------------------

    def _run(
        self,
        record: VideoLinkRecord,
        on_complete: EnrichmentCallback,
    ) -> EnrichmentResult:
        fmt: str | None = None
        title: str | None = None
        thumbnail: str | None = None
        error: str | None = None
        stage = "metadata"

        try:
            hints = self._extractor.extract(record)
            fmt, title = hints.format, hints.title
            record.format = hints.format
            if hints.title:
                record.title = hints.title

            if self._thumbnailer is not None:
                stage = "thumbnail"
                thumbnail = self._thumbnailer.generate(record)
        except Exception as exc:  # noqa: BLE001
            failure = (
                exc
                if isinstance(exc, EnrichmentError)
                else EnrichmentError(f"{stage} stage failed: {exc}")
            )
            error = str(failure)
            logger.opt(exception=exc).warning(
                "Enrichment of {} stopped at {} stage: {}", record.url, stage, error,
            )

        result = EnrichmentResult(
            source_url=record.url,
            format=fmt,
            title=title,
            thumbnail_path=thumbnail,
            error=error,
        )
        try:
            on_complete(record.id, result)
        except Exception:  # noqa: BLE001
            logger.exception("Enrichment write-back failed for {}", record.id)
        return result

    def _forget(self, future: Future[EnrichmentResult]) -> None:
        with self._lock:
            self._pending.discard(future)
