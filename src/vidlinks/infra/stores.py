"""Infrastructure: key-value and file stores backing the registry.

* :class:`JsonFileStore` — one JSON object file mapping storage keys to
  string values, rewritten atomically on every ``put``.
* :class:`MemoryStore` — dict-backed store for tests and throwaway
  sessions.
* :class:`LocalFileStore` — :class:`~vidlinks.core.protocols.FileStore`
  over the local filesystem.

Every ``OSError`` and JSON encode/decode error is re-raised as
:class:`~vidlinks.exceptions.PersistenceError`.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path

from vidlinks.exceptions import PersistenceError


class JsonFileStore:
    """Concrete :class:`~vidlinks.core.protocols.KeyValueStore` on a JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path: Path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        with self._lock:
            value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def put(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def _read_all(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(
                f"Cannot read store {self._path}: {exc}",
                hint="Delete or repair the file to start with an empty library.",
            ) from exc
        if not isinstance(raw, dict):
            raise PersistenceError(f"Store {self._path} does not contain a JSON object.")
        return raw

    def _write_all(self, data: dict[str, object]) -> None:
        """Write to a temp file in the same directory, then rename over."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=".store_tmp_",
                suffix=".json",
            )
        except OSError as exc:
            raise PersistenceError(f"Cannot write store {self._path}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
            os.replace(temp_path, self._path)
        except (OSError, TypeError, ValueError) as exc:
            Path(temp_path).unlink(missing_ok=True)
            raise PersistenceError(f"Cannot write store {self._path}: {exc}") from exc


class MemoryStore:
    """In-memory :class:`~vidlinks.core.protocols.KeyValueStore`."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value


class LocalFileStore:
    """Concrete :class:`~vidlinks.core.protocols.FileStore` using :mod:`pathlib`."""

    def write_bytes(self, path: str, data: bytes) -> None:
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise PersistenceError(f"Cannot write {target}: {exc}") from exc

    def delete(self, path: str) -> bool:
        target = Path(path)
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise PersistenceError(f"Cannot delete {target}: {exc}") from exc
        return True

    def exists(self, path: str) -> bool:
        return Path(path).is_file()
