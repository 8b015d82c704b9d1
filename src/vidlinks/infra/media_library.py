"""Infrastructure: app-private storage for imported local media files.

Files are copied (never moved) into the library directory.  Name clashes
are resolved by appending ``_1``, ``_2``, ... before the extension.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from loguru import logger

from vidlinks.exceptions import ImportFailedError


class LocalMediaLibrary:
    """Concrete :class:`~vidlinks.core.protocols.MediaImporter`."""

    def __init__(self, directory: str | Path) -> None:
        self._directory: Path = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def import_file(self, source_path: str | Path, desired_name: str) -> Path:
        """Copy *source_path* into the library under a unique name.

        Raises
        ------
        ImportFailedError
            If the source does not exist, the name is unusable, or the
            copy fails.
        """
        source = Path(source_path)
        if not source.is_file():
            raise ImportFailedError(f"Source file not found: {source}")
        name = Path(desired_name).name
        if not name:
            raise ImportFailedError(f"Invalid file name: {desired_name!r}")

        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            destination = self._directory / self._unique_name(name)
            shutil.copyfile(source, destination)
        except OSError as exc:
            raise ImportFailedError(f"Could not import {source}: {exc}") from exc

        logger.debug("Imported {} as {}", source, destination)
        return destination

    def remove(self, file_name: str) -> bool:
        """Delete one library file by name; ``False`` if there is none."""
        target = self._directory / Path(file_name).name
        if not target.is_file():
            return False
        try:
            target.unlink()
        except OSError as exc:
            raise ImportFailedError(f"Could not remove {target}: {exc}") from exc
        return True

    def files(self) -> list[Path]:
        if not self._directory.is_dir():
            return []
        return sorted(p for p in self._directory.iterdir() if p.is_file())

    def total_storage_used(self) -> int:
        """Total size of all library files in bytes."""
        return sum(p.stat().st_size for p in self.files())

    def clear(self) -> int:
        """Delete every library file; return how many were removed."""
        removed = 0
        for path in self.files():
            path.unlink(missing_ok=True)
            removed += 1
        return removed

    def _unique_name(self, name: str) -> str:
        candidate = name
        stem, dot, suffix = name.rpartition(".")
        if not stem:
            # No extension (or a dotfile): append the counter at the end.
            stem, dot, suffix = name, "", ""
        counter = 1
        while (self._directory / candidate).exists():
            candidate = f"{stem}_{counter}{dot}{suffix}"
            counter += 1
        return candidate
