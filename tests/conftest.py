"""Shared pytest fixtures and configuration for the vidlinks test suite.

Guidelines
----------
* No internet access in any test.
* No real home directory — every path lives under ``tmp_path``.
* Enrichment is either disabled, stubbed, or drained deterministically.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pytest

from vidlinks.core.registry import LinkRegistry
from vidlinks.infra.stores import LocalFileStore, MemoryStore


class SteppingClock:
    """Millisecond clock that returns scripted values, then keeps counting."""

    def __init__(self, values: Iterable[int] = (), *, start: int = 1_000) -> None:
        self._values = list(values)
        self._next = start

    def __call__(self) -> int:
        if self._values:
            return self._values.pop(0)
        self._next += 1
        return self._next


@pytest.fixture()
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture()
def scripted_clock() -> type[SteppingClock]:
    """Factory for clocks that return the given values first."""
    return SteppingClock


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def files() -> LocalFileStore:
    return LocalFileStore()


@pytest.fixture()
def registry(store: MemoryStore, files: LocalFileStore, clock: SteppingClock) -> LinkRegistry:
    """Registry with enrichment disabled."""
    return LinkRegistry(store, files=files, clock=clock)


@pytest.fixture()
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI settings at a throwaway data directory."""
    target = tmp_path / "data"
    monkeypatch.setenv("VIDLINKS_DATA_DIR", str(target))
    monkeypatch.setenv("VIDLINKS_LOG_LEVEL", "ERROR")
    return target
