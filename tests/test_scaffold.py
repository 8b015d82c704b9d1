"""Smoke tests for package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import pytest

from vidlinks import __version__
from vidlinks.cli import exit_codes
from vidlinks.cli.app import main
from vidlinks.cli.console import strip_markup
from vidlinks.exceptions import (
    EnrichmentError,
    EnvironmentError,
    ImportFailedError,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
    VidlinksError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            InvalidInputError,
            NotFoundError,
            PersistenceError,
            EnrichmentError,
            ImportFailedError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(self, exc_class: type[VidlinksError]) -> None:
        assert issubclass(exc_class, VidlinksError)

    def test_hint_is_stored(self) -> None:
        err = VidlinksError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert VidlinksError("boom").hint is None


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_values(self) -> None:
        assert exit_codes.SUCCESS == 0
        assert exit_codes.GENERAL_ERROR == 1
        assert exit_codes.UNEXPECTED_ERROR == 2
        assert exit_codes.KEYBOARD_INTERRUPT == 130


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == exit_codes.SUCCESS
        assert "usage: vidlinks" in capsys.readouterr().out

    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_routes_to_handler(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from vidlinks.cli import app as app_module

        seen: list[tuple[str, str]] = []
        monkeypatch.setattr(
            app_module,
            "_handle_rename",
            lambda record_id, title: seen.append((record_id, title)) or exit_codes.SUCCESS,
        )
        assert main(["rename", "link_1", "New"]) == exit_codes.SUCCESS
        assert seen == [("link_1", "New")]


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

class TestStripMarkup:
    def test_removes_style_tags(self) -> None:
        assert strip_markup("[bold green]Added.[/bold green]") == "Added."

    def test_keeps_other_brackets(self) -> None:
        assert strip_markup("ids [1, 2] and [A]") == "ids [1, 2] and [A]"
