"""Process exit codes returned by ``vidlinks``.

:func:`vidlinks.cli.app.cli` is the only caller that turns these into
``sys.exit``; command handlers return :data:`SUCCESS` or raise.
"""

from __future__ import annotations

SUCCESS: int = 0
"""The command ran; this includes "nothing to do" outcomes such as a declined ``clear``."""

GENERAL_ERROR: int = 1
"""A :class:`~vidlinks.exceptions.VidlinksError` was reported (unknown id, bad URL, I/O)."""

UNEXPECTED_ERROR: int = 2
"""A bug: some other exception reached the error boundary."""

KEYBOARD_INTERRUPT: int = 130
"""Ctrl+C, reported the shell way (128 + SIGINT)."""
