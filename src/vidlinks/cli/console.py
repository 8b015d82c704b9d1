"""Shared stdout console for vidlinks commands.

Rich is only imported when something is printed, so ``vidlinks --help``
and ``vidlinks --version`` work in an environment without it.  Without
Rich, messages go through plain ``print`` with their markup tags removed.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from vidlinks.exceptions import EnvironmentError

_MARKUP_TAG = re.compile(r"\[/?[a-z]+(?: [a-z]+)*\]")


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Rich console bound to the current ``sys.stdout``."""
	console_class = _load_rich_console_class()
	return console_class()


def strip_markup(text: str) -> str:
	"""Drop Rich style tags such as ``[bold green]`` from *text*."""
	return _MARKUP_TAG.sub("", text)


class _ConsoleProxy:
	"""``console.print`` for the CLI layer; Rich if present, else stdout."""

	def print(self, *objects: object) -> None:
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			plain = [strip_markup(o) if isinstance(o, str) else o for o in objects]
			print(*plain, file=sys.stdout)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()
