"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Command results go to stdout through :data:`console`; errors, hints and
prompts context go to stderr through :data:`err_console`.
"""

from __future__ import annotations

import sys
from typing import Any

from cloud_kv.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = False) -> Any:
	"""Create a Rich console instance targeting stdout or stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool = False) -> None:
		self._stderr = stderr

	def print(self, *objects: object, **options: Any) -> None:
		"""Render with Rich when available, else plain print.

		*options* are forwarded to ``rich.console.Console.print`` and
		ignored by the plain fallback.
		"""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			print(*objects, file=sys.stderr if self._stderr else sys.stdout)
			return
		rich_console.print(*objects, **options)

	def print_labelled(self, label: str, text: str) -> None:
		"""Print a markup *label* followed by *text* taken literally.

		*text* usually carries store or app names, which may contain
		brackets that Rich would otherwise read as markup tags.
		"""
		try:
			from rich.markup import escape
		except ModuleNotFoundError:
			print(f"{label} {text}", file=sys.stderr if self._stderr else sys.stdout)
			return
		self.print(f"{label} {escape(text)}")

	def print_plain(self, text: str) -> None:
		"""Print *text* verbatim: no markup, no highlighting, no wrapping."""
		self.print(text, markup=False, highlight=False, soft_wrap=True)


console = _ConsoleProxy()
err_console = _ConsoleProxy(stderr=True)
