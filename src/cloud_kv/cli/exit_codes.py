"""Process exit codes returned by the ``cloud-kv`` commands.

:func:`cloud_kv.cli.app.cli` is the only place that turns these into a
process exit; handlers return :data:`SUCCESS` and let errors propagate.
"""

from __future__ import annotations

SUCCESS: int = 0
"""The store command finished, including a delete the user declined."""

GENERAL_ERROR: int = 1
"""A CloudKvError (bad selector, missing store, config or remote failure) was reported."""

KEYBOARD_INTERRUPT: int = 130
"""Ctrl+C, e.g. at the delete confirmation (128 + SIGINT)."""

UNEXPECTED_ERROR: int = 2
"""Any other exception; argparse also exits 2 on bad arguments."""
