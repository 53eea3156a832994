"""argparse value parsers shared by the subcommands."""

from __future__ import annotations

import argparse

from cloud_kv.core.models import ResourceGroupBy

GROUP_BY_CHOICES: dict[str, ResourceGroupBy] = {
    "app": ResourceGroupBy.APP,
    "store": ResourceGroupBy.RESOURCE,
    "resource": ResourceGroupBy.RESOURCE,
}
"""``--group-by`` values.  ``store`` and ``resource`` both group by resource type."""


def disallow_empty(value: str) -> str:
    """Reject empty option values at parse time."""
    if not value:
        raise argparse.ArgumentTypeError("value must not be empty")
    return value


def parse_kv(value: str) -> tuple[str, str]:
    """Split ``KEY=VALUE`` on the first ``=``.

    The value may itself contain ``=``; the key may not be empty.
    """
    key, sep, val = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f'Expected KEY=VALUE, got "{value}"')
    return key, val
