"""List rendering for the ``list`` command.

This module is responsible for:

* Serialising a flat resource list to JSON.
* Rendering grouped resources as Rich tables, one per group.
* Printing the "nothing found" line for an empty listing.

Grouping itself is delegated to :mod:`cloud_kv.core.grouping`.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from cloud_kv.cli.console import console
from cloud_kv.core.grouping import filter_resources, group_resources
from cloud_kv.core.models import (
    AppLink,
    ResourceGroup,
    ResourceGroupBy,
    ResourceItem,
    ResourceType,
)
from cloud_kv.exceptions import EnvironmentError


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for list rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
            hint="Use --format json for output without rich.",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms — no I/O themselves)
# ---------------------------------------------------------------------------

def format_links(links: Sequence[AppLink]) -> str:
    """Compact one-cell rendering: ``"label (app), label2 (app2)"`` or ``"-"``."""
    if not links:
        return "-"
    return ", ".join(f"{link.label} ({link.app_name})" for link in links)


def empty_message(resource_type: ResourceType) -> str:
    return f"No {resource_type.plural} found"


def to_json(resources: Sequence[ResourceItem]) -> str:
    """Serialise *resources* as a JSON array, links in received order."""
    data = [
        {
            "name": item.name,
            "links": [
                {"app_name": link.app_name, "label": link.label}
                for link in item.links
            ],
        }
        for item in resources
    ]
    return json.dumps(data, indent=2)


def _group_row(group: ResourceGroup, item: ResourceItem) -> tuple[str, str]:
    if group.app is not None:
        return item.name, ", ".join(item.labels_for(group.app))
    return item.name, format_links(item.links)


def build_tables(groups: Sequence[ResourceGroup]) -> list[Any]:
    """Build one Rich table per group.

    App groups show the labels that app uses; other groups show every
    link of each resource.
    """
    table_class = _import_rich_table()
    tables = []
    for group in groups:
        table = table_class(
            title=group.title,
            show_header=True,
            header_style="bold magenta",
            border_style="dim",
        )
        table.add_column("Name", justify="left", min_width=10)
        table.add_column("Label" if group.app is not None else "Links", justify="left")
        for item in group.resources:
            table.add_row(*_group_row(group, item))
        tables.append(table)
    return tables


# ---------------------------------------------------------------------------
# Public printers
# ---------------------------------------------------------------------------

def print_json(
    resources: Sequence[ResourceItem],
    app: str | None,
) -> None:
    """Print the app-filtered flat list as JSON (``[]`` when empty)."""
    console.print_plain(to_json(filter_resources(resources, app=app)))


def print_table(
    resources: Sequence[ResourceItem],
    app: str | None,
    group_by: ResourceGroupBy | None,
    resource_type: ResourceType,
) -> None:
    """Print *resources* as grouped tables, or the empty-listing line."""
    selected = filter_resources(resources, app=app)
    if not selected:
        console.print_plain(empty_message(resource_type))
        return

    groups = group_resources(selected, group_by=group_by, resource_type=resource_type)
    for table in build_tables(groups):
        console.print(table)
