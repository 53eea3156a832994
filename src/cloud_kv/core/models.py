"""Domain models for cloud-kv.

All models are **frozen** dataclasses or enums — immutable value objects
with no behaviour beyond data access.  They are built from a freshly
fetched snapshot of remote state for every command and discarded
afterwards.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Resource type
# ---------------------------------------------------------------------------

class ResourceType(enum.Enum):
    """Kinds of remote resource the CLI manages."""

    KEY_VALUE_STORE = "key value store"

    @property
    def display_name(self) -> str:
        """Lower-case singular name, e.g. ``"key value store"``."""
        return self.value

    @property
    def plural(self) -> str:
        return f"{self.value}s"

    @property
    def title(self) -> str:
        """Sentence-case singular name, e.g. ``"Key value store"``."""
        return self.value[:1].upper() + self.value[1:]


# ---------------------------------------------------------------------------
# Resources and links
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AppLink:
    """Association recording that an app references a resource."""

    app_name: str
    """Name of the linked application."""

    label: str
    """Name the application uses internally for the resource."""


@dataclass(frozen=True, slots=True)
class ResourceItem:
    """A named remote resource and the apps linked to it."""

    name: str
    """Resource name, unique within its resource type."""

    links: tuple[AppLink, ...] = ()
    """Links in the order the remote service returned them."""

    def linked_apps(self) -> tuple[str, ...]:
        """Distinct linked app names, in first-seen order."""
        return tuple(dict.fromkeys(link.app_name for link in self.links))

    def is_linked_to(self, app: str) -> bool:
        return any(link.app_name == app for link in self.links)

    def labels_for(self, app: str) -> tuple[str, ...]:
        """Labels under which *app* references this resource."""
        return tuple(link.label for link in self.links if link.app_name == app)


# ---------------------------------------------------------------------------
# Listing options
# ---------------------------------------------------------------------------

class ResourceGroupBy(enum.Enum):
    """Display grouping strategy for tabular lists."""

    APP = "app"
    """One bucket per linked application."""

    RESOURCE = "resource"
    """A single bucket headed by the resource type."""


class ListFormat(enum.Enum):
    """Output format of the ``list`` command."""

    TABLE = "table"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class ResourceGroup:
    """One bucket of resources produced by the grouping engine."""

    title: str | None
    """Header shown above the bucket, or ``None`` for a flat list."""

    resources: tuple[ResourceItem, ...]

    app: str | None = None
    """App the bucket belongs to when grouping by app."""

    def __len__(self) -> int:
        return len(self.resources)
