"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure and UI adapters must
satisfy.  Core code depends ONLY on these protocols — never on concrete
implementations — so tests can substitute a mocked client and a
canned confirmation answer.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from cloud_kv.core.models import AppLink, ResourceItem, ResourceType


class CloudClient(Protocol):
    """Contract for the remote key value store API.

    Implementations must map all transport and HTTP failures to
    :class:`~cloud_kv.exceptions.RemoteError`.
    """

    def list_key_value_stores(self) -> list[ResourceItem]:
        """Return every key value store visible to the account."""
        ...  # pragma: no cover

    def create_key_value_store(
        self,
        name: str,
        resource_label: dict[str, Any] | None,
    ) -> None:
        """Create a store named *name*.

        *resource_label* optionally links the new store to an app at
        creation time; ``None`` creates an unlinked store.
        """
        ...  # pragma: no cover

    def delete_key_value_store(self, name: str) -> None:
        ...  # pragma: no cover

    def rename_key_value_store(self, name: str, new_name: str) -> None:
        """Rename a store.  Existing links follow the store to its new name."""
        ...  # pragma: no cover

    def add_key_value_pair(self, store: str, key: str, value: str) -> None:
        """Set *key* to *value* in *store*, overwriting any existing value."""
        ...  # pragma: no cover


class ConfirmPrompt(Protocol):
    """Blocking yes/no question asked before a destructive operation."""

    def __call__(
        self,
        name: str,
        links: Sequence[AppLink],
        resource_type: ResourceType,
    ) -> bool:
        ...  # pragma: no cover
