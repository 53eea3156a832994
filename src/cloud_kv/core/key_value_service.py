"""Core key value store service — sequences the store commands.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~cloud_kv.core.protocols.CloudClient` injected at
construction time (dependency inversion), keeping the core free of any
transport imports.

Guarantees
----------
* Pure orchestration — no ``print()``, no terminal interaction other
  than the injected confirmation callable.
* Only :class:`~cloud_kv.exceptions.CloudKvError` subclasses escape.
* Every command fetches a fresh listing first; nothing is cached.
* No retries: the first failure ends the command.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from cloud_kv.core.grouping import filter_resources
from cloud_kv.core.models import ListFormat, ResourceGroupBy, ResourceItem, ResourceType
from cloud_kv.core.protocols import CloudClient, ConfirmPrompt
from cloud_kv.core.target import ByName, ResourceTarget
from cloud_kv.exceptions import (
    AlreadyExistsError,
    CloudKvError,
    ConfigurationError,
    RemoteError,
)

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def validate_list_options(
    list_format: ListFormat,
    group_by: ResourceGroupBy | None,
) -> None:
    """Reject output option combinations that cannot be rendered.

    Raises
    ------
    ConfigurationError
        When a grouping strategy is combined with JSON output.
    """
    if list_format is ListFormat.JSON and group_by is not None:
        raise ConfigurationError(
            "Grouping is not supported with JSON format output",
            hint="Drop --group-by or use --format table.",
        )


class KeyValueService:
    """Stateless service implementing the key value store commands.

    Parameters
    ----------
    client:
        Any object satisfying the :class:`CloudClient` protocol.
    """

    resource_type: ResourceType = ResourceType.KEY_VALUE_STORE

    def __init__(self, client: CloudClient) -> None:
        self._client: CloudClient = client

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create(self, name: str) -> None:
        """Create a store unless one with *name* is already listed.

        The check is advisory: a concurrent creator can still win the
        race, in which case the remote service rejects the request.

        Raises
        ------
        AlreadyExistsError
            If the listing already contains *name*.
        RemoteError
            If listing or creation fails.
        """
        stores = self._list(f"Error listing {self.resource_type.plural}")
        if any(item.name == name for item in stores):
            raise AlreadyExistsError(f'{self.resource_type.title} "{name}" already exists')
        self._call(
            f"Error creating {self.resource_type.display_name} '{name}'",
            self._client.create_key_value_store,
            name,
            None,
        )
        logger.info("Created %s %r", self.resource_type.display_name, name)

    def delete(self, name: str, *, confirm: ConfirmPrompt | None) -> bool:
        """Delete the store named *name*.

        Parameters
        ----------
        confirm:
            Asked with the store's links before deleting.  ``None``
            skips the question (``--yes``).

        Returns
        -------
        bool
            ``True`` if the store was deleted, ``False`` if the user
            declined.

        Raises
        ------
        NotFoundError
            If no store is named *name*.
        RemoteError
            If listing or deletion fails.
        """
        stores = self._list(f"Error listing {self.resource_type.plural}")
        store = ByName(name).find_in(stores, self.resource_type)

        if confirm is not None and not confirm(name, store.links, self.resource_type):
            logger.info("Deletion of %r declined", name)
            return False

        self._call(
            f"Problem deleting {self.resource_type.display_name} '{name}'",
            self._client.delete_key_value_store,
            name,
        )
        logger.info("Deleted %s %r", self.resource_type.display_name, name)
        return True

    def list_stores(
        self,
        *,
        app: str | None = None,
        store: str | None = None,
    ) -> list[ResourceItem]:
        """Fetch the listing, optionally filtered by app and store name."""
        stores = self._list(f"Error listing {self.resource_type.plural}")
        return filter_resources(stores, app=app, name=store)

    def set_pairs(
        self,
        target: ResourceTarget,
        pairs: Sequence[tuple[str, str]],
    ) -> ResourceItem:
        """Set each key/value pair in the store *target* resolves to.

        Pairs are written in order, one request each.  A failure aborts
        the remaining pairs; pairs already written stay written.

        Returns
        -------
        ResourceItem
            The resolved store.

        Raises
        ------
        NotFoundError, AmbiguousTargetError
            If *target* does not select exactly one store.
        RemoteError
            If listing or any write fails.
        """
        stores = self._list(f"Problem fetching {self.resource_type.plural}")
        store = target.find_in(stores, self.resource_type)
        for key, value in pairs:
            self._call(
                f"Error adding key value pair '{key}={value}' to store '{store.name}'",
                self._client.add_key_value_pair,
                store.name,
                key,
                value,
            )
            logger.debug("Set key %r in %r", key, store.name)
        return store

    def rename(self, name: str, new_name: str) -> None:
        """Rename the store *name* to *new_name*.

        Raises
        ------
        NotFoundError
            If no store is named *name*.
        RemoteError
            If listing or renaming fails.
        """
        stores = self._list(f"Error listing {self.resource_type.plural}")
        ByName(name).find_in(stores, self.resource_type)
        self._call(
            f"Error renaming {self.resource_type.display_name} '{name}' to '{new_name}'",
            self._client.rename_key_value_store,
            name,
            new_name,
        )
        logger.info("Renamed %s %r to %r", self.resource_type.display_name, name, new_name)

    # ------------------------------------------------------------------
    # Client delegation (safe boundary)
    # ------------------------------------------------------------------

    def _list(self, context: str) -> list[ResourceItem]:
        return list(self._call(context, self._client.list_key_value_stores))

    @staticmethod
    def _call(context: str, func: Callable[..., _T], *args: object) -> _T:
        """Call the client and ensure only our exceptions escape.

        Remote failures are re-raised with *context* prefixed so the
        user can tell which operation failed.
        """
        try:
            return func(*args)
        except RemoteError as exc:
            raise RemoteError(f"{context}: {exc}", hint=exc.hint) from exc
        except CloudKvError:
            raise
        except Exception as exc:
            raise RemoteError(f"{context}: {exc}") from exc
