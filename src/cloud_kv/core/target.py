"""Resource target resolution.

A :class:`ResourceTarget` identifies exactly one resource, either by its
name or indirectly through the label an app uses for it.  Resolution
against a listing must be unambiguous: a label selector that matches
several resources is an error, never a silent pick of the first one,
because the commands using it mutate data.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from cloud_kv.core.models import ResourceItem, ResourceType
from cloud_kv.exceptions import (
    AmbiguousTargetError,
    ConfigurationError,
    NotFoundByLabelError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

_SELECTOR_HINT = "Use --store NAME, or --label LABEL together with --app APP."


class ResourceTarget:
    """Base class of the two selector variants."""

    @staticmethod
    def from_inputs(
        store: str | None,
        label: str | None,
        app: str | None,
    ) -> ResourceTarget:
        """Build a target from optional user inputs.

        Exactly one of ``{store}`` or ``{label, app}`` must be supplied.
        Empty strings count as invalid values, not as absent ones.

        Raises
        ------
        ConfigurationError
            For any other combination.
        """
        for option, value in (("store", store), ("label", label), ("app", app)):
            if value is not None and not value:
                raise ConfigurationError(
                    f"The {option} must not be empty.",
                    hint=_SELECTOR_HINT,
                )

        if store is not None:
            if label is not None or app is not None:
                raise ConfigurationError(
                    "A store name cannot be combined with a label or app.",
                    hint=_SELECTOR_HINT,
                )
            return ByName(store)

        if label is not None and app is not None:
            return ByLabel(label, app)

        if label is not None or app is not None:
            raise ConfigurationError(
                "A label and an app must be given together.",
                hint=_SELECTOR_HINT,
            )
        raise ConfigurationError(
            "Either a store name or both a label and an app are required.",
            hint=_SELECTOR_HINT,
        )

    def find_in(
        self,
        resources: Iterable[ResourceItem],
        resource_type: ResourceType,
    ) -> ResourceItem:
        """Return the single resource in *resources* this target selects."""
        raise NotImplementedError  # pragma: no cover


@dataclass(frozen=True, slots=True)
class ByName(ResourceTarget):
    """Resource addressed directly by its name."""

    name: str

    def find_in(
        self,
        resources: Iterable[ResourceItem],
        resource_type: ResourceType,
    ) -> ResourceItem:
        """Return the resource whose name equals :attr:`name` exactly.

        Names are unique per the remote service, so the first match wins
        if the listing ever contains duplicates.

        Raises
        ------
        NotFoundError
            If no resource carries the name.
        """
        matches = [item for item in resources if item.name == self.name]
        if not matches:
            raise NotFoundError(
                f'No {resource_type.display_name} found with name "{self.name}"',
            )
        if len(matches) > 1:
            logger.warning(
                "Remote listing returned %d %s named %r; using the first",
                len(matches),
                resource_type.plural,
                self.name,
            )
        return matches[0]


@dataclass(frozen=True, slots=True)
class ByLabel(ResourceTarget):
    """Resource addressed through the label an app links it under."""

    label: str
    app: str

    def find_in(
        self,
        resources: Iterable[ResourceItem],
        resource_type: ResourceType,
    ) -> ResourceItem:
        """Return the only resource linked to :attr:`app` as :attr:`label`.

        Raises
        ------
        NotFoundByLabelError
            If no resource has a matching link.
        AmbiguousTargetError
            If more than one resource has a matching link.
        """
        matches = [
            item
            for item in resources
            if any(
                link.app_name == self.app and link.label == self.label
                for link in item.links
            )
        ]
        if not matches:
            raise NotFoundByLabelError(
                f'No {resource_type.display_name} is linked to app "{self.app}" '
                f'with label "{self.label}"',
                hint=f"Use --store to select the {resource_type.display_name} by name.",
            )
        if len(matches) > 1:
            names = tuple(item.name for item in matches)
            listed = ", ".join(f'"{name}"' for name in names)
            raise AmbiguousTargetError(
                f'App "{self.app}" links label "{self.label}" to more than one '
                f"{resource_type.display_name}: {listed}",
                names,
                hint=f"Use --store to select one {resource_type.display_name} by name.",
            )
        return matches[0]
