"""Grouping engine — partitions a resource listing for display.

Pure functions only: no I/O, no rendering.  The CLI layer turns the
resulting :class:`~cloud_kv.core.models.ResourceGroup` tuple into
tables.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from cloud_kv.core.models import (
    ResourceGroup,
    ResourceGroupBy,
    ResourceItem,
    ResourceType,
)

UNLINKED_GROUP_TITLE: str = "Unlinked"
"""Header of the bucket holding resources no app links to."""


def filter_resources(
    resources: Iterable[ResourceItem],
    *,
    app: str | None = None,
    name: str | None = None,
) -> list[ResourceItem]:
    """Keep resources linked to *app* and/or named *name*.

    ``None`` disables the corresponding filter.  Input order is kept.
    """
    selected = list(resources)
    if app is not None:
        selected = [item for item in selected if item.is_linked_to(app)]
    if name is not None:
        selected = [item for item in selected if item.name == name]
    return selected


def _by_name(resources: Iterable[ResourceItem]) -> tuple[ResourceItem, ...]:
    return tuple(sorted(resources, key=lambda item: item.name))


def _group_by_app(resources: Sequence[ResourceItem]) -> tuple[ResourceGroup, ...]:
    buckets: dict[str, list[ResourceItem]] = {}
    unlinked: list[ResourceItem] = []

    for item in resources:
        apps = item.linked_apps()
        if not apps:
            unlinked.append(item)
            continue
        for app_name in apps:
            buckets.setdefault(app_name, []).append(item)

    groups = [
        ResourceGroup(title=app_name, resources=_by_name(buckets[app_name]), app=app_name)
        for app_name in sorted(buckets)
    ]
    # Always last, even if an app happens to share the title.
    if unlinked:
        groups.append(ResourceGroup(title=UNLINKED_GROUP_TITLE, resources=_by_name(unlinked)))
    return tuple(groups)


def group_resources(
    resources: Iterable[ResourceItem],
    *,
    app: str | None = None,
    group_by: ResourceGroupBy | None = None,
    resource_type: ResourceType = ResourceType.KEY_VALUE_STORE,
) -> tuple[ResourceGroup, ...]:
    """Partition *resources* into display groups.

    Parameters
    ----------
    resources:
        Listing fetched from the remote service.
    app:
        Optional app filter, applied before grouping.
    group_by:
        ``None`` returns a single untitled group in input order.
        :attr:`ResourceGroupBy.APP` returns one group per linked app
        (ascending), a resource appearing once per distinct app it is
        linked to, plus an ``"Unlinked"`` group last.
        :attr:`ResourceGroupBy.RESOURCE` returns one group titled with
        the resource type.

    Returns
    -------
    tuple[ResourceGroup, ...]
        Groups in display order.  Within grouped output, resources are
        sorted by name.
    """
    selected = filter_resources(resources, app=app)

    if group_by is None:
        return (ResourceGroup(title=None, resources=tuple(selected)),)

    if group_by is ResourceGroupBy.APP:
        return _group_by_app(selected)

    title = resource_type.plural[:1].upper() + resource_type.plural[1:]
    return (ResourceGroup(title=title, resources=_by_name(selected)),)
