"""Tests for the grouping engine (core/grouping.py).

Pure data — no rendering.  Verifies group membership, ordering of
groups and members, the unlinked bucket, and the app filter.
"""

from __future__ import annotations

from cloud_kv.core.grouping import (
    UNLINKED_GROUP_TITLE,
    filter_resources,
    group_resources,
)
from cloud_kv.core.models import AppLink, ResourceGroupBy, ResourceItem, ResourceType


def _item(name: str, *links: tuple[str, str]) -> ResourceItem:
    return ResourceItem(name=name, links=tuple(AppLink(app, label) for app, label in links))


def _stores() -> list[ResourceItem]:
    return [
        _item("zeta", ("web", "default")),
        _item("alpha", ("web", "cache"), ("worker", "cache"), ("web", "other")),
        _item("orphan"),
        _item("beta", ("api", "default")),
        _item("aardvark"),
    ]


class TestFilterResources:
    def test_no_filters_returns_copy_in_order(self) -> None:
        stores = _stores()
        result = filter_resources(stores)
        assert result == stores
        assert result is not stores

    def test_app_filter(self) -> None:
        names = [item.name for item in filter_resources(_stores(), app="web")]
        assert names == ["zeta", "alpha"]

    def test_name_filter(self) -> None:
        names = [item.name for item in filter_resources(_stores(), name="beta")]
        assert names == ["beta"]

    def test_both_filters(self) -> None:
        assert filter_resources(_stores(), app="api", name="zeta") == []


class TestNoGrouping:
    def test_single_untitled_group_in_input_order(self) -> None:
        groups = group_resources(_stores())
        assert len(groups) == 1
        assert groups[0].title is None
        assert [item.name for item in groups[0].resources] == [
            "zeta", "alpha", "orphan", "beta", "aardvark",
        ]


class TestGroupByApp:
    def test_groups_sorted_with_unlinked_last(self) -> None:
        groups = group_resources(_stores(), group_by=ResourceGroupBy.APP)
        assert [group.title for group in groups] == ["api", "web", "worker", UNLINKED_GROUP_TITLE]

    def test_members_sorted_by_name(self) -> None:
        groups = group_resources(_stores(), group_by=ResourceGroupBy.APP)
        web = next(group for group in groups if group.title == "web")
        assert [item.name for item in web.resources] == ["alpha", "zeta"]

    def test_resource_once_per_distinct_app(self) -> None:
        groups = group_resources(_stores(), group_by=ResourceGroupBy.APP)
        web = next(group for group in groups if group.title == "web")
        # alpha has two "web" links but appears once in the web group.
        assert [item.name for item in web.resources].count("alpha") == 1

    def test_app_groups_carry_app_name(self) -> None:
        groups = group_resources(_stores(), group_by=ResourceGroupBy.APP)
        assert [group.app for group in groups] == ["api", "web", "worker", None]

    def test_unlinked_group_contents(self) -> None:
        groups = group_resources(_stores(), group_by=ResourceGroupBy.APP)
        assert [item.name for item in groups[-1].resources] == ["aardvark", "orphan"]

    def test_unlinked_last_even_if_app_sorts_after(self) -> None:
        stores = [_item("a", ("zzz", "l")), _item("b")]
        groups = group_resources(stores, group_by=ResourceGroupBy.APP)
        assert [group.title for group in groups] == ["zzz", UNLINKED_GROUP_TITLE]

    def test_no_unlinked_group_when_everything_linked(self) -> None:
        stores = [_item("a", ("web", "l"))]
        groups = group_resources(stores, group_by=ResourceGroupBy.APP)
        assert [group.title for group in groups] == ["web"]

    def test_multiplicity_matches_distinct_app_count(self) -> None:
        stores = _stores()
        groups = group_resources(stores, group_by=ResourceGroupBy.APP)
        total = sum(len(group) for group in groups)
        expected = sum(max(1, len({link.app_name for link in item.links})) for item in stores)
        assert total == expected

    def test_app_filter_applies_before_grouping(self) -> None:
        groups = group_resources(_stores(), app="worker", group_by=ResourceGroupBy.APP)
        # alpha is the only worker store; it still shows under each of its apps.
        assert [group.title for group in groups] == ["web", "worker"]
        assert all([item.name for item in group.resources] == ["alpha"] for group in groups)


class TestGroupByResource:
    def test_single_group_titled_by_type(self) -> None:
        groups = group_resources(
            _stores(),
            group_by=ResourceGroupBy.RESOURCE,
            resource_type=ResourceType.KEY_VALUE_STORE,
        )
        assert len(groups) == 1
        assert groups[0].title == "Key value stores"
        assert groups[0].app is None

    def test_members_sorted(self) -> None:
        groups = group_resources(_stores(), group_by=ResourceGroupBy.RESOURCE)
        assert [item.name for item in groups[0].resources] == [
            "aardvark", "alpha", "beta", "orphan", "zeta",
        ]

    def test_app_filter(self) -> None:
        groups = group_resources(_stores(), app="api", group_by=ResourceGroupBy.RESOURCE)
        assert [item.name for item in groups[0].resources] == ["beta"]
