"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No network I/O except through the injected client protocol.
* No imports from ``cli`` or ``infra``.
"""

from cloud_kv.core.grouping import filter_resources, group_resources
from cloud_kv.core.key_value_service import KeyValueService, validate_list_options
from cloud_kv.core.models import (
    AppLink,
    ListFormat,
    ResourceGroup,
    ResourceGroupBy,
    ResourceItem,
    ResourceType,
)
from cloud_kv.core.protocols import CloudClient, ConfirmPrompt
from cloud_kv.core.target import ByLabel, ByName, ResourceTarget

__all__: list[str] = [
    "AppLink",
    "ByLabel",
    "ByName",
    "CloudClient",
    "ConfirmPrompt",
    "KeyValueService",
    "ListFormat",
    "ResourceGroup",
    "ResourceGroupBy",
    "ResourceItem",
    "ResourceTarget",
    "ResourceType",
    "filter_resources",
    "group_resources",
    "validate_list_options",
]
