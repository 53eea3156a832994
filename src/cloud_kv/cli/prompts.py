"""Interactive delete confirmation for the CLI layer.

Satisfies :class:`~cloud_kv.core.protocols.ConfirmPrompt`: shows which
apps still link to the resource, then asks a yes/no question through
questionary.  No business logic lives here.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from cloud_kv.cli.console import err_console
from cloud_kv.core.models import AppLink, ResourceType
from cloud_kv.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive confirmation."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
            hint="Pass --yes to delete without confirmation.",
        ) from exc
    return questionary


def describe_links(
    name: str,
    links: Sequence[AppLink],
    resource_type: ResourceType,
) -> list[str]:
    """Lines warning about the links a deletion would break.

    Links are listed in the order the remote service returned them.
    """
    if not links:
        return []
    lines = [
        f'{resource_type.title} "{name}" is currently linked to the following apps:',
    ]
    lines.extend(f"  - {link.app_name} (label: {link.label})" for link in links)
    lines.append("Deleting it will break these links.")
    return lines


def confirm_delete(
    name: str,
    links: Sequence[AppLink],
    resource_type: ResourceType,
) -> bool:
    """Ask the user to confirm deletion of *name*.

    Returns
    -------
    bool
        ``True`` only on an explicit yes.  Esc / Ctrl+C at the prompt
        (questionary returns ``None``) counts as no.
    """
    questionary = _import_questionary()

    for line in describe_links(name, links, resource_type):
        err_console.print_plain(line)

    answer: bool | None = questionary.confirm(
        f'Are you sure you want to delete {resource_type.display_name} "{name}"?',
        default=False,
    ).ask()
    return bool(answer)
