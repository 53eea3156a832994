"""CLI application entry point and command routing for cloud-kv.

This module is the **sole error boundary** for the entire application.
It catches :class:`~cloud_kv.exceptions.CloudKvError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core
  service and the infrastructure client.
* Local validation (selector combination, output options) happens
  before any configuration is loaded or any request is sent.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from cloud_kv.cli import exit_codes
from cloud_kv.cli.arguments import GROUP_BY_CHOICES, disallow_empty, parse_kv
from cloud_kv.cli.console import console, err_console
from cloud_kv.core.key_value_service import KeyValueService, validate_list_options
from cloud_kv.core.models import ListFormat, ResourceType
from cloud_kv.core.protocols import CloudClient
from cloud_kv.core.target import ResourceTarget
from cloud_kv.exceptions import CloudKvError
from cloud_kv.version import __version__

logger = logging.getLogger(__name__)

_RESOURCE_TYPE = ResourceType.KEY_VALUE_STORE


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Sub-commands:
    * ``cloud-kv create <name>``
    * ``cloud-kv delete <name> [--yes]``
    * ``cloud-kv list [--app A] [--store S] [--group-by app|store] [--format table|json]``
    * ``cloud-kv set (--store S | --label L --app A) key=value ...``
    * ``cloud-kv rename <name> <new-name>``
    """
    parser = argparse.ArgumentParser(
        prog="cloud-kv",
        description="Manage cloud key value stores.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log requests and decisions to stderr.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the YAML config file.",
    )
    parser.add_argument(
        "--environment",
        "--deployment-env-id",
        dest="environment",
        default=None,
        help="Deployment environment from the config file to use.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    create = subparsers.add_parser("create", help="Create a new key value store")
    create.add_argument("name", help="The name of the key value store")
    create.set_defaults(handler=_handle_create)

    delete = subparsers.add_parser("delete", help="Delete a key value store")
    delete.add_argument("name", help="The name of the key value store")
    delete.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Skips prompt to confirm deletion of the key value store",
    )
    delete.set_defaults(handler=_handle_delete)

    list_ = subparsers.add_parser("list", help="List key value stores")
    list_.add_argument("-a", "--app", default=None, help="Filter list by an app")
    list_.add_argument("-s", "--store", default=None, help="Filter list by a key value store")
    list_.add_argument(
        "-g",
        "--group-by",
        choices=sorted(GROUP_BY_CHOICES),
        default=None,
        help="Grouping strategy of tabular list",
    )
    list_.add_argument(
        "--format",
        choices=[fmt.value for fmt in ListFormat],
        default=ListFormat.TABLE.value,
        help="Format of list",
    )
    list_.set_defaults(handler=_handle_list)

    set_ = subparsers.add_parser("set", help="Set a key value pair in a store")
    set_.add_argument(
        "-s",
        "--store",
        type=disallow_empty,
        default=None,
        help="The name of the key value store",
    )
    set_.add_argument(
        "-l",
        "--label",
        type=disallow_empty,
        default=None,
        help="Label of the key value store to set pairs in",
    )
    set_.add_argument(
        "-a",
        "--app",
        type=disallow_empty,
        default=None,
        help="App to which label relates",
    )
    set_.add_argument(
        "key_values",
        nargs="+",
        type=parse_kv,
        metavar="KEY=VALUE",
        help="A key/value pair to set in the store. Any existing value will be "
        "overwritten. Can be used multiple times.",
    )
    set_.set_defaults(handler=_handle_set, subparser=set_)

    rename = subparsers.add_parser(
        "rename",
        help="Rename a key value store. All existing links will automatically "
        "link to the store's new name.",
    )
    rename.add_argument("name", help="Current name of key value store to rename")
    rename.add_argument("new_name", help="New name for the key value store")
    rename.set_defaults(handler=_handle_rename)

    return parser


def _check_set_selector(args: argparse.Namespace) -> None:
    """Enforce ``--store`` xor (``--label`` and ``--app``) at parse level."""
    parser: argparse.ArgumentParser = args.subparser
    if args.store is not None and (args.label is not None or args.app is not None):
        parser.error("argument --store: not allowed with --label or --app")
    if args.store is None:
        if args.label is None and args.app is None:
            parser.error("one of --store or --label with --app is required")
        if args.label is None or args.app is None:
            parser.error("--label and --app must be given together")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Collaborator wiring
# ---------------------------------------------------------------------------

def _build_client(args: argparse.Namespace) -> CloudClient:
    """Load configuration and construct the HTTP client."""
    from cloud_kv.config import Config
    from cloud_kv.infra.cloud_client import HttpCloudClient

    config = Config.load(args.config)
    environment = config.resolve(args.environment)
    logger.debug("Using cloud at %s", environment.url)
    return HttpCloudClient(
        environment.url,
        environment.token,
        timeout=config.request_timeout,
    )


def _service(args: argparse.Namespace) -> KeyValueService:
    return KeyValueService(_build_client(args))


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_create(args: argparse.Namespace) -> int:
    _service(args).create(args.name)
    console.print_plain(f'{_RESOURCE_TYPE.title} "{args.name}" created')
    return exit_codes.SUCCESS


def _handle_delete(args: argparse.Namespace) -> int:
    """Delete a store, asking first unless ``--yes`` was passed.

    Declining is not an error: nothing is deleted and the exit code is
    still :data:`exit_codes.SUCCESS`.
    """
    from cloud_kv.cli.prompts import confirm_delete

    confirm = None if args.yes else confirm_delete
    if _service(args).delete(args.name, confirm=confirm):
        console.print_plain(f'{_RESOURCE_TYPE.title} "{args.name}" deleted')
    else:
        console.print_plain(f'{_RESOURCE_TYPE.title} "{args.name}" was not deleted')
    return exit_codes.SUCCESS


def _handle_list(args: argparse.Namespace) -> int:
    from cloud_kv.cli.render import print_json, print_table

    list_format = ListFormat(args.format)
    group_by = GROUP_BY_CHOICES[args.group_by] if args.group_by else None
    validate_list_options(list_format, group_by)

    stores = _service(args).list_stores(store=args.store)
    if list_format is ListFormat.JSON:
        print_json(stores, args.app)
    else:
        print_table(stores, args.app, group_by, _RESOURCE_TYPE)
    return exit_codes.SUCCESS


def _handle_set(args: argparse.Namespace) -> int:
    target = ResourceTarget.from_inputs(args.store, args.label, args.app)
    store = _service(args).set_pairs(target, args.key_values)

    count = len(args.key_values)
    noun = "pair" if count == 1 else "pairs"
    console.print_plain(
        f'Set {count} key value {noun} in {_RESOURCE_TYPE.display_name} "{store.name}"',
    )
    return exit_codes.SUCCESS


def _handle_rename(args: argparse.Namespace) -> int:
    _service(args).rename(args.name, args.new_name)
    console.print_plain(
        f'{_RESOURCE_TYPE.title} "{args.name}" is now named "{args.new_name}"',
    )
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the cloud-kv CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "set":
        _check_set_selector(args)

    _configure_logging(args.verbose)
    return args.handler(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except CloudKvError as exc:
        err_console.print_labelled("[bold red]Error:[/bold red]", str(exc))
        if exc.hint:
            err_console.print_labelled("[yellow]Hint:[/yellow]", exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        err_console.print_labelled(
            "[bold red]Unexpected error.[/bold red]",
            f"Please report this issue.\n  {type(exc).__name__}: {exc}",
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
