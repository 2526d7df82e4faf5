"""Command line entry point (``server-watcher``).

Each invocation does one thing and exits; run ``provider check`` from cron or
another scheduler to watch for availability over time.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import config, runner
from .errors import WatcherError
from .notifiers import available_notifiers, build_notifier
from .providers import available_providers, build_provider


def setup_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="server-watcher",
        description="Check and notify about dedicated servers availability",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR (default: $LOG_LEVEL or INFO)")
    commands = parser.add_subparsers(dest="command", required=True)

    provider = commands.add_parser("provider", help="provider actions")
    provider_cmds = provider.add_subparsers(dest="action")
    provider_cmds.add_parser("list", help="List known provider types")

    inventory = provider_cmds.add_parser("inventory", help="List known server types")
    inventory.add_argument("provider")
    inventory.add_argument("-a", "--all", action="store_true", help="List even currently unavailable types")

    check = provider_cmds.add_parser("check", help="Check provider for server availability")
    check.add_argument("provider")
    check.add_argument("servers", nargs="+", help="Server types, e.g. 22sk010")
    check.add_argument("-n", "--notifier", default=None, help="Optional notify handler")
    check.add_argument(
        "-s",
        "--storage-dir",
        default=None,
        help="Existing directory to keep the last result in; without it every run notifies",
    )

    notifier = commands.add_parser("notifier", help="notifier actions")
    notifier_cmds = notifier.add_subparsers(dest="action")
    notifier_cmds.add_parser("list", help="List available notifiers")
    test = notifier_cmds.add_parser("test", help="Send a test notification")
    test.add_argument("notifier")

    return parser


def _print_list(title: str, names: List[str]) -> None:
    print(f"{title}:")
    for name in names:
        print(f"- {name}")


def _provider_command(args: argparse.Namespace) -> int:
    if args.action in (None, "list"):
        _print_list("Available providers", available_providers())
        return 0

    provider = build_provider(args.provider, config.provider_params(args.provider))

    if args.action == "inventory":
        offerings = runner.inventory(provider, include_unavailable=args.all)
        if not offerings:
            print("No servers found")
            return 0
        print("Known servers:")
        for o in offerings:
            print(f"{o.id} {o.label}" + ("" if o.available else " [unavailable]"))
        return 0

    notifier = None
    if args.notifier:
        notifier = build_notifier(args.notifier, config.notifier_params(args.notifier))
    runner.check(provider, args.servers, notifier=notifier, storage_dir=args.storage_dir)
    return 0


def _notifier_command(args: argparse.Namespace) -> int:
    if args.action in (None, "list"):
        _print_list("Available notifiers", available_notifiers())
        return 0

    notifier = build_notifier(args.notifier, config.notifier_params(args.notifier))
    runner.send_test_notification(notifier)
    print("Notification sent")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(__name__)

    setup_logging(args.log_level or config.LOG_LEVEL)
    try:
        if args.command == "provider":
            return _provider_command(args)
        return _notifier_command(args)
    except WatcherError as e:
        logger.debug("Run failed", exc_info=True)
        sys.stderr.write(e.format())
        return e.code


if __name__ == "__main__":
    sys.exit(main())
