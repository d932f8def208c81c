"""Argument parsing for the HookBridge CLI."""

import argparse
from pathlib import Path


def add_config_arg(parser: argparse.ArgumentParser) -> None:
    """Add --config argument to a parser."""
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Config file path (default: shipped defaults + ./.hookbridge/config.json)",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="hookbridge",
        description="Relay Discord /update commands to per-table webhooks",
    )
    subparsers = parser.add_subparsers(dest="command")

    # run - register commands and start the bot
    run_parser = subparsers.add_parser(
        "run",
        help="Start the Discord bot",
    )
    add_config_arg(run_parser)
    run_parser.add_argument(
        "--no-register",
        dest="register",
        action="store_false",
        help="Skip slash command registration at startup",
    )
    run_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show DEBUG output on the console",
    )
    run_parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for bridge.log (default: ./.hookbridge/logs)",
    )

    # register - push the slash command catalog and exit
    register_parser = subparsers.add_parser(
        "register",
        help="Register the /update command with Discord and exit",
    )
    add_config_arg(register_parser)

    # check - show configured tables and whether their webhooks resolve
    check_parser = subparsers.add_parser(
        "check",
        help="List configured tables and webhook status",
    )
    add_config_arg(check_parser)

    return parser.parse_args(argv)
