"""Bot entry points: run, register and check.

Example:
    # .env
    DISCORD_TOKEN=...
    CLIENT_ID=...
    WEBHOOK_RGL_SEASONS=https://automation.example.com/webhook/rgl-seasons

    hookbridge check
    hookbridge run -v
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from hookbridge.cli.bootstrap import configure_logging
from hookbridge.commands.catalog import CommandRegistrar, build_catalog
from hookbridge.commands.router import CommandRouter
from hookbridge.config.loader import build_routes, load_config, resolve_credentials
from hookbridge.config.schema import Config
from hookbridge.core.constants import get_default_log_dir
from hookbridge.core.errors import HookBridgeError, RegistrationError
from hookbridge.orchestrator.response import KeywordClassifier
from hookbridge.orchestrator.update import UpdateOrchestrator
from hookbridge.orchestrator.webhook import WebhookClient
from hookbridge.platform.discord_bot import BridgeClient

logger = logging.getLogger(__name__)

# Load .env file if present
load_dotenv()


def _print_error(console: Console, message: str) -> None:
    console.print(f"[bold red]Error:[/] {message}")


async def register_commands(config: Config) -> int:
    """Register the command catalog and return the number of commands.

    Raises:
        ConfigError: If credentials are missing.
        RegistrationError: If the platform rejects the catalog.
    """
    credentials = resolve_credentials(config)
    async with CommandRegistrar(
        config.discord.api_base,
        credentials.application_id,
        credentials.token,
    ) as registrar:
        registered = await registrar.register(build_catalog(config.tables))
    return len(registered)


async def run_bot(
    config_path: Path | None = None,
    register: bool = True,
    verbose: bool = False,
    log_dir: Path | None = None,
) -> int:
    """Run the Discord bot until it disconnects.

    Args:
        config_path: Explicit config file, or None for layered loading.
        register: Register slash commands before connecting.
        verbose: Enable DEBUG output to console.
        log_dir: Directory for bridge.log.

    Returns:
        Process exit code.
    """
    console = Console(stderr=True, highlight=False)
    try:
        config = load_config(config_path)
        credentials = resolve_credentials(config)
    except HookBridgeError as e:
        _print_error(console, e.message)
        return 1

    configure_logging(
        log_dir or get_default_log_dir(),
        level=logging.DEBUG if verbose else logging.INFO,
        console_level=logging.DEBUG if verbose else logging.WARNING,
    )

    router = CommandRouter(build_routes(config))
    if not router.tables:
        logger.warning("No table has a webhook URL; every /update will be rejected")

    if register:
        try:
            await register_commands(config)
        except RegistrationError as e:
            # The bot still serves whatever catalog is already registered
            logger.error("Error registering commands: %s", e)

    async with WebhookClient(timeout=config.webhook.timeout) as webhook:
        orchestrator = UpdateOrchestrator(
            webhook,
            classifier=KeywordClassifier(config.webhook.failure_keywords),
        )
        async with BridgeClient(router, orchestrator) as client:
            await client.start(credentials.token)

    return 0


async def run_register(config_path: Path | None = None) -> int:
    """Register the slash command catalog and exit."""
    console = Console(highlight=False)
    try:
        config = load_config(config_path)
        count = await register_commands(config)
    except HookBridgeError as e:
        _print_error(console, e.message)
        return 1
    console.print(f"Registered {count} application command(s).")
    return 0


def run_check(config_path: Path | None = None) -> int:
    """Print configured tables and whether each resolves to a webhook.

    Returns:
        0 when every table has a webhook URL, 1 otherwise.
    """
    console = Console(highlight=False)
    try:
        config = load_config(config_path)
    except HookBridgeError as e:
        _print_error(console, e.message)
        return 1

    routes = build_routes(config)
    table = Table(title="Configured tables")
    table.add_column("Key")
    table.add_column("Label")
    table.add_column("Source")
    table.add_column("Webhook")

    for key, entry in config.tables.items():
        source = "webhook_url" if entry.webhook_url else (entry.webhook_url_env or "-")
        status = "[green]configured[/]" if key in routes else "[red]missing[/]"
        table.add_row(key, entry.label, source, status)

    console.print(table)
    return 0 if len(routes) == len(config.tables) else 1
