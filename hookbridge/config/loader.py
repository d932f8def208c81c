"""Configuration loading and resolution of environment-held secrets.

Config is merged from two layers: the shipped defaults, then an optional
project-local ``.hookbridge/config.json``. Webhook URLs and Discord
credentials are never stored in config files. The config names the
environment variables that hold them and this module resolves those once at
startup.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from hookbridge.config.load_utils import load_json_file, load_json_file_optional
from hookbridge.config.schema import Config
from hookbridge.core.constants import get_defaults_dir, get_local_config_path
from hookbridge.core.errors import ConfigError, LoadError
from hookbridge.core.types import TableRoute
from hookbridge.core.utils import deep_merge

logger = logging.getLogger(__name__)

# Path to shipped defaults in the install directory
DEFAULTS_DIR = get_defaults_dir()
DEFAULT_CONFIG = DEFAULTS_DIR / "config.json"


@dataclass(frozen=True)
class Credentials:
    """Discord credentials resolved from the environment."""

    token: str
    application_id: str


def load_config(path: Path | None = None, cwd: Path | None = None) -> Config:
    """Load configuration from file with layered merging.

    When path is None, merges:
    1. Shipped defaults (hookbridge/defaults/config.json)
    2. Project local (cwd/.hookbridge/config.json)

    Args:
        path: Explicit config file path. If provided, skips layered loading.
        cwd: Working directory for local lookup. Defaults to Path.cwd().

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If any config file contains invalid JSON or merged config
            fails validation.
    """
    if path is not None:
        return _load_from_path(path)

    effective_cwd = cwd or Path.cwd()
    merged: dict[str, Any] = {}
    loaded_from: list[Path] = []

    for layer in (DEFAULT_CONFIG, get_local_config_path(effective_cwd)):
        try:
            data = load_json_file_optional(layer, error_context="config")
        except LoadError as e:
            raise ConfigError(e.message) from e
        if data:
            merged = deep_merge(merged, data)
            loaded_from.append(layer)

    if loaded_from:
        logger.info("Config loaded from: %s", [str(p) for p in loaded_from])
    else:
        logger.debug("No config files found, using Pydantic defaults")
        return Config()

    try:
        return Config.model_validate(merged)
    except ValidationError as e:
        sources = ", ".join(str(p) for p in loaded_from)
        raise ConfigError(f"Config validation failed (merged from {sources}): {e}") from e


def _load_from_path(path: Path) -> Config:
    """Load and validate config from a specific path.

    Raises:
        ConfigError: If file doesn't exist, contains invalid JSON, or fails validation.
    """
    try:
        data = load_json_file(path, error_context="config")
    except LoadError as e:
        raise ConfigError(e.message) from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed for {path}: {e}") from e


def build_routes(
    config: Config,
    environ: Mapping[str, str] | None = None,
) -> dict[str, TableRoute]:
    """Resolve a TableRoute for every configured table that has a webhook URL.

    Tables whose URL is missing are logged and left out, so the router will
    reject them as not configured.

    Args:
        config: Loaded configuration.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Dict of table key to TableRoute.
    """
    env = os.environ if environ is None else environ
    routes: dict[str, TableRoute] = {}

    for key, table in config.tables.items():
        url = table.webhook_url
        if not url and table.webhook_url_env:
            url = env.get(table.webhook_url_env, "").strip()
        if not url:
            logger.warning(
                "No webhook URL for table '%s' (set %s); updates will be rejected",
                key,
                table.webhook_url_env or "webhook_url",
            )
            continue
        routes[key] = TableRoute(table_key=key, endpoint_url=url)

    logger.debug("Resolved routes for tables: %s", sorted(routes))
    return routes


def resolve_credentials(
    config: Config,
    environ: Mapping[str, str] | None = None,
) -> Credentials:
    """Read the bot token and application ID from the environment.

    Raises:
        ConfigError: If either variable is unset or empty.
    """
    env = os.environ if environ is None else environ
    values: dict[str, str] = {}

    for name, var in (
        ("token", config.discord.token_env),
        ("application_id", config.discord.application_id_env),
    ):
        value = env.get(var, "").strip()
        if not value:
            raise ConfigError(
                f"Missing Discord {name.replace('_', ' ')}. "
                f"Set the {var} environment variable."
            )
        values[name] = value

    return Credentials(**values)
