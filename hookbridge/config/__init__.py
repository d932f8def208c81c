"""Configuration loading and validation."""

from hookbridge.config.loader import (
    DEFAULT_CONFIG,
    DEFAULTS_DIR,
    Credentials,
    build_routes,
    load_config,
    resolve_credentials,
)
from hookbridge.config.schema import Config, DiscordConfig, TableConfig, WebhookConfig

__all__ = [
    "Config",
    "Credentials",
    "DEFAULT_CONFIG",
    "DEFAULTS_DIR",
    "DiscordConfig",
    "TableConfig",
    "WebhookConfig",
    "build_routes",
    "load_config",
    "resolve_credentials",
]
