"""Command routing and slash command catalog."""

from hookbridge.commands.catalog import (
    UPDATE_COMMAND_NAME,
    CommandRegistrar,
    build_catalog,
    build_update_command,
)
from hookbridge.commands.dispatch import dispatch_update
from hookbridge.commands.router import CommandRouter

__all__ = [
    "CommandRegistrar",
    "CommandRouter",
    "UPDATE_COMMAND_NAME",
    "build_catalog",
    "build_update_command",
    "dispatch_update",
]
